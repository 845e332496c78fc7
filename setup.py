#!/usr/bin/env python3
"""
redistypes Setup Script
=======================
Allows installation of the redistypes package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="redistypes",
    version="1.0.0",
    description="Redis data types (lists, sets, HyperLogLogs) as Python handles",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "redis>=5.0,<8",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
