"""Remote data types built on a Key handle."""

from .hyperloglog import HyperLogLog
from .lists import List
from .sets import Set

__all__ = ["HyperLogLog", "List", "Set"]
