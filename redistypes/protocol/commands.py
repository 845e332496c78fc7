"""
Protocol Command Definitions

This module defines the command verbs issued to the remote store and the
small enums used as command arguments.

Commands (verb, arguments after the key, reply):
    EXISTS      key                          -> integer 0/1
    DEL         key                          -> integer 0/1
    EXPIRE      key seconds                  -> integer 0/1
    PEXPIRE     key millis                   -> integer 0/1
    PERSIST     key                          -> integer 0/1
    RENAME      key newkey                   -> +OK | -ERR
    RENAMENX    key newkey                   -> integer 0/1
    LPUSH/RPUSH key value [value ...]        -> new length
    LPUSHX/RPUSHX key value                  -> new length | 0
    LPOP/RPOP   key                          -> value | nil
    BLPOP/BRPOP key seconds                  -> [key, value] | nil
    RPOPLPUSH   key dest                     -> value | nil
    BRPOPLPUSH  key dest seconds             -> value | nil
    LRANGE      key start stop               -> array
    LINDEX      key index                    -> value | nil
    LINSERT     key BEFORE|AFTER pivot value -> new length | -1 | 0
    LLEN        key                          -> length
    LSET        key index value              -> +OK | -ERR
    LREM        key count value              -> number removed
    SADD        key member [member ...]      -> number added
    SCARD       key                          -> cardinality
    PFADD       key item [item ...]          -> integer 0/1
    PFCOUNT     key                          -> estimated count
    PFMERGE     dest source [source ...]     -> +OK
"""

from enum import Enum


class Command(Enum):
    """Enumeration of the command verbs sent to the remote store."""
    # Keys
    EXISTS = "EXISTS"
    DEL = "DEL"
    EXPIRE = "EXPIRE"
    PEXPIRE = "PEXPIRE"
    PERSIST = "PERSIST"
    RENAME = "RENAME"
    RENAMENX = "RENAMENX"

    # Lists
    LPUSH = "LPUSH"
    RPUSH = "RPUSH"
    LPUSHX = "LPUSHX"
    RPUSHX = "RPUSHX"
    LPOP = "LPOP"
    RPOP = "RPOP"
    BLPOP = "BLPOP"
    BRPOP = "BRPOP"
    RPOPLPUSH = "RPOPLPUSH"
    BRPOPLPUSH = "BRPOPLPUSH"
    LRANGE = "LRANGE"
    LINDEX = "LINDEX"
    LINSERT = "LINSERT"
    LLEN = "LLEN"
    LSET = "LSET"
    LREM = "LREM"

    # Sets
    SADD = "SADD"
    SCARD = "SCARD"

    # HyperLogLog
    PFADD = "PFADD"
    PFCOUNT = "PFCOUNT"
    PFMERGE = "PFMERGE"

    @property
    def is_blocking(self) -> bool:
        """Check if the remote side may hold the reply open for this verb."""
        return self in BLOCKING_COMMANDS


# Verbs whose reply may be delayed server-side until an element arrives
BLOCKING_COMMANDS = frozenset({Command.BLPOP, Command.BRPOP, Command.BRPOPLPUSH})


class Adjacency(Enum):
    """Where LINSERT places the new value relative to the pivot."""
    BEFORE = "BEFORE"
    AFTER = "AFTER"
