"""Shared error code constants for RPC message handling.

These constants are stable, machine-readable identifiers attached to every
``RpcMessageError`` so callers can branch on failure kind without parsing
human-readable messages.
"""

# Structural validation
MALFORMED_MESSAGE_TUPLE = "MALFORMED_MESSAGE_TUPLE"
MESSAGE_TUPLE_ARITY = "MESSAGE_TUPLE_ARITY"

# Slot type validation
INVALID_SLOT_TYPE = "INVALID_SLOT_TYPE"
UNKNOWN_MESSAGE_TYPE = "UNKNOWN_MESSAGE_TYPE"

# Remote failures carried as data
REMOTE_EXCEPTION = "REMOTE_EXCEPTION"
