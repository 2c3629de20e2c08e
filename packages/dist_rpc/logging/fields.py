"""Canonical logging field names for RPC message handling.

Keeping names centralized prevents drift between the codec, the builders and
whatever transport or dispatch layer logs alongside them.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"
SERVICE = "service"

# Message fields, grouped under ``RPC`` in JSON output.
RPC = "rpc"
MESSAGE_ID = "message_id"
MESSAGE_TYPE = "message_type"
PAYLOAD_BYTES = "payload_bytes"
HANDLE_COUNT = "handle_count"

# Decode failure fields.
SLOT = "slot"
EXPECTED = "expected"
ACTUAL = "actual"
ERROR_CODE = "error_code"

MESSAGE_FIELDS = (
    MESSAGE_ID,
    MESSAGE_TYPE,
    PAYLOAD_BYTES,
    HANDLE_COUNT,
    SLOT,
    EXPECTED,
    ACTUAL,
    ERROR_CODE,
)

# Event names.
MESSAGE_DECODE_FAILURE_EVENT = "message_decode_failure"
EXCEPTION_RESPONSE_EVENT = "exception_response_created"
