"""Exception normalization for errors that travel as message payloads."""

from __future__ import annotations


def exception_to_text(exc: BaseException) -> str:
    """Return the textual description carried by an exception response.

    The exception's own message is used when it has one; otherwise the
    exception type name stands in so the receiver never gets an empty payload.
    """
    text = str(exc)
    if text:
        return text
    return type(exc).__name__
