"""
msgverify.verify - signed message verification and deadline handling.
"""

from msgverify.verify.cancel import (
    CancelToken,
    checkpoint,
    seconds_until,
    run_with_deadline,
)
from msgverify.verify.verifier import (
    SignedMessage,
    Verifier,
    verify_message,
    verify_message_with_pubkey,
    verify_with_deadline,
)

__all__ = [
    # cancel
    "CancelToken",
    "checkpoint",
    "seconds_until",
    "run_with_deadline",
    # verifier
    "SignedMessage",
    "Verifier",
    "verify_message",
    "verify_message_with_pubkey",
    "verify_with_deadline",
]
