"""
Verification error types.

Every failure carries a stable ``code`` so callers (and the CLI) can branch on
it without parsing messages. ``VerificationInterrupted`` subclasses mark the
retryable outcomes.
"""

from typing import Optional


class VerifyError(Exception):
    """Base class for signed-message verification failures"""
    code = "verify_error"
    default_message = "signature verification failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class EmptyAddress(VerifyError):
    code = "empty_address"
    default_message = "empty bitcoin address"


class EmptyMessage(VerifyError):
    code = "empty_message"
    default_message = "empty message"


class EmptySignature(VerifyError):
    code = "empty_signature"
    default_message = "empty signature"


class EmptyPublicKey(VerifyError):
    code = "empty_public_key"
    default_message = "empty public key"


class InvalidPublicKey(VerifyError):
    code = "invalid_public_key"
    default_message = "invalid public key"


class InvalidEncoding(VerifyError):
    code = "invalid_encoding"
    default_message = "invalid base64 signature"


class MalformedSignature(VerifyError):
    code = "malformed_signature"
    default_message = "signature must be 65 bytes"


class RecoveryFailure(VerifyError):
    code = "recovery_failure"
    default_message = "public key recovery failed"


class UnsupportedAddressClass(VerifyError):
    code = "unsupported_address_class"
    default_message = "signature header does not name a supported address type"


class AddressMismatch(VerifyError):
    """Derived address differs from the claim. Reported to callers as False."""
    code = "address_mismatch"
    default_message = "derived address does not match"


class VerificationInterrupted(VerifyError):
    """Verification stopped waiting before a verdict was reached"""
    code = "interrupted"
    default_message = "signature verification interrupted"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason
        message = self.default_message
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class Timeout(VerificationInterrupted):
    code = "timeout"
    default_message = "signature verification timed out"


class Cancelled(VerificationInterrupted):
    code = "cancelled"
    default_message = "signature verification cancelled"
