"""
msgverify - BIP-0137 Bitcoin signed message verification.

    >>> from msgverify import verify_message
    >>> verify_message("194vDb9xwY6XQi5bLa7FRPBewJdUqympZ9",
    ...                "Hello, Bitcoin testing!",
    ...                "IOeVH/0KqgmS3XKwqCJiwlcHonwxKMQN6fbOW5UsXSDZB4EGCVTXx6c+ZU/Ae5qO94MSBZn2aPOiUsupRIwBaAU=")
    True
"""

__version__ = "1.0.0"

from msgverify.errors import (
    VerifyError,
    EmptyAddress,
    EmptyMessage,
    EmptySignature,
    EmptyPublicKey,
    InvalidPublicKey,
    InvalidEncoding,
    MalformedSignature,
    RecoveryFailure,
    UnsupportedAddressClass,
    AddressMismatch,
    VerificationInterrupted,
    Timeout,
    Cancelled,
)
from msgverify.bitcoin.config import (
    NetworkParams,
    MAINNET,
    TESTNET,
    SIGNET,
    REGTEST,
    get_network,
)
from msgverify.bitcoin.addresses import derive_address, derive_addresses
from msgverify.crypto.ecc import PublicKey
from msgverify.verify import (
    CancelToken,
    SignedMessage,
    Verifier,
    run_with_deadline,
    verify_message,
    verify_message_with_pubkey,
    verify_with_deadline,
)

__all__ = [
    "__version__",
    # errors
    "VerifyError",
    "EmptyAddress",
    "EmptyMessage",
    "EmptySignature",
    "EmptyPublicKey",
    "InvalidPublicKey",
    "InvalidEncoding",
    "MalformedSignature",
    "RecoveryFailure",
    "UnsupportedAddressClass",
    "AddressMismatch",
    "VerificationInterrupted",
    "Timeout",
    "Cancelled",
    # networks
    "NetworkParams",
    "MAINNET",
    "TESTNET",
    "SIGNET",
    "REGTEST",
    "get_network",
    # keys and addresses
    "PublicKey",
    "derive_address",
    "derive_addresses",
    # verification
    "CancelToken",
    "SignedMessage",
    "Verifier",
    "run_with_deadline",
    "verify_message",
    "verify_message_with_pubkey",
    "verify_with_deadline",
]
