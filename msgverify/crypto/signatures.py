"""
BIP-0137 signature primitives: header classification, the signed-message
digest, and secp256k1 public key recovery.
"""

from typing import NamedTuple, Union

from msgverify.crypto.hashing import sha256d
from msgverify.crypto.ecc import (
    SECP256K1_N, SECP256K1_P, SECP256K1_G,
    PublicKey, _modinv, _point_add, _point_multiply, lift_x,
)
from msgverify.errors import EmptySignature, MalformedSignature, RecoveryFailure


# Address classes a header byte can name
P2PKH = "p2pkh"
P2SH_P2WPKH = "p2sh-p2wpkh"
P2WPKH = "p2wpkh"
UNKNOWN = "unknown"

SIGNATURE_LENGTH = 65

MESSAGE_MAGIC = b'Bitcoin Signed Message:\n'

# (first header byte, last header byte, class, compressed)
_HEADER_RANGES = (
    (27, 30, P2PKH, False),
    (31, 34, P2PKH, True),
    (35, 38, P2SH_P2WPKH, True),
    (39, 42, P2WPKH, True),
)


class DecodedSignature(NamedTuple):
    header: int
    recovery_id: int
    compressed: bool
    address_class: str
    r: bytes
    s: bytes


def describe_address_class(address_class: str, compressed: bool) -> str:
    """Human label for diagnostics, e.g. 'P2PKH (compressed)'"""
    if address_class == P2PKH:
        return "P2PKH (compressed)" if compressed else "P2PKH (uncompressed)"
    if address_class == P2SH_P2WPKH:
        return "P2SH-P2WPKH (SegWit over P2SH)"
    if address_class == P2WPKH:
        return "P2WPKH (native SegWit)"
    return "Unknown"


def classify_signature(sig: bytes, logger=None) -> DecodedSignature:
    """
    Split a 65-byte compact signature into header fields and R/S.

    Header bytes outside 27..42 classify as UNKNOWN rather than failing;
    later stages decide whether that is fatal.
    """
    if not sig:
        raise EmptySignature()
    if len(sig) != SIGNATURE_LENGTH:
        raise MalformedSignature(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(sig)}")

    header = sig[0]
    address_class, compressed = UNKNOWN, False
    for low, high, cls, comp in _HEADER_RANGES:
        if low <= header <= high:
            address_class, compressed = cls, comp
            break

    # Offset within the four-value block: 27 + recid (+4, +8, +12 per class)
    recovery_id = (header - 27) & 0x03

    decoded = DecodedSignature(
        header=header,
        recovery_id=recovery_id,
        compressed=compressed,
        address_class=address_class,
        r=bytes(sig[1:33]),
        s=bytes(sig[33:65]),
    )

    if logger is not None:
        if address_class == UNKNOWN:
            logger.warning("Unknown signature header byte: 0x%02x", header)
        logger.debug("Signature header byte: 0x%02x", header)
        logger.debug("  Address type: %s", describe_address_class(address_class, compressed))
        logger.debug("  Compressed public key: %s", compressed)
        logger.debug("  Recovery ID: %d", recovery_id)

    return decoded


def compact_size(n: int) -> bytes:
    """Encode integer as Bitcoin CompactSize"""
    if n < 0:
        raise ValueError("CompactSize cannot encode negative values")
    if n < 0xfd:
        return bytes([n])
    elif n <= 0xffff:
        return b'\xfd' + n.to_bytes(2, 'little')
    elif n <= 0xffffffff:
        return b'\xfe' + n.to_bytes(4, 'little')
    else:
        return b'\xff' + n.to_bytes(8, 'little')


def format_message(message: str) -> bytes:
    """
    Serialize a message the way Bitcoin Core does before signing.

    Format: CompactSize(len(magic)) || magic || CompactSize(len(msg)) || msg
    """
    msg_bytes = message.encode('utf-8')
    return (
        compact_size(len(MESSAGE_MAGIC)) + MESSAGE_MAGIC
        + compact_size(len(msg_bytes)) + msg_bytes
    )


def message_hash(message: str) -> bytes:
    """Double-SHA256 of the formatted message, the digest that gets signed"""
    return sha256d(format_message(message))


def _as_int(value: Union[int, bytes]) -> int:
    if isinstance(value, (bytes, bytearray)):
        return int.from_bytes(value, 'big')
    return value


def verify_ecdsa(msg_hash: bytes, r: int, s: int, point) -> bool:
    """Check the ECDSA equation for (r, s) against a public key point"""
    if not (0 < r < SECP256K1_N and 0 < s < SECP256K1_N):
        return False
    e = int.from_bytes(msg_hash, 'big')
    w = _modinv(s, SECP256K1_N)
    u1 = (e * w) % SECP256K1_N
    u2 = (r * w) % SECP256K1_N
    X = _point_add(_point_multiply(u1, SECP256K1_G), _point_multiply(u2, point))
    if X is None:
        return False
    return X[0] % SECP256K1_N == r


def recover_public_key(msg_hash: bytes, recovery_id: int, r: Union[int, bytes],
                       s: Union[int, bytes], compressed: bool = True) -> PublicKey:
    """
    Recover the signing public key from an ECDSA signature (SEC1 4.1.6).

    ``compressed`` only selects how the returned key serializes.
    """
    r = _as_int(r)
    s = _as_int(s)

    if len(msg_hash) != 32:
        raise RecoveryFailure("message hash must be 32 bytes")
    if not 0 <= recovery_id <= 3:
        raise RecoveryFailure(f"recovery id out of range: {recovery_id}")
    if not 0 < r < SECP256K1_N:
        raise RecoveryFailure("R is not in [1, n-1]")
    if not 0 < s < SECP256K1_N:
        raise RecoveryFailure("S is not in [1, n-1]")

    x = r + (recovery_id >> 1) * SECP256K1_N
    if x >= SECP256K1_P:
        raise RecoveryFailure("R + n overflows the field for this recovery id")

    R = lift_x(x, odd=bool(recovery_id & 1))
    if R is None:
        raise RecoveryFailure("R is not the x coordinate of a curve point")

    # Q = r^-1 (sR - eG)
    e = int.from_bytes(msg_hash, 'big') % SECP256K1_N
    r_inv = _modinv(r, SECP256K1_N)
    u1 = (-e * r_inv) % SECP256K1_N
    u2 = (s * r_inv) % SECP256K1_N
    Q = _point_add(_point_multiply(u1, SECP256K1_G), _point_multiply(u2, R))

    if Q is None:
        raise RecoveryFailure("recovered point is at infinity")
    if not verify_ecdsa(msg_hash, r, s, Q):
        raise RecoveryFailure("recovered key does not satisfy the signature")

    return PublicKey(Q, compressed=compressed)
