import hashlib

from Crypto.Hash import RIPEMD160


def sha256(data: bytes) -> bytes:
    """Single SHA256 hash"""
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """Double SHA256 hash (Bitcoin standard)"""
    return sha256(sha256(data))


def ripemd160(data: bytes) -> bytes:
    """RIPEMD160 hash (pycryptodome, OpenSSL 3 builds often lack it)"""
    return RIPEMD160.new(data).digest()


def hash160(data: bytes) -> bytes:
    """HASH160: SHA256 followed by RIPEMD160"""
    return ripemd160(sha256(data))
