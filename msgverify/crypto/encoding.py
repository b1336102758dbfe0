import base64
import binascii
from typing import Tuple, List

from msgverify.crypto.hashing import sha256d


B58_ALPHABET = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'

BECH32_CHARSET = 'qpzry9x8gf2tvdw0s3jn54khce6mua7l'


def b64decode_strict(data: str) -> bytes:
    """Decode standard-alphabet base64, rejecting stray characters and bad padding"""
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64: {e}") from e


def b58encode(data: bytes) -> str:
    """Base58 encode (no checksum)"""
    n = int.from_bytes(data, 'big')
    result = ''
    while n > 0:
        n, r = divmod(n, 58)
        result = B58_ALPHABET[r] + result
    for byte in data:
        if byte == 0:
            result = '1' + result
        else:
            break
    return result or '1'


def b58decode(text: str) -> bytes:
    """Base58 decode (no checksum)"""
    n = 0
    for c in text:
        idx = B58_ALPHABET.find(c)
        if idx == -1:
            raise ValueError(f"Invalid Base58 character: {c!r}")
        n = n * 58 + idx
    body = n.to_bytes((n.bit_length() + 7) // 8, 'big') if n else b''
    pad = len(text) - len(text.lstrip('1'))
    return b'\x00' * pad + body


def b58check_encode(version: bytes, payload: bytes) -> str:
    """Base58Check encode with version byte and checksum"""
    data = version + payload
    checksum = sha256d(data)[:4]
    return b58encode(data + checksum)


def b58check_decode(addr: str) -> Tuple[bytes, bytes]:
    """Base58Check decode, returns (version, payload)"""
    data = b58decode(addr)
    if len(data) < 5:
        raise ValueError("Base58Check data too short")
    version, payload, checksum = data[0:1], data[1:-4], data[-4:]
    if sha256d(version + payload)[:4] != checksum:
        raise ValueError("Invalid Base58Check checksum")
    return version, payload


def bech32_polymod(values: List[int]) -> int:
    """Bech32 checksum computation"""
    GEN = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for v in values:
        b = chk >> 25
        chk = ((chk & 0x1ffffff) << 5) ^ v
        for i in range(5):
            chk ^= GEN[i] if ((b >> i) & 1) else 0
    return chk


def bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand HRP for checksum computation"""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def bech32_create_checksum(hrp: str, data: List[int]) -> List[int]:
    """Create Bech32 checksum"""
    values = bech32_hrp_expand(hrp) + data
    polymod = bech32_polymod(values + [0, 0, 0, 0, 0, 0]) ^ 1
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def bech32_verify_checksum(hrp: str, data: List[int]) -> bool:
    return bech32_polymod(bech32_hrp_expand(hrp) + data) == 1


def bech32_encode(hrp: str, data: List[int]) -> str:
    """Encode to Bech32"""
    combined = data + bech32_create_checksum(hrp, data)
    return hrp + '1' + ''.join([BECH32_CHARSET[d] for d in combined])


def bech32_decode(addr: str) -> Tuple[str, int, bytes]:
    """Decode segwit v0 Bech32 address, returns (hrp, witness_version, witness_program)"""
    if addr.lower() != addr and addr.upper() != addr:
        raise ValueError("Mixed-case Bech32 string")
    addr = addr.lower()
    pos = addr.rfind('1')
    if pos < 1 or pos + 7 > len(addr):
        raise ValueError("Invalid Bech32 separator position")
    hrp = addr[:pos]
    try:
        data = [BECH32_CHARSET.index(c) for c in addr[pos + 1:]]
    except ValueError:
        raise ValueError("Invalid Bech32 character") from None
    if not bech32_verify_checksum(hrp, data):
        raise ValueError("Invalid Bech32 checksum")
    witness_version = data[0]
    witness_program = convertbits(data[1:-6], 5, 8, pad=False)
    return hrp, witness_version, bytes(witness_program)


def segwit_encode(hrp: str, witness_version: int, witness_program: bytes) -> str:
    """Encode a segwit v0 output as a Bech32 address"""
    return bech32_encode(hrp, [witness_version] + convertbits(witness_program, 8, 5))


def convertbits(data: List[int], frombits: int, tobits: int, pad: bool = True) -> List[int]:
    """Convert between bit widths"""
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    for value in data:
        acc = (acc << frombits) | value
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)
    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    return ret
