from typing import Tuple, Optional


# secp256k1 curve parameters
SECP256K1_P = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_Gx = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
SECP256K1_Gy = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8
SECP256K1_G = (SECP256K1_Gx, SECP256K1_Gy)

Point = Tuple[int, int]


def _modinv(a: int, m: int) -> int:
    """Modular multiplicative inverse."""
    a = a % m
    if a == 0:
        raise ValueError("Modular inverse does not exist")
    return pow(a, -1, m)


def _point_add(p1: Optional[Point], p2: Optional[Point]) -> Optional[Point]:
    """Add two points on secp256k1 curve. None is the point at infinity."""
    if p1 is None:
        return p2
    if p2 is None:
        return p1

    x1, y1 = p1
    x2, y2 = p2

    if x1 == x2 and (y1 + y2) % SECP256K1_P == 0:
        return None

    if x1 == x2:
        m = (3 * x1 * x1 * _modinv(2 * y1, SECP256K1_P)) % SECP256K1_P
    else:
        m = ((y2 - y1) * _modinv(x2 - x1, SECP256K1_P)) % SECP256K1_P

    x3 = (m * m - x1 - x2) % SECP256K1_P
    y3 = (m * (x1 - x3) - y1) % SECP256K1_P
    return (x3, y3)


def _point_multiply(k: int, point: Optional[Point] = None) -> Optional[Point]:
    """Multiply point by scalar on secp256k1 curve."""
    if point is None:
        point = SECP256K1_G

    result = None
    addend = point

    while k:
        if k & 1:
            result = _point_add(result, addend)
        addend = _point_add(addend, addend)
        k >>= 1

    return result


def is_on_curve(point: Optional[Point]) -> bool:
    if point is None:
        return False
    x, y = point
    if not (0 <= x < SECP256K1_P and 0 <= y < SECP256K1_P):
        return False
    return (y * y - x * x * x - 7) % SECP256K1_P == 0


def lift_x(x: int, odd: bool) -> Optional[Point]:
    """Return the curve point with the given x and y parity, or None."""
    if not 0 <= x < SECP256K1_P:
        return None
    y_sq = (pow(x, 3, SECP256K1_P) + 7) % SECP256K1_P
    y = pow(y_sq, (SECP256K1_P + 1) // 4, SECP256K1_P)
    if (y * y) % SECP256K1_P != y_sq:
        return None
    if (y & 1) != int(odd):
        y = SECP256K1_P - y
    return (x, y)


class PublicKey:
    """A secp256k1 public key together with the serialization form it is used in"""

    __slots__ = ('point', 'compressed')

    def __init__(self, point: Point, compressed: bool = True):
        if not is_on_curve(point):
            raise ValueError("Point is not on secp256k1")
        self.point = point
        self.compressed = compressed

    @classmethod
    def from_bytes(cls, data: bytes) -> "PublicKey":
        """Parse a 33-byte compressed or 65-byte uncompressed SEC1 encoding"""
        if len(data) == 33 and data[0] in (0x02, 0x03):
            point = lift_x(int.from_bytes(data[1:], 'big'), data[0] == 0x03)
            if point is None:
                raise ValueError("Invalid compressed public key")
            return cls(point, compressed=True)
        if len(data) == 65 and data[0] == 0x04:
            point = (int.from_bytes(data[1:33], 'big'), int.from_bytes(data[33:], 'big'))
            return cls(point, compressed=False)
        raise ValueError(f"Invalid public key encoding ({len(data)} bytes)")

    def serialize(self, compressed: Optional[bool] = None) -> bytes:
        if compressed is None:
            compressed = self.compressed
        x, y = self.point
        if compressed:
            prefix = b'\x02' if y % 2 == 0 else b'\x03'
            return prefix + x.to_bytes(32, 'big')
        return b'\x04' + x.to_bytes(32, 'big') + y.to_bytes(32, 'big')

    def hex(self) -> str:
        return self.serialize().hex()

    def __eq__(self, other):
        if not isinstance(other, PublicKey):
            return NotImplemented
        return self.point == other.point and self.compressed == other.compressed

    def __hash__(self):
        return hash((self.point, self.compressed))

    def __repr__(self):
        return f"PublicKey({self.hex()})"
