from __future__ import annotations

from functools import cached_property
from typing import NamedTuple, Optional, Tuple

from .field import fe, minus1, one, p, sqrt_ratio, zero
from .scalar import L
from .util import tobytes, tointsign

# Twisted Edwards curve: a x2 + y2 = 1 + d x2 y2
# Ed25519 constants: a = -1 (built into the formulas) and d
d = -fe(121665) / fe(121666)
d2 = d + d

# Points are represented as tuples (X, Y, Z, T) of extended
# coordinates, with x = X/Z, y = Y/Z, x*y = T/Z


class Cached(NamedTuple):
  """A point prepared for addition: (Y+X, Y-X, Z, 2dT)"""
  YplusX: fe
  YminusX: fe
  Z: fe
  T2d: fe

  def __neg__(self) -> Cached:
    return Cached(self.YminusX, self.YplusX, self.Z, -self.T2d)

  @staticmethod
  def cmov(c1: Cached, c2: Cached, flag) -> Cached:
    return Cached(*(fe.cmov(u, v, flag) for u, v in zip(c1, c2)))


class EdPoint:
  def __init__(self, x: fe, y: fe, z: fe = one, t: Optional[fe] = None):
    # Expand to projective coordinates for faster adds
    self.X = x
    self.Y = y
    self.Z = z
    self.T = x * y if t is None else t

  @staticmethod
  def from_bytes(b) -> EdPoint:
    """
    Decode a standard Ed25519 point encoding.

    Raises ValueError if the encoding is not canonical (y >= p, or x = 0 with the
    sign bit set) or if there is no curve point with the given y.
    """
    if len(b) != 32: raise ValueError("Ed25519 point must be 32 bytes")
    val, sign = tointsign(bytes(b))
    if val >= p: raise ValueError("Non-canonical point encoding")
    return EdPoint.from_y(fe(val), sign)

  @staticmethod
  def from_y(y: fe, negative=False) -> EdPoint:
    """Restore from a y coordinate and an is_negative flag"""
    # x^2 = (y^2 - 1) / (d y^2 + 1)
    was_square, x = sqrt_ratio(y.sq - one, d * y.sq + one)
    if not was_square: raise ValueError("Not a curve point on Ed25519")
    if x.is_zero and negative: raise ValueError("Non-canonical point encoding")
    return EdPoint(fe.cmov(x, -x, x.is_negative ^ negative), y)

  def __repr__(self): return point_name(self)
  def __str__(self): return bytes(self).hex()
  def __bytes__(self): return tobytes(self.y.val + (self.is_negative << 255))
  def __hash__(self): return hash(bytes(self))

  @cached_property
  def zinv(self) -> fe: return self.Z.inv

  @cached_property
  def x(self) -> fe: return self.X * self.zinv

  @cached_property
  def y(self) -> fe: return self.Y * self.zinv

  @cached_property
  def is_negative(self) -> bool:
    """Return the parity of the x coordinate, aka the sign."""
    return self.x.is_negative

  @cached_property
  def is_low_order(self) -> bool:
    """True for the eight points of order dividing the cofactor"""
    return self.mul8 == ZERO

  @cached_property
  def is_on_curve(self) -> bool:
    # -X^2 Z^2 + Y^2 Z^2 = Z^4 + d X^2 Y^2  and  X Y = T Z
    X2, Y2, Z2 = self.X.sq, self.Y.sq, self.Z.sq
    return ((Y2 - X2) * Z2 == Z2.sq + d * X2 * Y2) & (self.X * self.Y == self.T * self.Z)

  @cached_property
  def cached(self) -> Cached:
    return Cached(self.Y + self.X, self.Y - self.X, self.Z, self.T * d2)

  def add_cached(self, c: Cached) -> EdPoint:
    """Complete addition formula for a = -1 (RFC 8032, 5.1.4)"""
    A = (self.Y - self.X) * c.YminusX
    B = (self.Y + self.X) * c.YplusX
    C = self.T * c.T2d
    D = self.Z * c.Z
    D = D + D
    E, F, G, H = B - A, D - C, D + C, B + A
    return EdPoint(E * F, G * H, F * G, E * H)

  def __add__(self, othr: EdPoint) -> EdPoint:
    if not isinstance(othr, EdPoint): return NotImplemented
    return self.add_cached(othr.cached)

  def __sub__(self, othr: EdPoint) -> EdPoint:
    return self + -othr

  def __neg__(self) -> EdPoint:
    return EdPoint(-self.X, self.Y, self.Z, -self.T)

  def double(self) -> EdPoint:
    """Dedicated doubling (RFC 8032, 5.1.4)"""
    A = self.X.sq
    B = self.Y.sq
    C = self.Z.sq
    C = C + C
    H = A + B
    E = H - (self.X + self.Y).sq
    G = A - B
    F = C + G
    return EdPoint(E * F, G * H, F * G, E * H)

  @cached_property
  def mul8(self) -> EdPoint:
    """Multiply by the cofactor"""
    return self.double().double().double()

  def __mul__(self, s: int) -> EdPoint:
    """
    Multiply the point by a public scalar.

    Variable time: only to be used where both the point and the scalar are
    public (signature verification). Use scalarmult_base for secrets.
    """
    if not isinstance(s, int): return NotImplemented
    Q = ZERO  # Neutral element
    P = self
    # Modulo s first to make multiplication faster (8 * L rather than L to support non-prime subgroups)
    s %= 8 * L
    while s > 0:
      if s & 1: Q += P
      P = P.double()
      s >>= 1
    return Q

  def __rmul__(self, s: int) -> EdPoint:
    return self * s

  def __eq__(self, othr):
    if not isinstance(othr, EdPoint): raise TypeError(f"EdPoints cannot be compared with {type(othr)}")
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    # Both coordinates are always compared (no short-circuit)
    return (
      (self.X * othr.Z - othr.X * self.Z).is_zero &
      (self.Y * othr.Z - othr.Y * self.Z).is_zero
    )


# Neutral element
ZERO = EdPoint(zero, one)
CACHED_ZERO = ZERO.cached

# Base point (prime group generator), y = 4/5 with a positive x
G = EdPoint.from_bytes(bytes(fe(4) / fe(5)))

# Low order generator
LG = EdPoint.from_y((minus1 * ((d + one).sqrt + one) / d).sqrt)

# All low order points (index i is i * LG)
LO = [i * LG for i in range(8)]


def _table() -> Tuple[Tuple[Cached, ...], ...]:
  """Rows j = 0..31 hold the multiples k * 256^j * G for k = 1..8"""
  rows = []
  P = G
  for _ in range(32):
    row = []
    Q = P
    for _ in range(8):
      row.append(Q.cached)
      Q = Q + P
    rows.append(tuple(row))
    for _ in range(8): P = P.double()
  return tuple(rows)

# Built once, read-only afterwards
BASE_TABLE = _table()


def select(row: Tuple[Cached, ...], b: int) -> Cached:
  """
  Return b * 256^j * G from a table row for -8 <= b <= 8.

  Every entry of the row is read and combined by masking, so the memory access
  pattern does not depend on b.
  """
  bneg = b >> 7 & 1
  babs = b - ((-bneg & b) << 1)
  t = CACHED_ZERO
  for k, entry in enumerate(row, 1):
    t = Cached.cmov(t, entry, (babs ^ k) - 1 >> 63 & 1)
  return Cached.cmov(t, -t, bneg)


def radix16(k: int) -> list:
  """Signed radix-16 digits -8..8 of a scalar below 2^255, least significant first"""
  e = []
  for i in range(32):
    byte = k >> 8 * i & 255
    e += [byte & 15, byte >> 4]
  carry = 0
  for i in range(63):
    e[i] += carry
    carry = e[i] + 8 >> 4
    e[i] -= carry << 4
  e[63] += carry
  return e


def scalarmult_base(k: int) -> EdPoint:
  """
  Multiply the base point G by a secret scalar k < 2^255.

  The same sequence of field operations and table reads is executed for any k.
  """
  if k >> 255: raise ValueError("Scalar too large for fixed base multiplication")
  e = radix16(k)
  h = ZERO
  for i in range(1, 64, 2):
    h = h.add_cached(select(BASE_TABLE[i // 2], e[i]))
  h = h.double().double().double().double()
  for i in range(0, 64, 2):
    h = h.add_cached(select(BASE_TABLE[i // 2], e[i]))
  return h


def point_name(P: EdPoint) -> str:
  """Return variable names rather than xy coordinates for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, EdPoint) and P == val:
      return name
  for i, val in enumerate(LO):
    if P == val:
      return f"LO[{i}]"
  return f"EdPoint({P.x!r}, {P.y!r})"
