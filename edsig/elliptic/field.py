from __future__ import annotations

from functools import cached_property
from hmac import compare_digest
from typing import Tuple

# Field prime
p = 2**255 - 19

# Elements are stored as five limbs in radix 2^51. Limbs are unsigned and may
# exceed 51 bits between operations, carries are propagated after each
# multiplication, addition and subtraction so that they never grow unbounded.
MASK = (1 << 51) - 1

# 4p in limb form, added before subtraction to keep all limbs non-negative
P4 = (4 * (MASK - 18), 4 * MASK, 4 * MASK, 4 * MASK, 4 * MASK)

Limbs = Tuple[int, int, int, int, int]


def _carry(h0: int, h1: int, h2: int, h3: int, h4: int) -> Limbs:
  c = h0 >> 51; h0 &= MASK; h1 += c
  c = h1 >> 51; h1 &= MASK; h2 += c
  c = h2 >> 51; h2 &= MASK; h3 += c
  c = h3 >> 51; h3 &= MASK; h4 += c
  c = h4 >> 51; h4 &= MASK; h0 += 19 * c
  c = h0 >> 51; h0 &= MASK; h1 += c
  return h0, h1, h2, h3, h4


def _freeze(h: Limbs) -> Limbs:
  """Fully reduce into the canonical range 0..p-1"""
  h0, h1, h2, h3, h4 = _carry(*h)
  # q is 1 if h >= p, else 0
  q = (h0 + 19) >> 51
  q = (h1 + q) >> 51
  q = (h2 + q) >> 51
  q = (h3 + q) >> 51
  q = (h4 + q) >> 51
  h0 += 19 * q
  c = h0 >> 51; h0 &= MASK; h1 += c
  c = h1 >> 51; h1 &= MASK; h2 += c
  c = h2 >> 51; h2 &= MASK; h3 += c
  c = h3 >> 51; h3 &= MASK; h4 += c
  h4 &= MASK  # Drop 2^255
  return h0, h1, h2, h3, h4


class fe:
  """A prime field element modulo p = 2^255 - 19"""
  def __init__(self, x: int = 0):
    x %= p
    self.v: Limbs = (x & MASK, x >> 51 & MASK, x >> 102 & MASK, x >> 153 & MASK, x >> 204)

  @staticmethod
  def limbs(v: Limbs) -> fe:
    """Wrap limbs without any reduction (internal results)"""
    f = fe.__new__(fe)
    f.v = v
    return f

  @staticmethod
  def from_bytes(b: bytes) -> fe:
    """Read 32 bytes little endian, ignoring the high bit. Values up to 2^255-1 are accepted."""
    if len(b) != 32: raise ValueError("Field element must be 32 bytes")
    x = int.from_bytes(b, "little") & (1 << 255) - 1
    return fe.limbs((x & MASK, x >> 51 & MASK, x >> 102 & MASK, x >> 153 & MASK, x >> 204))

  def __repr__(self): return value_name(self)
  def __str__(self): return bytes(self).hex()
  def __hash__(self): return hash(bytes(self))

  def __bytes__(self):
    h0, h1, h2, h3, h4 = _freeze(self.v)
    return (h0 | h1 << 51 | h2 << 102 | h3 << 153 | h4 << 204).to_bytes(32, "little")

  @cached_property
  def val(self) -> int:
    """The canonical integer value"""
    return int.from_bytes(bytes(self), "little")

  def __eq__(self, other):
    if not isinstance(other, fe): raise TypeError(f"Cannot compare fe with {other!r}")
    return compare_digest(bytes(self), bytes(other))

  def __add__(self, o: fe) -> fe:
    a, b = self.v, o.v
    return fe.limbs(_carry(a[0] + b[0], a[1] + b[1], a[2] + b[2], a[3] + b[3], a[4] + b[4]))

  def __sub__(self, o: fe) -> fe:
    a, b = self.v, o.v
    return fe.limbs(_carry(
      a[0] + P4[0] - b[0],
      a[1] + P4[1] - b[1],
      a[2] + P4[2] - b[2],
      a[3] + P4[3] - b[3],
      a[4] + P4[4] - b[4],
    ))

  def __neg__(self) -> fe: return zero - self
  def __abs__(self) -> fe: return fe.cmov(self, -self, self.is_negative)

  def __mul__(self, o: fe) -> fe:
    a0, a1, a2, a3, a4 = self.v
    b0, b1, b2, b3, b4 = o.v
    # Products above 2^255 wrap around with a factor of 19
    b1_19, b2_19, b3_19, b4_19 = 19 * b1, 19 * b2, 19 * b3, 19 * b4
    return fe.limbs(_carry(
      a0 * b0 + a1 * b4_19 + a2 * b3_19 + a3 * b2_19 + a4 * b1_19,
      a0 * b1 + a1 * b0 + a2 * b4_19 + a3 * b3_19 + a4 * b2_19,
      a0 * b2 + a1 * b1 + a2 * b0 + a3 * b4_19 + a4 * b3_19,
      a0 * b3 + a1 * b2 + a2 * b1 + a3 * b0 + a4 * b4_19,
      a0 * b4 + a1 * b3 + a2 * b2 + a3 * b1 + a4 * b0,
    ))

  def __truediv__(self, o: fe) -> fe:
    """Division mod p"""
    return self * o.inv

  @cached_property
  def sq(self) -> fe:
    """Squared"""
    return self * self

  def sqn(self, n: int) -> fe:
    """Square n times"""
    x = self
    for _ in range(n): x = x.sq
    return x

  @cached_property
  def inv(self) -> fe:
    """Inverse as x^(p-2), zero for zero"""
    t, z11 = _pow2_250(self)
    return t.sqn(5) * z11  # 2^255 - 21

  @cached_property
  def pow22523(self) -> fe:
    """x^((p-5)/8)"""
    t, _ = _pow2_250(self)
    return t.sqn(2) * self  # 2^252 - 3

  @cached_property
  def is_negative(self) -> bool:
    """The low bit of the canonical encoding"""
    return bool(bytes(self)[0] & 1)

  @cached_property
  def is_zero(self) -> bool: return compare_digest(bytes(self), bytes(32))

  @cached_property
  def sqrt(self) -> fe:
    """The non-negative square root. Raises ValueError if there is none."""
    was_square, root = sqrt_ratio(self, one)
    if not was_square: raise ValueError('Not a square!')
    return abs(root)

  @staticmethod
  def cmov(a: fe, b: fe, flag) -> fe:
    """Return b if flag else a, by masking rather than branching"""
    mask = -int(flag)
    return fe.limbs(tuple(x ^ (x ^ y) & mask for x, y in zip(a.v, b.v)))  # type: ignore


def _pow2_250(z: fe) -> Tuple[fe, fe]:
  """Fixed addition chain shared by inversion and square roots, returns z^(2^250-1) and z^11"""
  z2 = z.sq
  z9 = z2.sqn(2) * z
  z11 = z9 * z2
  z2_5_0 = z11.sq * z9
  z2_10_0 = z2_5_0.sqn(5) * z2_5_0
  z2_20_0 = z2_10_0.sqn(10) * z2_10_0
  z2_40_0 = z2_20_0.sqn(20) * z2_20_0
  z2_50_0 = z2_40_0.sqn(10) * z2_10_0
  z2_100_0 = z2_50_0.sqn(50) * z2_50_0
  z2_200_0 = z2_100_0.sqn(100) * z2_100_0
  z2_250_0 = z2_200_0.sqn(50) * z2_50_0
  return z2_250_0, z11


def sqrt_ratio(u: fe, v: fe) -> Tuple[bool, fe]:
  """
  Compute sqrt(u / v) without a separate inversion.

  Returns (True, root) if u/v is a square, (False, garbage) otherwise. The sign
  of the root is not fixed. Zero u gives (True, zero).
  """
  v3 = v.sq * v
  v7 = v3.sq * v
  x = u * v3 * (u * v7).pow22523
  check = v * x.sq
  correct = check == u
  flipped = check == -u
  x = fe.cmov(x, x * sqrtm1, flipped)
  return correct | flipped, x


zero, one, minus1 = fe(0), fe(1), fe(-1)

# Square root of -1 (2^((p-1)/4) mod p)
sqrtm1 = fe(pow(2, (p - 1) // 4, p))
assert sqrtm1 * sqrtm1 == minus1


def value_name(s: fe) -> str:
  """Return variable names rather than fe(...) for any constants defined here"""
  for name, val in globals().items():
    if isinstance(val, fe) and s == val:
      return name
  for name, val in globals().items():
    if isinstance(val, fe) and s == -val:
      return f"-{name}"
  return f"fe({s.val})"
