from typing import Union

# Group order (the prime order subgroup of Ed25519)
L = 2**252 + 27742317777372353535851937790883648493

# Barrett reduction constants for 512-bit inputs in base 2^8 with k = 32 digits
MU = (1 << 512) // L
SHIFT1, SHIFT2 = 8 * 31, 8 * 33


def _csub(r: int) -> int:
  """Subtract L if r >= L, selected by the sign of r - L"""
  t = r - L
  return t + (L & t >> 512)


def reduce(x: Union[int, bytes]) -> int:
  """Reduce any value below 2^512 (e.g. a SHA-512 digest) modulo L"""
  if isinstance(x, (bytes, bytearray)):
    if len(x) > 64: raise ValueError("Scalar reduction input is limited to 64 bytes")
    x = int.from_bytes(x, "little")
  if x >> 512: raise ValueError("Scalar reduction input is limited to 512 bits")
  q = (x >> SHIFT1) * MU >> SHIFT2
  # 0 <= r < 3L
  r = x - q * L
  return _csub(_csub(r))


def add(a: int, b: int) -> int: return reduce(a + b)
def mul(a: int, b: int) -> int: return reduce(a * b)
def muladd(a: int, b: int, c: int) -> int:
  """(a * b + c) mod L"""
  return reduce(a * b + c)


def from_bytes(b: bytes) -> int:
  if len(b) != 32: raise ValueError("Scalar must be 32 bytes")
  return int.from_bytes(b, "little")

def to_bytes(s: int) -> bytes:
  return s.to_bytes(32, "little")


def is_canonical(b: bytes) -> bool:
  """True if the 32-byte little endian value is below L."""
  # The borrow of b - L tells the answer without an early-exit comparison
  return bool((from_bytes(b) - L) >> 256 & 1)
