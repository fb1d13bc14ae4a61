from secrets import token_bytes
from typing import Callable, NamedTuple, Tuple

from ..exceptions import InvalidKeyLength
from .ed import scalarmult_base
from .util import shabytes, toint


def clamp(x: int) -> int:
  """Clear the three low bits and bit 255, set bit 254 (RFC 8032, 5.1.5)"""
  # A multiple of the cofactor with a fixed bit length
  return x & (1 << 255) - 8 | 1 << 254


class ExpandedKey(NamedTuple):
  """Secret scalar, nonce prefix and public key, all derived from a seed"""
  a: int
  prefix: bytes
  A: bytes

  def __repr__(self):
    # Never reveal the secret parts
    return f"ExpandedKey[{self.A.hex()[:8]}]"


def expand_seed(seed: bytes) -> ExpandedKey:
  """
  Derive the signing key material from a 32-byte Ed25519 seed.

  The first half of SHA-512(seed) is clamped into the secret scalar a, the
  second half is the prefix used for deterministic nonces, and A = a * G.
  """
  if len(seed) != 32: raise InvalidKeyLength("Ed25519 seed must be 32 bytes")
  h = shabytes(bytes(seed))
  a = clamp(toint(h[:32]))
  return ExpandedKey(a, h[32:], bytes(scalarmult_base(a)))


def public_key(seed: bytes) -> bytes:
  return expand_seed(seed).A


def generate_keypair(randbytes: Callable[[int], bytes] = token_bytes) -> Tuple[bytes, bytes]:
  """Create a new (seed, public key), consuming exactly one call of randbytes(32)."""
  seed = bytes(randbytes(32))
  return seed, public_key(seed)
