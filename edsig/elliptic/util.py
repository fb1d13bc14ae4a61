"""Little endian codecs for 32-byte encodings, and SHA-512 as used by Ed25519"""
import hashlib
from typing import Tuple

# Bit 255 of point encodings carries the sign of x
SIGN_BIT = 1 << 255


def toint(b) -> int:
  """Decode 32 bytes little endian. Integers are passed through."""
  if isinstance(b, int): return b
  if len(b) != 32: raise ValueError(f"Expected 32 bytes, got {len(b)}")
  return int.from_bytes(b, "little")

def tointsign(b) -> Tuple[int, bool]:
  """Split an encoding into its low 255 bits and the sign bit"""
  val = toint(b)
  return val & SIGN_BIT - 1, bool(val & SIGN_BIT)

def tobytes(x: int) -> bytes: return x.to_bytes(32, "little")


def shabytes(*parts) -> bytes:
  """SHA-512 over the concatenation of all parts"""
  h = hashlib.sha512()
  for part in parts: h.update(part)
  return h.digest()

def sha(*parts) -> int:
  # Digest as a little endian integer, the input of scalar.reduce
  return int.from_bytes(shabytes(*parts), "little")
