from secrets import token_bytes
from typing import Callable, Optional, Tuple

from edsig.elliptic import ed_sign, ed_verify, generate_keypair as _generate_keypair
from edsig.exceptions import VerificationFailure


def generate_keypair(randbytes: Optional[Callable[[int], bytes]] = None) -> Tuple[bytes, bytes]:
  """
  Create a new Ed25519 key pair as (seed, public key), both 32 bytes.

  The random source can be replaced (e.g. for reproducible tests) by any
  function that returns the requested number of bytes. It is called once.
  """
  return _generate_keypair(token_bytes if randbytes is None else randbytes)


def sign(seed: bytes, message: bytes) -> bytes:
  """Sign a message, returning the 64-byte signature. Deterministic."""
  return ed_sign(bytes(seed), bytes(message))


def check(pk: bytes, signature: bytes, message: bytes) -> None:
  """Verify a signature, raising VerificationFailure if it is not valid."""
  ed_verify(bytes(pk), bytes(message), bytes(signature))


def verify(pk: bytes, signature: bytes, message: bytes) -> bool:
  """
  Return True if the signature is valid.

  Malformed keys or signatures of the correct size are reported as False just
  like wrong signatures. Wrong sizes raise InvalidKeyLength or InvalidSignatureLength.
  """
  try:
    check(pk, signature, message)
  except VerificationFailure:
    return False
  return True
