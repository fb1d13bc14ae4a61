from ..exceptions import InvalidKeyLength, InvalidSignatureLength, VerificationFailure
from . import scalar
from .ed import EdPoint, scalarmult_base
from .keys import expand_seed
from .util import sha

# All verification failures look the same to the caller
MISMATCH = "Signature verification failed"


def ed_sign(seed: bytes, msg: bytes) -> bytes:
  """Standard Ed25519 signature (RFC 8032, 5.1.6)"""
  a, prefix, A = expand_seed(seed)
  r = scalar.reduce(sha(prefix, msg))
  Rs = bytes(scalarmult_base(r))
  h = scalar.reduce(sha(Rs, A, msg))
  s = scalar.muladd(h, a, r)
  return Rs + scalar.to_bytes(s)


def ed_verify(edpk: bytes, msg: bytes, signature: bytes) -> None:
  """
  Standard Ed25519 signature verification with the cofactored equation
  [8][s]G == [8]R + [8][h]A (RFC 8032, 5.1.7).

  Raises InvalidKeyLength or InvalidSignatureLength on wrong input sizes and
  VerificationFailure for anything else that is not a valid signature.
  """
  if len(edpk) != 32:
    raise InvalidKeyLength("Ed25519 public key must be 32 bytes")
  if len(signature) != 64:
    raise InvalidSignatureLength("Ed25519 signature must be 64 bytes")
  edpk, signature = bytes(edpk), bytes(signature)
  Rs, Ss = signature[:32], signature[32:]
  try:
    A = EdPoint.from_bytes(edpk)
    if not scalar.is_canonical(Ss): raise ValueError("Invalid s value on signature")
    R = EdPoint.from_bytes(Rs)
  except ValueError:
    raise VerificationFailure(MISMATCH) from None
  s = scalar.from_bytes(Ss)
  h = scalar.reduce(sha(Rs, edpk, msg))
  # The same as 8 * R + 8 * (h * A) but with one variable base multiplication
  if scalarmult_base(s).mul8 != (R + h * A).mul8:
    raise VerificationFailure(MISMATCH)
