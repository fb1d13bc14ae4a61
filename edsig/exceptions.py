class InvalidLength(ValueError):
  """Input buffer has the wrong size for an Ed25519 object"""

class InvalidKeyLength(InvalidLength):
  """Seed or public key is not exactly 32 bytes"""

class InvalidSignatureLength(InvalidLength):
  """Signature is not exactly 64 bytes"""

class VerificationFailure(ValueError):
  """Signature is not valid for the given public key and message"""
