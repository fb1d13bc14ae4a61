"""Ed25519 signatures in plain Python"""

__version__ = "0.1.0"

from edsig.exceptions import InvalidKeyLength, InvalidLength, InvalidSignatureLength, VerificationFailure
from edsig.signing import check, generate_keypair, sign, verify
