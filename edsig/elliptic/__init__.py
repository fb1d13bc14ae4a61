# A plain Python submodule for Ed25519 math and signatures

# Based on the Ed25519 RFC and the ref10 reference implementation's
# field representation, fixed base table and addition chains.
# https://datatracker.ietf.org/doc/html/rfc8032

# Secret dependent operations (field arithmetic, scalar reduction, fixed base
# multiplication) are written without secret dependent branches or table
# indices. CPython integers do not give hard timing guarantees, so a native
# library such as libsodium should be preferred where side channels matter.

# Public symbols are imported here. These are very low level primitives.
# Lower case constants are scalars (int or fe), upper case are EdPoints.

from . import scalar
from .ed import BASE_TABLE, LO, ZERO, Cached, EdPoint, G, LG, d, scalarmult_base
from .eddsa import ed_sign, ed_verify
from .field import fe, minus1, one, p, sqrt_ratio, sqrtm1, zero
from .keys import ExpandedKey, clamp, expand_seed, generate_keypair, public_key
from .scalar import L
from .util import sha, shabytes, tobytes, toint, tointsign
