from secrets import token_bytes

import nacl.bindings as sodium
import pytest

from edsig.elliptic import *
from edsig.elliptic.ed import radix16, select


def randscalar() -> int:
  return toint(token_bytes(32)) % L


def test_ed():
  assert bytes(G).hex() == "58" + 31 * "66"
  assert repr(ZERO) == "ZERO"
  assert repr(G) == "G"
  assert str(ZERO) == "01" + 31 * "00"
  assert G.is_on_curve
  assert ZERO.is_on_curve
  assert L * G == ZERO
  assert (L + 1) * G == G
  assert G + ZERO == G
  assert G - G == ZERO
  assert G.double() == G + G
  assert 3 * G == G + G + G
  assert -G == (L - 1) * G

  P = scalarmult_base(randscalar())
  assert P.is_on_curve
  assert (P + G).is_on_curve
  assert P.double().is_on_curve

  with pytest.raises(TypeError):
    G == 1


def test_scalarmult_base():
  for k in (0, 1, 2, 8, 15, 16, 255, 256, L - 1, L, 2**255 - 1, clamp(toint(token_bytes(32)))):
    assert scalarmult_base(k) == k * G, f"{k=}"
  for _ in range(5):
    k = toint(token_bytes(32)) >> 1
    assert scalarmult_base(k) == k * G
  with pytest.raises(ValueError):
    scalarmult_base(2**255)


def test_radix16():
  for k in (0, 2**255 - 1, L, toint(token_bytes(32)) >> 1):
    e = radix16(k)
    assert len(e) == 64
    assert all(-8 <= digit <= 8 for digit in e)
    assert sum(digit * 16**i for i, digit in enumerate(e)) == k


def test_select():
  for j in (0, 1, 31):
    for b in range(-8, 9):
      P = ZERO.add_cached(select(BASE_TABLE[j], b))
      assert P == b * 256**j * G, f"{j=} {b=}"


def test_encoding():
  for _ in range(5):
    P = scalarmult_base(randscalar())
    b = bytes(P)
    Q = EdPoint.from_bytes(b)
    assert Q == P
    assert bytes(Q) == b
    assert (-Q).is_negative != Q.is_negative
    assert bytes(-Q)[:31] == b[:31]
  assert EdPoint.from_bytes(bytes(G)) == G


def test_vs_sodium():
  for _ in range(5):
    k = randscalar() or 1
    P = scalarmult_base(k)
    assert bytes(P).hex() == sodium.crypto_scalarmult_ed25519_base_noclamp(scalar.to_bytes(k)).hex()
    Q = scalarmult_base(randscalar() or 1)
    assert bytes(P + Q).hex() == sodium.crypto_core_ed25519_add(bytes(P), bytes(Q)).hex()
    assert bytes(P - Q).hex() == sodium.crypto_core_ed25519_sub(bytes(P), bytes(Q)).hex()


def test_decoding_rejects():
  # y = p and y = p + 1 are non-canonical encodings of 0 and 1
  with pytest.raises(ValueError) as exc:
    EdPoint.from_bytes(tobytes(p))
  assert "Non-canonical" in str(exc.value)
  with pytest.raises(ValueError):
    EdPoint.from_bytes(tobytes(p + 1))
  with pytest.raises(ValueError):
    EdPoint.from_bytes(tobytes(2**255 - 1))
  # x = 0 may not have the sign bit set
  with pytest.raises(ValueError) as exc:
    EdPoint.from_bytes(tobytes(1 | 1 << 255))
  assert "Non-canonical" in str(exc.value)
  # Wrong length
  with pytest.raises(ValueError):
    EdPoint.from_bytes(bytes(31))
  # Roughly half of all y values are not on the curve
  offcurve = 0
  for y in range(2, 40):
    try:
      EdPoint.from_bytes(tobytes(y))
    except ValueError as e:
      assert "Not a curve point" in str(e)
      assert not sodium.crypto_core_ed25519_is_valid_point(tobytes(y))
      offcurve += 1
  assert offcurve > 0


def test_lo():
  assert LO[0] == ZERO
  assert LO[1] == LG
  assert repr(LO[0]) == "ZERO"
  assert repr(LO[1]) == "LG"
  assert repr(LO[2]) == "LO[2]"
  assert len({bytes(P) for P in LO}) == 8
  # The point of order two is (0, -1), those of order four have y = 0
  assert bytes(LO[4]).hex() == "ec" + 30 * "ff" + "7f"
  assert {bytes(LO[2]), bytes(LO[6])} == {bytes(32), bytes(31) + b"\x80"}
  assert LO[2] + LO[6] == ZERO
  for P in LO:
    assert P.is_on_curve
    assert P.is_low_order
    assert 8 * P == ZERO
    assert P.mul8 == ZERO
    assert EdPoint.from_bytes(bytes(P)) == P
    # Adding torsion does not change the cofactor multiple of a prime order point
    Q = scalarmult_base(randscalar() or 1)
    assert not Q.is_low_order
    assert (Q + P).mul8 == Q.mul8
  assert not G.is_low_order


def test_hashmap():
  assert len({G, G + ZERO, 2 * G, G.double()}) == 2
  assert len({i * LG for i in range(10)}) == 8
