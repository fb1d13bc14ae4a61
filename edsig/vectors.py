"""
Wycheproof style EdDSA test vector corpus: loading and replay.

The JSON layout is
  {"algorithm": "EDDSA", "generatorVersion": ..., "numberOfTests": N,
   "testGroups": [{"key": {"sk": hex}, "tests": [{"tcId", "comment",
   "message", "sig", "result": "valid" | "invalid"}, ...]}, ...]}
"""

import json
from typing import Iterable, Iterator, List, NamedTuple, Optional

from edsig.elliptic import public_key
from edsig.exceptions import InvalidLength
from edsig.signing import sign, verify

ALGORITHM = "EDDSA"
GENERATOR_VERSION = "0.0a18"


class Vector(NamedTuple):
  tcId: int
  comment: str
  sk: bytes
  pk: bytes
  message: bytes
  sig: bytes
  result: str
  flags: tuple = ()

  @property
  def valid(self) -> bool: return self.result == "valid"

  def __str__(self): return f"tcId: {self.tcId} {self.comment}"


class Corpus:

  def __init__(self, data: dict):
    if data.get("algorithm") != ALGORITHM:
      raise ValueError(f"Expected {ALGORITHM} test vectors, got {data.get('algorithm')!r}")
    self.version = data.get("generatorVersion", "")
    self.numtests = int(data["numberOfTests"])
    self.tests: List[Vector] = []
    for group in data["testGroups"]:
      sk = bytes.fromhex(group["key"]["sk"])
      pk = public_key(sk)
      if "pk" in group["key"] and bytes.fromhex(group["key"]["pk"]) != pk:
        raise ValueError(f"Test group public key does not match its secret key {pk.hex()}")
      for t in group["tests"]:
        result = t["result"]
        if result not in ("valid", "invalid"):
          raise ValueError(f"Unknown test result {result!r} in tcId {t['tcId']}")
        self.tests.append(Vector(
          tcId=int(t["tcId"]),
          comment=t.get("comment", ""),
          sk=sk,
          pk=pk,
          message=bytes.fromhex(t["message"]),
          sig=bytes.fromhex(t["sig"]),
          result=result,
          flags=tuple(t.get("flags", ())),
        ))

  @property
  def warning(self) -> Optional[str]:
    """Set if the corpus was made by a different generator than expected"""
    if self.version == GENERATOR_VERSION: return None
    return f"Expected test vectors with version {GENERATOR_VERSION}, got {self.version}"

  def __iter__(self) -> Iterator[Vector]: return iter(self.tests)
  def __len__(self): return len(self.tests)


def load(file) -> Corpus:
  """Load a corpus from a filename or an open text file"""
  if hasattr(file, "read"):
    return Corpus(json.load(file))
  with open(file, encoding="utf-8") as f:
    return Corpus(json.load(f))


def rejects(tc: Vector) -> bool:
  """Whether the signature of the test case is refused by verification"""
  try:
    return not verify(tc.pk, tc.sig, tc.message)
  except InvalidLength:
    return True


class Report:

  def __init__(self, numtests: int):
    self.numtests = numtests
    self.valid = 0
    self.invalid = 0
    self.failures: List[str] = []

  @property
  def complete(self) -> bool:
    """All test cases were seen"""
    return self.valid + self.invalid == self.numtests

  @property
  def ok(self) -> bool: return self.complete and not self.failures


def check_case(tc: Vector) -> Optional[str]:
  """Run a single test case, returning an error description or None on success"""
  if not tc.valid:
    return None if rejects(tc) else f"{tc}: invalid signature was accepted"
  computed = sign(tc.sk, tc.message)
  if computed != tc.sig:
    return f"{tc}: signature mismatch, computed {computed.hex()}"
  if rejects(tc):
    return f"{tc}: valid signature was rejected"
  return None


def replay(corpus: Corpus, progress: Optional[Iterable[Vector]] = None) -> Report:
  """
  Check every test case: valid ones must be reproduced byte-for-byte by
  signing and accepted by verification, invalid ones must be rejected.
  """
  report = Report(corpus.numtests)
  for tc in corpus if progress is None else progress:
    if tc.valid:
      report.valid += 1
    else:
      report.invalid += 1
    err = check_case(tc)
    if err: report.failures.append(err)
  return report
