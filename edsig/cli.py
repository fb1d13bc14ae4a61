import sys
from time import perf_counter

import nacl.bindings as sodium
from tqdm import tqdm

from edsig import vectors
from edsig.exceptions import VerificationFailure
from edsig.signing import check, generate_keypair, sign
from edsig.elliptic import public_key


def decode_hex(value: str, what: str) -> bytes:
  try:
    return bytes.fromhex(value.strip())
  except ValueError:
    raise ValueError(f"Invalid hex for {what}") from None


def read_message(args) -> bytes:
  """Message from -m, from the named file, or from stdin (also with -)"""
  if args.message:
    if args.files:
      raise ValueError("Give either a message with -m or a file, not both")
    return args.message[-1].encode()
  if len(args.files) > 1:
    raise ValueError("Only one message file may be given")
  fname = args.files[0] if args.files else True
  if fname is True:
    return sys.stdin.buffer.read()
  with open(fname, "rb") as f:
    return f.read()


def main_keygen(args):
  seed, pk = generate_keypair()
  sys.stderr.write(f" 🔑 New key pair (keep the first line secret)\n")
  print(seed.hex())
  print(pk.hex())


def main_pubkey(args):
  seed = decode_hex(args.keys.pop(0), "seed")
  print(public_key(seed).hex())


def main_sign(args):
  seed = decode_hex(args.keys.pop(0), "seed")
  msg = read_message(args)
  print(sign(seed, msg).hex())


def main_verify(args):
  pk = decode_hex(args.keys.pop(0), "public key")
  sig = decode_hex(args.keys.pop(0), "signature")
  msg = read_message(args)
  try:
    check(pk, sig, msg)
  except VerificationFailure:
    sys.stderr.write(f"\x1B[1;31m ❌ Signature verification failed\x1B[0m\n")
    raise
  sys.stderr.write(f" ✅ Signature verified {pk.hex()[:12]}…\n")


def main_vectors(args):
  if len(args.files) != 1:
    raise ValueError("Exactly one test vector file must be given")
  corpus = vectors.load(args.files[0])
  if corpus.warning:
    sys.stderr.write(f" ⚠️ {corpus.warning}\n")
  with tqdm(corpus, desc="Vectors", unit="tc", leave=False, disable=not sys.stderr.isatty()) as progress:
    report = vectors.replay(corpus, progress)
  for err in report.failures:
    sys.stderr.write(f"\x1B[1;31m ❌ {err}\x1B[0m\n")
  print(f"{report.valid} valid, {report.invalid} invalid, {len(report.failures)} failed of {report.numtests}")
  if not report.complete:
    raise ValueError(f"Corpus declares {report.numtests} tests but {report.valid + report.invalid} were found")
  if report.failures:
    raise ValueError(f"{len(report.failures)} test vectors failed")


def main_benchmark(args):
  rounds = 20
  msg = bytes(1024)
  seed, pk = generate_keypair()
  sig = sign(seed, msg)
  edpk, edsk = sodium.crypto_sign_seed_keypair(seed)
  if edpk != pk or sodium.crypto_sign(msg, edsk)[:64] != sig:
    raise ValueError("Signatures do not match libsodium")

  def bench(name, func):
    t0 = perf_counter()
    for _ in tqdm(range(rounds), desc=name, unit="op", leave=False, disable=not sys.stderr.isatty()):
      func()
    dur = (perf_counter() - t0) / rounds
    print(f"{name:16} {dur * 1e3:9.3f} ms/op")

  bench("edsig sign", lambda: sign(seed, msg))
  bench("edsig verify", lambda: check(pk, sig, msg))
  bench("sodium sign", lambda: sodium.crypto_sign(msg, edsk))
  bench("sodium verify", lambda: sodium.crypto_sign_open(sig + msg, edpk))
  print(f"Ran {rounds} rounds of each with a {len(msg)} byte message.")
