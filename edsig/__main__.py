import sys
from typing import NoReturn

import colorama

import edsig
from edsig.cli import main_benchmark, main_keygen, main_pubkey, main_sign, main_vectors, main_verify

hdrhelp = """\
Usage:
  edsig keygen
  edsig pubkey SEED
  edsig sign SEED [-m MESSAGE | file]
  edsig verify PUBKEY SIGNATURE [-m MESSAGE | file]
  edsig vectors eddsa_test.json
  edsig benchmark

Keys and signatures are hex. The message is read from stdin if neither -m nor
a file is given.
"""

opthelp = """\
  -m MESSAGE        Message text (UTF-8) instead of a file
  --debug           Show tracebacks rather than brief error messages
"""

cmdhelp = f"""\
Edsig {edsig.__version__} - Ed25519 signatures in plain Python

{hdrhelp}
{opthelp}
"""


class Args:

  def __init__(self):
    self.mode = None
    self.keys = []
    self.files = []
    self.message = []
    self.debug = None


msgargs = dict(
  message='-m --message'.split(),
  debug='--debug'.split(),
)
plainargs = dict(debug='--debug'.split(),)

# Mode: (main function, number of leading key arguments, accepted switches)
modes = {
  "keygen": (main_keygen, 0, plainargs),
  "pubkey": (main_pubkey, 1, plainargs),
  "sign": (main_sign, 1, msgargs),
  "verify": (main_verify, 2, msgargs),
  "vectors": (main_vectors, 0, plainargs),
  "benchmark": (main_benchmark, 0, plainargs),
}
aliases = {"bench": "benchmark", "pk": "pubkey"}


def has_switch(av, *names):
  """Whether a switch is given, not counting message parameters or anything after --"""
  aiter = iter(av)
  for a in aiter:
    if a == '--': break
    if a.lower() in names: return True
    if a.lower() in msgargs["message"]: next(aiter, None)
  return False


def argparse():
  # Hand-rolled parsing, switches may appear anywhere after the mode
  av = sys.argv[1:]
  if not av or has_switch(av, '-h', '--help'):
    first, rest = cmdhelp.rstrip().split('\n', 1)
    if sys.stdout.isatty():
      print(f'\x1B[1;44m{first:78}\x1B[0m\n{rest}')
    else:
      print(f'{first}\n{rest}')
    sys.exit(0)
  if has_switch(av, '-v', '--version'):
    print(cmdhelp.split('\n')[0])
    sys.exit(0)
  args = Args()
  args.mode = aliases.get(av[0], av[0])
  if args.mode not in modes:
    sys.stderr.write(f' 💣  Invalid or missing command ({"/".join(modes)}).\n')
    sys.exit(1)
  _, nkeys, ad = modes[args.mode]

  aiter = iter(av[1:])
  for a in aiter:
    if not a.startswith('-') or a == '-':
      if len(args.keys) < nkeys:
        args.keys.append(a)
      else:
        args.files.append(True if a == '-' else a)
      continue
    if a == '--':
      args.files += aiter
      break
    argvar = next((k for k, v in ad.items() if a.lower() in v), None)
    if argvar is None:
      sys.stderr.write(f'{hdrhelp}\n 💣  Unknown argument: edsig {args.mode} {a}\n')
      sys.exit(1)
    var = getattr(args, argvar)
    if isinstance(var, list):
      try:
        var.append(next(aiter))
      except StopIteration:
        sys.stderr.write(f'{hdrhelp}\n 💣  Argument parameter missing: edsig {args.mode} {a} …\n')
        sys.exit(1)
    else:
      setattr(args, argvar, True)

  if len(args.keys) < nkeys:
    sys.stderr.write(f'{hdrhelp}\n 💣  Missing key arguments: edsig {args.mode} needs {nkeys}\n')
    sys.exit(1)
  return args


def main() -> NoReturn:
  """
  The main CLI entry point.

  System exit codes:
  * 0 The requested function was completed successfully
  * 1 CLI argument error
  * 2 Interrupted
  * 3 I/O error (broken pipe)
  * 10 Verification failure, invalid key or signature, failed test vectors

  :raises SystemExit: on normal exit or any expected error, including KeyboardInterrupt
  :raises Exception: on unexpected error (report a bug), or on any error with `--debug`
  """
  colorama.init()
  args = argparse()
  func = modes[args.mode][0]

  if args.debug:
    func(args)  # --debug makes us not catch errors
    sys.exit(0)
  try:
    func(args)  # Normal run
  except ValueError as e:
    sys.stderr.write(f"Error: {e}\n")
    sys.exit(10)
  except BrokenPipeError:
    sys.stderr.write('I/O error (broken pipe)\n')
    sys.exit(3)
  except KeyboardInterrupt:
    sys.stderr.write("Interrupted.\n")
    sys.exit(2)
  sys.exit(0)


if __name__ == "__main__":
  main()
