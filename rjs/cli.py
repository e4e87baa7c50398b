"""rjs CLI: translate a localized source file into JavaScript."""

from __future__ import annotations

import logging
import sys

from . import __version__, translate
from .errors import TranslationError


USAGE: str = """\
Usage: rjs [OPTIONS] [INPUT [OUTPUT]] [-o OUTPUT]

Translate Russian-keyword JavaScript into standard JavaScript.
Reads INPUT, or stdin when INPUT is omitted or "-". Writes OUTPUT, or stdout.

Options:
  -o, --output FILE   Write output to FILE instead of stdout
  -v, --verbose       Log pipeline progress to stderr
  --version           Show version information
  -h, --help          Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            print("rjs: " + input_file + ": No such file or directory", file=sys.stderr)
            return ("", 1)
        except OSError as e:
            print("rjs: " + input_file + ": " + str(e), file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("rjs: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            print("rjs: cannot write '" + output_file + "': " + str(e), file=sys.stderr)
            return 1
        return 0
    sys.stdout.write(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = argv if argv is not None else sys.argv[1:]
    positionals: list[str] = []
    output_file: str | None = None
    verbose = False
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            return 0
        elif arg == "--version":
            print("rjs " + __version__)
            return 0
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("rjs: " + arg + " requires an argument", file=sys.stderr)
                return 2
            output_file = args[i + 1]
            i += 2
        elif arg == "-v" or arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("rjs: unknown flag '" + arg + "'", file=sys.stderr)
            return 2
        else:
            positionals.append(arg)
            i += 1

    # rjs INPUT OUTPUT is the positional form of rjs INPUT -o OUTPUT
    if len(positionals) > 2 or (len(positionals) == 2 and output_file is not None):
        print("rjs: unexpected argument '" + positionals[-1] + "'", file=sys.stderr)
        return 2
    input_file: str | None = None
    if len(positionals) > 0 and positionals[0] != "-":
        input_file = positionals[0]
    if len(positionals) == 2:
        output_file = positionals[1]

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )

    source, err = read_source(input_file)
    if err != 0:
        return err

    try:
        output = translate(source)
    except TranslationError as e:
        print(
            "error:" + str(e.line) + ":" + str(e.col) + ": " + e.msg, file=sys.stderr
        )
        return 1

    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
