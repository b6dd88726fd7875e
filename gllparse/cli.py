"""Command line entry point: parse one input string against a grammar file."""

from __future__ import annotations

import sys
import time

from gllparse.grammar import Grammar, GrammarError
from gllparse.parser import parse

_CLOCKS_PER_SEC = 1_000_000

USAGE = (
    "usage: gllparse 'grammar_file' 'input'\n\n"
    " - 'grammar_file' is a path to a file containing a grammar of format:\n"
    "\tX -> X_1 | X_2 | ...\n"
    "\tY -> Y_1 | Y_2 | ...\n"
    "\t...\n"
    " - 'input' is a string that the parser will be run on\n"
)


def main(argv=None) -> int:
    """Parse ``argv[1]`` with the grammar in ``argv[0]`` and report the result."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(USAGE, end="")
        return 1
    grammar_path, text = args

    started = time.process_time_ns()
    try:
        grammar = Grammar.from_file(grammar_path)
    except (OSError, GrammarError) as exc:
        print(f"cannot read grammar: {exc}", file=sys.stderr)
        return 1

    result = parse(grammar, text)
    print(f"------------------\nParsing result: {int(result)}\n------------------")

    ticks = (time.process_time_ns() - started) // (1_000_000_000 // _CLOCKS_PER_SEC)
    millis = ticks * 1000 / _CLOCKS_PER_SEC
    print(f"Time taken {ticks} clock ticks, {millis:f} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())