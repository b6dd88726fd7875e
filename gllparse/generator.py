"""Enumerate sentences of a grammar breadth first, starting from ``S``."""

from __future__ import annotations

import re
import sys
from collections import deque
from itertools import chain
from typing import Iterator

from gllparse.grammar import (
    EPSILON,
    START_SYMBOL,
    Grammar,
    GrammarError,
    is_non_terminal,
)

USAGE = (
    "usage: gllparse-gen 'grammar_file' [count]\n\n"
    " - 'grammar_file' contains a grammar of format:\n"
    "\tX -> X_1 | X_2 | ...\n"
    "\tY -> Y_1 | Y_2 | ...\n"
    "\t...\n"
    "\t#\n"
    " - [count] is a natural number denoting the total amount of input generated."
    " Will not terminate for -1 which is the default value\n"
)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _next_non_terminal(form: str, position: int) -> int | None:
    """Index of the first non-terminal at or after ``position``, wrapping around."""
    if not form:
        return None
    start = position % len(form)
    for idx in chain(range(start, len(form)), range(start)):
        if is_non_terminal(form[idx]):
            return idx
    return None


def generate(grammar: Grammar | str, count: int | None = None) -> Iterator[str]:
    """Yield sentences derivable from ``S`` in breadth-first order.

    Every sentential form is expanded at its next non-terminal, searching
    onwards from where the previous expansion ended.  ``count`` limits the
    number of sentences; ``None`` or a negative value means no limit.
    """
    if isinstance(grammar, str):
        grammar = Grammar.from_text(grammar)
    if START_SYMBOL not in grammar.rules:
        raise GrammarError(f"grammar has no start rule {START_SYMBOL!r}")
    remaining = None if count is None or count < 0 else count

    queue: deque[tuple[str, int]] = deque([(START_SYMBOL, 0)])
    while queue and remaining != 0:
        form, position = queue.popleft()
        target = _next_non_terminal(form, position)
        if target is None:
            yield form
            if remaining is not None:
                remaining -= 1
            continue
        head, tail = form[:target], form[target + 1:]
        for alternative in grammar.rules[form[target]].alternatives:
            if alternative.startswith(EPSILON):
                queue.append((head + tail, target))
            else:
                queue.append((head + alternative + tail, target + len(alternative)))


def main(argv=None) -> int:
    """Print the grammar, a ``#`` line, then generated sentences each marked ``1``."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) == 1:
        count = -1
    elif len(args) == 2:
        count = _atoi(args[1])
        if count == 0:
            print("'count' must be a natural number or '-1'")
            return 1
    else:
        print(USAGE, end="")
        return 1

    try:
        grammar = Grammar.from_file(args[0])
        print(grammar.format(), end="")
        print("#")
        for sentence in generate(grammar, count):
            print(f"{sentence} 1")
    except (OSError, GrammarError) as exc:
        print(f"cannot generate input: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())