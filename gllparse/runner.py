"""Run a parser over test cases stored after a grammar and report timings."""

from __future__ import annotations

import re
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, TextIO

from gllparse.grammar import Grammar, GrammarError
from gllparse.parser import GLLParser

_CLOCKS_PER_SEC = 1_000_000
_NS_PER_TICK = 1_000_000_000 // _CLOCKS_PER_SEC

HEADER = (
    "Grammar:input_size:Result:Should:Clock ticks:CPU Time:R Set size:U Set size:"
    "P Set size:gss_nodes size:gss_edges size:status"
)

USAGE = (
    "usage: gllparse-test 'folder' | 'grammar_file' [repetitions]\n\n"
    " - 'folder' contains files containing grammars and input of format:\n"
    "\tX -> X_1 | X_2 | ...\n"
    "\tY -> Y_1 | Y_2 | ...\n"
    "\t...\n"
    "\t#\n"
    "\t[test input] [0/1]\n"
    "\t...\n"
    " - 'repetitions' is a natural number denoting the amount of times the same"
    " input is parsed (time is then averaged)\n"
)

GROWTH_USAGE = (
    "usage: gllparse-growth grammar_file repetitions count op substr0 substr1 ...\n\n"
    " - 'grammar_file' should be a path to a file containing grammars of format:\n"
    "\tX -> X_1 | X_2 | ...\n"
    "\tY -> Y_1 | Y_2 | ...\n"
    "\t...\n"
    "the grammar will be done reading if it reads EOF or a terminal on the LHS\n"
    " - 'repetitions' is a natural number denoting the amount of times the same"
    " input is parsed (time is then averaged)\n"
    " - 'count' will be the amount of tests (-1 for non termination)\n"
    " - 'op' is of form \"+N\" or \"*N\" (N being a natural number) denoting the"
    " growth of the input per new test\n"
    " - 'substr0...n' the input given to the parser is the concatenation of these"
    " substrings where all substrings with odd indices are repeated\n"
)

_PASSED = "\x1b[32mpassed\x1b[0m"
_FAILED = "\x1b[31mfailed\x1b[0m"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _ticks_since(started_ns: int) -> int:
    return (time.process_time_ns() - started_ns) // _NS_PER_TICK


@dataclass(frozen=True)
class CaseResult:
    """Outcome of parsing one input, with the sizes of the final parse state."""

    source: str
    input_size: int
    result: bool
    expected: bool
    ticks: int
    pending: int
    seen: int
    popped: int
    nodes: int
    edges: int

    @property
    def passed(self) -> bool:
        """True if the parser agreed with the expected result."""
        return self.result == self.expected

    @property
    def millis(self) -> float:
        """Average CPU time in milliseconds."""
        return self.ticks * 1000 / _CLOCKS_PER_SEC

    def format(self) -> str:
        """One colon-separated report line, matching :data:`HEADER`."""
        status = _PASSED if self.passed else _FAILED
        return (
            f"{self.source}:{self.input_size}:{int(self.result)}:{int(self.expected)}:"
            f"{self.ticks}:{self.millis:.3f} ms:{self.pending}:{self.seen}:"
            f"{self.popped}:{self.nodes}:{self.edges}:{status}"
        )


def read_cases(text: str) -> Iterator[tuple[str, bool]]:
    """Yield ``(input, expected)`` pairs from the text after a grammar.

    Each case is an input, a space and ``0`` or ``1``; a newline at the start
    of a case is skipped.  A case cut off before its space is dropped.
    """
    pos = 0
    while pos < len(text):
        first = text[pos]
        pos += 1
        space = text.find(" ", pos)
        if space < 0:
            return
        prefix = "" if first == "\n" else first
        case_input = prefix + text[pos:space]
        pos = space + 1
        flag = text[pos:pos + 1]
        if flag not in ("0", "1") or not flag:
            raise GrammarError(f"faulty test case flag {flag!r} for input {case_input!r}")
        pos += 1
        yield case_input, flag == "1"


def build_input(parts, repetition: int) -> str:
    """Concatenate ``parts``, repeating those at odd indices ``repetition`` times."""
    return "".join(
        part * repetition if idx % 2 else part for idx, part in enumerate(parts)
    )


def _run_case(
    parser: GLLParser,
    source: str,
    text: str,
    expected: bool,
    repetitions: int,
    setup_ticks: int,
) -> CaseResult:
    total = 0
    result = False
    for _ in range(repetitions):
        started = time.process_time_ns()
        result = parser.parse(text)
        total += _ticks_since(started) + setup_ticks
    gss, sets = parser.gss, parser.sets
    return CaseResult(
        source=source,
        input_size=len(text),
        result=result,
        expected=expected,
        ticks=total // repetitions,
        pending=len(sets.pending),
        seen=len(sets.seen),
        popped=len(sets.popped),
        nodes=len(gss.nodes),
        edges=len(gss.edges),
    )


def _check_repetitions(repetitions: int) -> None:
    if repetitions < 1:
        raise ValueError(f"repetitions must be positive, got {repetitions}")


def run_file(path, repetitions: int = 1, out: TextIO | None = None) -> list[CaseResult]:
    """Parse every case stored in the grammar file at ``path`` and report each."""
    _check_repetitions(repetitions)
    out = sys.stdout if out is None else out
    started = time.process_time_ns()
    grammar = Grammar.from_file(path)
    setup_ticks = _ticks_since(started)
    parser = GLLParser(grammar)
    results = []
    for text, expected in read_cases(grammar.trailing):
        result = _run_case(parser, str(path), text, expected, repetitions, setup_ticks)
        out.write(result.format() + "\n")
        results.append(result)
    return results


def run_path(path, repetitions: int = 1, out: TextIO | None = None) -> list[CaseResult]:
    """Run one grammar file, or every file in a directory after a header line."""
    _check_repetitions(repetitions)
    out = sys.stdout if out is None else out
    target = Path(path)
    if target.is_dir():
        out.write(HEADER + "\n")
        results = []
        for entry in sorted(target.iterdir()):
            if entry.is_file():
                results.extend(run_file(entry, repetitions, out))
        return results
    if target.exists():
        return run_file(target, repetitions, out)
    raise FileNotFoundError(
        f"'folder' | 'grammar_file' must either be a folder or file path: {path}"
    )


def main(argv=None) -> int:
    """Run the cases of a grammar file or of every file in a folder."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) == 1:
        print("defaulting to 1 repetition")
        repetitions = 1
    elif len(args) == 2:
        repetitions = _atoi(args[1])
        if repetitions == 0:
            print("Faulty input for repetition")
            print(USAGE, end="")
            return 1
        if repetitions < 0:
            print("Faulty input for repetition")
            return 1
    else:
        print(USAGE, end="")
        return 1

    try:
        run_path(args[0], repetitions)
    except GrammarError as exc:
        print(f"Faulty Grammar file: {exc}")
        return 1
    except OSError as exc:
        print(exc)
        return 1
    return 0


def growth_main(argv=None) -> int:
    """Parse inputs that grow by a fixed rule, each expected to be accepted."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 5:
        print(GROWTH_USAGE, end="")
        return 1
    grammar_path, repetitions_text, count_text, op_text, *parts = args

    repetitions = _atoi(repetitions_text)
    if repetitions == 0:
        print("Faulty input for repetition")
        print(GROWTH_USAGE, end="")
        return 1
    if repetitions < 0:
        print("please provide a strictly positive amount of repetitions")
        print(GROWTH_USAGE, end="")
        return 1
    count = _atoi(count_text)
    if count == 0:
        print("Faulty input for count")
        print(GROWTH_USAGE, end="")
        return 1
    if count < -1:
        print("please provide a strictly positive count")
        print(GROWTH_USAGE, end="")
        return 1
    op = op_text[:1]
    step = _atoi(op_text[1:]) if op in ("*", "+") else 0
    if step == 0:
        print("Faulty input for op")
        print(GROWTH_USAGE, end="")
        return 1
    if step < 0:
        print("please provide a strictly positive growth step")
        print(GROWTH_USAGE, end="")
        return 1

    shown = "".join(
        f"*({part})" if idx % 2 else part for idx, part in enumerate(parts)
    )
    print(f"Input generator: {shown}")
    print(HEADER)

    started = time.process_time_ns()
    try:
        grammar = Grammar.from_file(grammar_path)
    except (OSError, GrammarError) as exc:
        print(f"cannot read grammar: {exc}", file=sys.stderr)
        return 1
    setup_ticks = _ticks_since(started)
    parser = GLLParser(grammar)

    repetition = 1
    while count:
        if count != -1:
            count -= 1
        text = build_input(parts, repetition)
        repetition = repetition + step if op == "+" else repetition * step
        result = _run_case(parser, grammar_path, text, True, repetitions, setup_ticks)
        print(result.format())
    return 0


if __name__ == "__main__":
    sys.exit(main())