"""Context-free grammars over single-character symbols, with FIRST and FOLLOW sets.

A grammar is written one rule per line in the form ``X -> a1 | a2 | ...``
where ``X`` is an upper-case letter (a non-terminal) and each alternative is
a string of terminals and non-terminals.  ``_`` denotes the empty string.
Spaces inside a rule are ignored.  Reading stops at the first line that does
not start with a non-terminal; everything after that character is kept as
trailing text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import accumulate, pairwise
from pathlib import Path

EPSILON = "_"
END_OF_INPUT = "\0"
START_SYMBOL = "S"
ARROW = " ->"


class GrammarError(ValueError):
    """Raised when grammar text is malformed or inconsistent."""


def is_non_terminal(char: str) -> bool:
    """Return True if ``char`` is a non-terminal, i.e. an upper-case ASCII letter."""
    return len(char) == 1 and "A" <= char <= "Z"


@dataclass
class Rule:
    """A non-terminal with its alternatives laid out in one string of blocks."""

    name: str
    alternatives: tuple[str, ...]
    first: set[str] = field(default_factory=set)
    follow: set[str] = field(default_factory=set)
    blocks: str = field(init=False)
    offsets: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.alternatives = tuple(self.alternatives)
        self.blocks = "".join(self.alternatives)
        self.offsets = tuple(accumulate((len(alt) for alt in self.alternatives), initial=0))

    @property
    def spans(self) -> list[tuple[int, int]]:
        """The ``(start, end)`` positions of each alternative within ``blocks``."""
        return list(pairwise(self.offsets))


def read_grammar(text: str) -> tuple[dict[str, Rule], str]:
    """Parse rules from ``text``.

    Returns the rules keyed by name (in alphabetical order) and the text
    that follows the character which ended the grammar.  Repeated rules are
    merged, the later line's alternatives coming first.
    """
    collected: dict[str, list[str]] = {}
    pos = 0
    rest = ""
    while pos < len(text):
        name = text[pos]
        if not is_non_terminal(name):
            rest = text[pos + 1:]
            break
        if text[pos + 1:pos + 1 + len(ARROW)] != ARROW:
            raise GrammarError(f"faulty formatting in rule {name!r} at offset {pos}")
        pos += 1 + len(ARROW)
        line_end = text.find("\n", pos)
        if line_end < 0:
            line, pos = text[pos:], len(text)
        else:
            line, pos = text[pos:line_end], line_end + 1
        alternatives = line.replace(" ", "").split("|")
        collected[name] = alternatives + collected.get(name, [])
    rules = {name: Rule(name, tuple(collected[name])) for name in sorted(collected)}
    return rules, rest


@dataclass
class Grammar:
    """A set of rules with their FIRST and FOLLOW sets computed."""

    rules: dict[str, Rule]
    trailing: str = ""

    def __post_init__(self) -> None:
        self.rules = {name: self.rules[name] for name in sorted(self.rules)}
        self._check_references()
        self._compute_first()
        self._compute_follow()

    @classmethod
    def from_text(cls, text: str) -> Grammar:
        """Build a grammar from its textual form."""
        rules, rest = read_grammar(text)
        return cls(rules, rest)

    @classmethod
    def from_file(cls, path) -> Grammar:
        """Build a grammar from the file at ``path``."""
        return cls.from_text(Path(path).read_text())

    def _rule(self, name: str) -> Rule:
        try:
            return self.rules[name]
        except KeyError:
            raise KeyError(f"no rule named {name!r}") from None

    def _check_references(self) -> None:
        for rule in self.rules.values():
            for symbol in rule.blocks:
                if is_non_terminal(symbol) and symbol not in self.rules:
                    raise GrammarError(
                        f"rule {rule.name!r} refers to undefined rule {symbol!r}"
                    )

    def _compute_first(self) -> None:
        for rule in self.rules.values():
            rule.first = set()
        for name, rule in self.rules.items():
            self._first_into(name, rule.first, set())

    def _first_into(self, name: str, first: set[str], visited: set[str]) -> bool:
        rule = self.rules[name]
        if name in visited:
            return EPSILON in rule.first
        visited.add(name)
        nullable = False
        for alternative in rule.alternatives:
            for symbol in alternative:
                if symbol == EPSILON:
                    first.add(EPSILON)
                    nullable = True
                    break
                if not is_non_terminal(symbol):
                    first.add(symbol)
                    break
                derives_empty = self._first_into(symbol, first, visited)
                rule.first |= self.rules[symbol].first
                if not derives_empty:
                    break
        return nullable

    def _compute_follow(self) -> None:
        for rule in self.rules.values():
            rule.follow = set()
        for name, rule in self.rules.items():
            self._follow_into(name, rule.follow, set())

    def _follow_into(self, name: str, follow: set[str], visited: set[str]) -> None:
        visited.add(name)
        if name == START_SYMBOL:
            follow.add(END_OF_INPUT)
        for sub in self.rules.values():
            for start, end in sub.spans:
                for pos in range(start, end - 1):
                    if sub.blocks[pos] == name:
                        self._follow_first(follow, sub, pos + 1, end, visited)
                if (
                    end > start
                    and sub.blocks[end - 1] == name
                    and sub.name != name
                    and sub.name not in visited
                ):
                    self._follow_into(sub.name, follow, visited)

    def _follow_first(
        self, follow: set[str], origin: Rule, pos: int, end: int, visited: set[str]
    ) -> None:
        symbol = origin.blocks[pos]
        if not is_non_terminal(symbol):
            follow.add(symbol)
            return
        first = self.rules[symbol].first
        follow |= first - {EPSILON}
        if EPSILON not in first:
            return
        if pos == end - 1:
            if origin.name not in visited:
                self._follow_into(origin.name, follow, visited)
        else:
            self._follow_first(follow, origin, pos + 1, end, visited)

    def in_first(self, rule: str, char: str) -> bool:
        """Return True if ``char`` is in FIRST(``rule``)."""
        return char in self._rule(rule).first

    def in_follow(self, rule: str, char: str) -> bool:
        """Return True if ``char`` is in FOLLOW(``rule``)."""
        return char in self._rule(rule).follow

    def first_follow_test(self, rule: str, start: int, end: int, char: str) -> bool:
        """Decide whether the block ``start:end`` of ``rule`` can begin with ``char``.

        If the block may derive the empty string, FOLLOW(``rule``) is consulted.
        """
        this_rule = self._rule(rule)
        if not start < end:
            raise ValueError(f"empty block {start}:{end} of rule {rule!r}")
        eps_found = False
        for symbol in this_rule.blocks[start:end]:
            go_on = False
            if not is_non_terminal(symbol):
                if symbol == EPSILON:
                    eps_found = go_on = True
                elif symbol == char:
                    return True
            else:
                sub_first = self.rules[symbol].first
                if char in sub_first:
                    return True
                if EPSILON in sub_first:
                    eps_found = go_on = True
            if not go_on:
                break
        if not eps_found:
            return False
        return char in this_rule.follow

    def format(self) -> str:
        """Render the rules in the textual form, one line per rule."""
        return "".join(
            f"{rule.name} -> {' | '.join(rule.alternatives)}\n"
            for rule in self.rules.values()
        )