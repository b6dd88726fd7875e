"""A generalised LL parser driven by descriptors and a graph-structured stack."""

from __future__ import annotations

from gllparse.descriptors import Descriptor, DescriptorSets, LabelType
from gllparse.grammar import (
    END_OF_INPUT,
    EPSILON,
    START_SYMBOL,
    Grammar,
    is_non_terminal,
)
from gllparse.gss import GSS, ROOT_RULE


class _Run:
    """State of one parse of one input string."""

    def __init__(self, grammar: Grammar, text: str) -> None:
        self.grammar = grammar
        # Input ends at the first NUL, as a C string would.
        self.text = text.split(END_OF_INPUT, 1)[0]
        self.gss = GSS()
        self.sets = DescriptorSets()
        self.input_idx = 0

    def _char(self) -> str:
        if self.input_idx < len(self.text):
            return self.text[self.input_idx]
        return END_OF_INPUT

    def run(self) -> bool:
        start_rule = self.grammar.rules.get(START_SYMBOL)
        if start_rule is None:
            return False
        first_char = self._char()
        accepted = first_char in start_rule.first or (
            EPSILON in start_rule.first and first_char == END_OF_INPUT
        )
        if not accepted:
            return False
        self._init_rule(START_SYMBOL)

        target = len(self.text)
        while True:
            if self.sets.check_success(ROOT_RULE, target):
                return True
            if not self.sets.has_pending:
                return False
            descriptor = self.sets.take()
            self.input_idx = descriptor.input_idx
            self.gss.current = descriptor.node
            if descriptor.input_idx > self.sets.lesser_input_idx:
                self.sets.clean_lesser_from_p()
                self.sets.clean_lesser_from_u()
            self._dispatch(descriptor)

    def _dispatch(self, descriptor: Descriptor) -> None:
        label = descriptor.label
        if label == LabelType.PARTIAL_PRODUCTION:
            self._continue_production(descriptor.rule, descriptor.start, descriptor.end)
        elif label == LabelType.FULL_PRODUCTION:
            self._start_new_production(descriptor.rule, descriptor.start, descriptor.end)
        elif label == LabelType.RULE:
            self._init_rule(descriptor.rule)
        elif label == LabelType.BASELOOP:
            return
        else:
            raise RuntimeError(f"unexpected descriptor label {label!r}")

    def _call(self, rule: str, start: int, end: int, callee: str) -> None:
        """Push a return point after ``start`` and enter ``callee``."""
        self.gss.current = self.gss.create(
            rule,
            start + 1,
            end,
            self.input_idx,
            LabelType.PARTIAL_PRODUCTION,
            self.sets,
        )
        self._init_rule(callee)

    def _continue_production(self, rule: str, start: int, end: int) -> None:
        if start == end:
            self.gss.pop(self.input_idx, self.sets)
            return
        symbol = self.grammar.rules[rule].blocks[start]
        if not is_non_terminal(symbol):
            if symbol == self._char():
                self.input_idx += 1
                self.sets.add(
                    rule,
                    start + 1,
                    end,
                    self.input_idx,
                    self.gss.current,
                    LabelType.PARTIAL_PRODUCTION,
                )
            return
        if self.grammar.first_follow_test(rule, start, end, self._char()):
            self._call(rule, start, end, symbol)

    def _start_new_production(self, rule: str, start: int, end: int) -> None:
        symbol = self.grammar.rules[rule].blocks[start]
        if start + 1 == end and symbol == EPSILON:
            self.gss.pop(self.input_idx, self.sets)
        elif not is_non_terminal(symbol):
            # The alternative was chosen because its first terminal matched.
            self.input_idx += 1
            self.sets.add(
                rule,
                start + 1,
                end,
                self.input_idx,
                self.gss.current,
                LabelType.PARTIAL_PRODUCTION,
            )
        else:
            self._call(rule, start, end, symbol)

    def _init_rule(self, name: str) -> None:
        """Add a descriptor for every alternative of ``name`` that fits the input."""
        rule = self.grammar.rules[name]
        char = self._char()
        for start, end in rule.spans:
            if self.grammar.first_follow_test(name, start, end, char):
                self.sets.add(
                    name,
                    start,
                    end,
                    self.input_idx,
                    self.gss.current,
                    LabelType.FULL_PRODUCTION,
                )


class GLLParser:
    """Recognises strings of a grammar whose start symbol is ``S``.

    After each call to :meth:`parse` the stack and descriptor sets of that
    parse remain available as ``gss`` and ``sets``.
    """

    def __init__(self, grammar: Grammar | str) -> None:
        if isinstance(grammar, str):
            grammar = Grammar.from_text(grammar)
        self.grammar = grammar
        self.gss: GSS | None = None
        self.sets: DescriptorSets | None = None

    def parse(self, text: str) -> bool:
        """Return True if ``text`` is derivable from the start symbol."""
        run = _Run(self.grammar, text)
        try:
            return run.run()
        finally:
            self.gss = run.gss
            self.sets = run.sets


def parse(grammar: Grammar | str, text: str) -> bool:
    """Return True if ``text`` belongs to the language of ``grammar``."""
    return GLLParser(grammar).parse(text)