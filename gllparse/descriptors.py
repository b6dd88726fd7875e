"""Descriptor bookkeeping for the GLL parser: the R, U and P sets.

``R`` holds descriptors still waiting to be processed, ``U`` every descriptor
added so far that is still relevant, and ``P`` the (node, input position)
pairs at which a GSS node has been popped.  Only descriptors for two
neighbouring input positions are ever live at the same time: those for
``lesser_input_idx`` sit at the front of the queues, those for the next
position at the back.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator


class LabelType(IntEnum):
    """What a descriptor or GSS node resumes when it is processed."""

    PARTIAL_PRODUCTION = 0
    FULL_PRODUCTION = 1
    RULE = 2
    BASELOOP = 3
    INVALID = 4


@dataclass(frozen=True)
class Descriptor:
    """A parsing position: a block of a rule, an input index and a GSS node."""

    rule: str
    start: int
    end: int
    input_idx: int
    node: int
    label: LabelType

    @property
    def key(self) -> tuple[str, int, int, int]:
        """The fields that decide whether two descriptors are the same."""
        return (self.rule, self.start, self.input_idx, self.node)


class DescriptorSets:
    """The R, U and P sets of a single parse."""

    def __init__(self) -> None:
        self.lesser_input_idx = 0
        self._pending: deque[Descriptor] = deque()
        self._seen: deque[Descriptor] = deque()
        self._seen_keys: set[tuple[str, int, int, int]] = set()
        self._popped: deque[tuple[int, int]] = deque()
        self._popped_keys: set[tuple[int, int]] = set()

    @property
    def pending(self) -> tuple[Descriptor, ...]:
        """Descriptors in R, in the order they will be taken."""
        return tuple(self._pending)

    @property
    def has_pending(self) -> bool:
        """True while R is not empty."""
        return bool(self._pending)

    @property
    def seen(self) -> tuple[Descriptor, ...]:
        """Descriptors in U, front to back."""
        return tuple(self._seen)

    @property
    def popped(self) -> tuple[tuple[int, int], ...]:
        """Entries of P as ``(node, input_idx)`` pairs, front to back."""
        return tuple(self._popped)

    def contains(self, rule: str, start: int, input_idx: int, node: int) -> bool:
        """Return True if U holds a descriptor with these fields."""
        return (rule, start, input_idx, node) in self._seen_keys

    def add(
        self,
        rule: str,
        start: int,
        end: int,
        input_idx: int,
        node: int,
        label: LabelType,
    ) -> bool:
        """Add a descriptor to R and U unless U already has it.

        Returns True if the descriptor was new.  ``input_idx`` must be the
        lesser input index or the one after it.
        """
        if input_idx not in (self.lesser_input_idx, self.lesser_input_idx + 1):
            raise ValueError(
                f"descriptor input index {input_idx} is not "
                f"{self.lesser_input_idx} or {self.lesser_input_idx + 1}"
            )
        if self.contains(rule, start, input_idx, node):
            return False
        descriptor = Descriptor(rule, start, end, input_idx, node, LabelType(label))
        if input_idx == self.lesser_input_idx:
            self._pending.appendleft(descriptor)
            self._seen.appendleft(descriptor)
        else:
            self._pending.append(descriptor)
            self._seen.append(descriptor)
        self._seen_keys.add(descriptor.key)
        return True

    def take(self) -> Descriptor:
        """Remove and return the next descriptor of R."""
        if not self._pending:
            raise IndexError("no pending descriptors")
        return self._pending.popleft()

    def clean_lesser_from_u(self) -> None:
        """Drop the front descriptors of U at the lesser input index.

        If anything is left in U afterwards, the lesser index moves on by one.
        """
        while self._seen and self._seen[0].input_idx == self.lesser_input_idx:
            self._seen_keys.discard(self._seen.popleft().key)
        if self._seen:
            self.lesser_input_idx += 1

    def clean_lesser_from_p(self) -> None:
        """Drop the front entries of P at the lesser input index."""
        while self._popped and self._popped[0][1] == self.lesser_input_idx:
            self._popped_keys.discard(self._popped.popleft())

    def add_pop_entry(self, node: int, input_idx: int) -> bool:
        """Record that ``node`` was popped at ``input_idx``; True if it is new."""
        entry = (node, input_idx)
        if entry in self._popped_keys:
            return False
        self._popped.append(entry)
        self._popped_keys.add(entry)
        return True

    def popped_at(self, node: int) -> Iterator[int]:
        """Yield the input indices at which ``node`` has been popped."""
        for popped_node, input_idx in tuple(self._popped):
            if popped_node == node:
                yield input_idx

    def check_success(self, rule: str, input_idx: int) -> bool:
        """True if either end of U holds a finished ``rule`` at ``input_idx``."""
        if not self._seen:
            return False
        return any(
            d.rule == rule and d.input_idx == input_idx and d.start == d.end
            for d in (self._seen[-1], self._seen[0])
        )