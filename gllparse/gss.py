"""The graph-structured stack used by the GLL parser."""

from __future__ import annotations

from dataclasses import dataclass

from gllparse.descriptors import DescriptorSets, LabelType

ROOT_RULE = "0"


@dataclass(frozen=True)
class GSSNode:
    """A return point: a block of a rule, the input index and the label to resume."""

    rule: str
    start: int
    end: int
    input_idx: int
    label: LabelType


class GSS:
    """Nodes and edges of the stack, with the node currently in use.

    A fresh stack holds the invalid bottom node 0 and the base node 1 with an
    edge from 1 to 0; node 1 is current.
    """

    def __init__(self) -> None:
        self.nodes: list[GSSNode] = [
            GSSNode(ROOT_RULE, 0, 0, 0, LabelType.INVALID),
            GSSNode(ROOT_RULE, 0, 0, 0, LabelType.BASELOOP),
        ]
        self.edges: list[tuple[int, int]] = [(1, 0)]
        self._edge_set: set[tuple[int, int]] = {(1, 0)}
        self.current = 1

    def _find(self, rule: str, start: int, input_idx: int) -> int | None:
        return next(
            (
                idx
                for idx, node in enumerate(self.nodes)
                if node.rule == rule and node.start == start and node.input_idx == input_idx
            ),
            None,
        )

    def create(
        self,
        rule: str,
        start: int,
        end: int,
        input_idx: int,
        label: LabelType,
        sets: DescriptorSets,
    ) -> int:
        """Find or add a node, link it to the current node and return its index.

        For every recorded pop of that node a descriptor resuming it over the
        current node is added to ``sets``.
        """
        idx = self._find(rule, start, input_idx)
        if idx is None:
            idx = len(self.nodes)
            self.nodes.append(GSSNode(rule, start, end, input_idx, LabelType(label)))
        edge = (idx, self.current)
        if edge not in self._edge_set:
            self.edges.append(edge)
            self._edge_set.add(edge)
        node = self.nodes[idx]
        for popped_idx in sets.popped_at(idx):
            sets.add(node.rule, node.start, node.end, popped_idx, self.current, node.label)
        return idx

    def pop(self, input_idx: int, sets: DescriptorSets) -> bool:
        """Pop the current node at ``input_idx``.

        Records the pop in P and adds a descriptor for each edge leaving the
        current node.  Returns False if the current node is the bottom node.
        """
        if self.current == 0:
            return False
        sets.add_pop_entry(self.current, input_idx)
        node = self.nodes[self.current]
        for src, target in tuple(self.edges):
            if src == self.current:
                sets.add(node.rule, node.start, node.end, input_idx, target, node.label)
        return True