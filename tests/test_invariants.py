"""Property-based tests for scanner invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from __future__ import annotations

from typing import Any

from conftest import entity, generic_tag, named_tag
from hypothesis import given, settings
from hypothesis import strategies as st

from scanmark import Node, Parser, ScanState, Text, reconstruct, walk

# Inputs built from fragments of the bracket language plus noise
fragments = st.sampled_from(
    ["[p]", "[p.]", "[b]", "[b.]", "[ b.]", "&tm;", "&", ";", "[", "]", ".", "\n", "x", " ", "ab"]
)
markup = st.lists(fragments, max_size=40).map("".join)


def _parser(machine: object | None = None) -> Parser:
    return Parser([named_tag("p"), generic_tag("tag"), entity("e")], machine=machine)


class EventCounter:
    """Machine counting events and checking cursor monotonicity."""

    def __init__(self) -> None:
        self.starts = 0
        self.ends = 0
        self.finishes = 0
        self.offsets: list[int] = []
        self.units = 0
        self.final_depth = -1

    def flush(self, text: str, state: ScanState) -> None:
        self.offsets.append(state.offset)

    def finish(self, state: ScanState) -> None:
        self.finishes += 1
        self.final_depth = state.stack.depth

    def start_p(self, info: Any, state: ScanState) -> None:
        self.starts += 1
        self.offsets.append(state.offset)

    start_tag = start_p

    def end_p(self, info: Any, state: ScanState) -> None:
        self.ends += 1
        self.offsets.append(state.offset)

    end_tag = end_p

    def start_e(self, info: Any, state: ScanState) -> None:
        self.units += 1
        self.offsets.append(state.offset)


class TestReconstruction:
    """Text children plus marker spans rebuild the input exactly."""

    @given(markup)
    @settings(max_examples=300)
    def test_reconstruct_roundtrip(self, text: str) -> None:
        assert reconstruct(_parser().parse(text)) == text

    @given(st.text(max_size=200))
    @settings(max_examples=200)
    def test_reconstruct_arbitrary_text(self, text: str) -> None:
        assert reconstruct(_parser().parse(text)) == text


class TestStructure:
    """Tree shape invariants."""

    @given(markup)
    @settings(max_examples=300)
    def test_outer_contains_inner(self, text: str) -> None:
        tree = _parser().parse(text)
        for node in tree.iter_nodes():
            if node.inner_range is not None:
                assert node.outer_range is not None
                assert node.outer_range.contains(node.inner_range)

    @given(markup)
    @settings(max_examples=300)
    def test_units_are_closed_leaves(self, text: str) -> None:
        tree = _parser().parse(text)
        for node in tree.find_all("e"):
            assert node.unit
            assert node.children == []
            assert node.outer_range == node.open_span

    @given(markup)
    @settings(max_examples=300)
    def test_parent_child_links_agree(self, text: str) -> None:
        tree = _parser().parse(text)
        for node in tree.nodes:
            for child in node.children:
                if isinstance(child, int):
                    assert tree.nodes[child].parent == node.index

    @given(markup)
    @settings(max_examples=300)
    def test_document_order(self, text: str) -> None:
        tree = _parser().parse(text)
        starts = []
        for _, item in walk(tree):
            if isinstance(item, Text):
                starts.append(item.span.start)
            else:
                assert isinstance(item, Node) and item.open_span is not None
                starts.append(item.open_span.start)
        assert starts == sorted(starts)

    @given(markup)
    @settings(max_examples=200)
    def test_no_empty_text_children(self, text: str) -> None:
        tree = _parser().parse(text)
        for node in tree.nodes:
            for child in node.children:
                if isinstance(child, Text):
                    assert child.content
                    assert child.span.slice(text) == child.content


class TestBalance:
    """Event accounting over a whole scan."""

    @given(markup)
    @settings(max_examples=300)
    def test_balanced_when_all_closed(self, text: str) -> None:
        counter = EventCounter()
        tree = _parser(counter).parse(text)
        assert counter.finishes == 1
        if not tree.open_nodes():
            assert counter.starts == counter.ends
            assert counter.final_depth == 0
        else:
            assert counter.starts - counter.ends == len(tree.open_nodes())

    @given(markup)
    @settings(max_examples=300)
    def test_offsets_never_decrease(self, text: str) -> None:
        counter = EventCounter()
        _parser(counter).parse(text)
        assert counter.offsets == sorted(counter.offsets)
        assert all(0 <= o <= len(text) for o in counter.offsets)

    @given(markup)
    @settings(max_examples=200)
    def test_parse_is_deterministic(self, text: str) -> None:
        parser = _parser()
        assert parser.parse(text) == parser.parse(text)
