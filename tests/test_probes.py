"""Tests for the probe factories in scanmark.probes."""

import re

import pytest

from scanmark import Match, Parser, token
from scanmark.probes import literal_start, literal_stop, regex_start, regex_stop


def _stack_with(info: object):  # type: ignore[no-untyped-def]
    """A NodeStack whose top node carries ``info``."""
    from scanmark import ScanState
    from scanmark.nodes import Span

    state = ScanState("")
    node = state.tree.new_node(0, "t", info, Span(0, 1), unit=False)
    state.stack._push(node.index)
    return state.stack


class TestRegexStart:
    def test_first_group_is_info(self) -> None:
        probe = regex_start(r"<(\w+)>")
        assert probe("ab<cd>", 0, None) == Match(2, 6, "cd")  # type: ignore[arg-type]

    def test_leftmost_at_or_after_offset(self) -> None:
        probe = regex_start(r"<(\w+)>")
        assert probe("<a><b>", 1, None) == Match(3, 6, "b")  # type: ignore[arg-type]
        assert probe("<a>", 1, None) is None  # type: ignore[arg-type]

    def test_named_group(self) -> None:
        probe = regex_start(r"\{(?P<name>\w+)\}", group="name")
        assert probe("{x}", 0, None) == Match(0, 3, "x")  # type: ignore[arg-type]

    def test_groupdict_info(self) -> None:
        probe = regex_start(r"(?P<k>\w+)=(?P<v>\w+)", group=None)
        match = probe("a=b", 0, None)  # type: ignore[arg-type]
        assert match is not None
        assert match.info == {"k": "a", "v": "b"}

    def test_pattern_without_groups_captures_whole_match(self) -> None:
        probe = regex_start(r"---")
        assert probe("a---", 0, None) == Match(1, 4, "---")  # type: ignore[arg-type]

    def test_compiled_pattern_and_flags(self) -> None:
        compiled = regex_start(re.compile(r"<(x)>", re.I))
        flagged = regex_start(r"<(x)>", flags=re.I)
        assert compiled("<X>", 0, None) == Match(0, 3, "X")  # type: ignore[arg-type]
        assert flagged("<X>", 0, None) == Match(0, 3, "X")  # type: ignore[arg-type]

    def test_missing_group_number_rejected(self) -> None:
        with pytest.raises(ValueError, match="no group 2"):
            regex_start(r"<(\w+)>", group=2)

    def test_explicit_group_on_groupless_pattern_rejected(self) -> None:
        with pytest.raises(ValueError, match="no group 3"):
            regex_start(r"---", group=3)

    def test_missing_group_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="no group 'tag'"):
            regex_start(r"<(?P<name>\w+)>", group="tag")


class TestRegexStop:
    def test_uses_top_of_stack_info(self) -> None:
        probe = regex_stop(r"</{info}>")
        assert probe("</a></b>", 0, _stack_with("b")) == Match(4, 8)

    def test_info_is_escaped(self) -> None:
        probe = regex_stop(r"\[{info}\.\]")
        assert probe("[a+.][a+.]", 1, _stack_with("a+")) == Match(5, 10)
        assert probe("[aa.]", 0, _stack_with("a+")) is None

    def test_doubled_braces_are_literal_quantifiers(self) -> None:
        probe = regex_stop(r"{info}x{{2}}")
        assert probe("qxqxx", 0, _stack_with("q")) == Match(2, 5)

    def test_drives_context_sensitive_closing(self) -> None:
        tag = token("tag", regex_start(r"<(\w+)>"), regex_stop(r"</{info}>"))
        tree = Parser([tag]).parse("<a><b>x</a></b>y</a>")
        assert tree.outline() == [("tag", [("tag", ["x</a>"]), "y"])]


class TestLiteralProbes:
    def test_literal_start(self) -> None:
        probe = literal_start("**", info="strong")
        assert probe("a**b", 0, None) == Match(1, 3, "strong")  # type: ignore[arg-type]
        assert probe("a**b", 2, None) is None  # type: ignore[arg-type]

    def test_literal_stop(self) -> None:
        assert literal_stop("*/")("/* x */", 2, None) == Match(5, 7)  # type: ignore[arg-type]

    def test_empty_literal_rejected(self) -> None:
        with pytest.raises(ValueError):
            literal_start("")
        with pytest.raises(ValueError):
            literal_stop("")

    def test_comment_token(self) -> None:
        comment = token("comment", literal_start("/*"), literal_stop("*/"))
        assert Parser([comment]).parse("a/*b*/c").outline() == ["a", ("comment", ["b"]), "c"]
