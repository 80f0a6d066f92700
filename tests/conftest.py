"""Shared token definitions for the scanmark test suite.

The markup used throughout the tests is a small bracket language:
``[name]...[name.]`` pairs whose closer must repeat the opener's name,
and ``&name;`` entities.
"""

from __future__ import annotations

from typing import Any

import pytest

from scanmark import Parser, TokenDescriptor, token, unit_token
from scanmark.probes import regex_start, regex_stop

TAG_CLOSE = r"\[ *{info}\.\]"


def named_tag(name: str, **kwargs: Any) -> TokenDescriptor:
    """A pair token whose opener is exactly ``[name]``."""
    return token(name, regex_start(rf"\[({name})\]"), regex_stop(TAG_CLOSE), **kwargs)


def generic_tag(name: str = "tag", **kwargs: Any) -> TokenDescriptor:
    """A pair token opening on any ``[word]``."""
    return token(name, regex_start(r"\[(\w+)\]"), regex_stop(TAG_CLOSE), **kwargs)


def entity(name: str = "entity", **kwargs: Any) -> TokenDescriptor:
    return unit_token(name, regex_start(r"&(\w+);"), **kwargs)


class RecordingMachine:
    """Machine that logs every hook call as a tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def flush(self, text: str, state: Any) -> None:
        self.calls.append(("flush", text))

    def finish(self, state: Any) -> None:
        self.calls.append(("finish",))

    def __getattr__(self, name: str) -> Any:
        # start_<token> / end_<token> for any token name
        if name.startswith(("start_", "end_")):
            kind, _, token_name = name.partition("_")

            def hook(info: Any, state: Any) -> None:
                self.calls.append((kind, token_name, info))

            return hook
        raise AttributeError(name)


@pytest.fixture
def pbe_parser() -> Parser:
    """Parser with ``p`` and ``b`` pair tokens and an ``e`` entity token."""
    return Parser([named_tag("p"), named_tag("b"), entity("e")])


@pytest.fixture
def tag_parser() -> Parser:
    """Parser with one generic tag token and an entity token."""
    return Parser([generic_tag(), entity()])


@pytest.fixture
def recorder() -> RecordingMachine:
    return RecordingMachine()
