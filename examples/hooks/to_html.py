"""Render bracket markup as HTML from hooks alone, without touching the tree."""

from html import escape
from typing import Any

from scanmark import BaseMachine, Parser, ScanState, token, unit_token
from scanmark.probes import regex_start, regex_stop


class HtmlWriter(BaseMachine):
    def __init__(self) -> None:
        self.parts: list[str] = []

    def flush(self, text: str, state: ScanState) -> None:
        self.parts.append(escape(text))

    def start_tag(self, info: Any, state: ScanState) -> None:
        self.parts.append(f"<{info}>")

    def end_tag(self, info: Any, state: ScanState) -> None:
        self.parts.append(f"</{info}>")

    def start_entity(self, info: Any, state: ScanState) -> None:
        self.parts.append(f"&{info};")


writer = HtmlWriter()
parser = Parser(
    [
        token("tag", regex_start(r"\[(\w+)\]"), regex_stop(r"\[{info}\.\]")),
        unit_token("entity", regex_start(r"&(\w+);")),
    ],
    machine=writer,
)
parser.parse("[p]Fish [i]&amp;[i.] chips < 5 pounds[p.]")
print("".join(writer.parts))
