"""Hook into every boundary: a machine that prints what the scanner sees."""

from typing import Any

from scanmark import BaseMachine, Parser, ScanState, token, unit_token
from scanmark.probes import regex_start, regex_stop


class Printer(BaseMachine):
    def flush(self, text: str, state: ScanState) -> None:
        print(f"{'  ' * state.stack.depth}text {text!r}")

    def start_tag(self, info: Any, state: ScanState) -> None:
        print(f"{'  ' * (state.stack.depth - 1)}open <{info}>")

    def end_tag(self, info: Any, state: ScanState) -> None:
        print(f"{'  ' * state.stack.depth}close <{info}>")

    def start_entity(self, info: Any, state: ScanState) -> None:
        print(f"{'  ' * state.stack.depth}entity &{info};")

    def finish(self, state: ScanState) -> None:
        print(f"done at offset {state.offset}")


tokens = [
    token("tag", regex_start(r"\[ *(\w+)\]"), regex_stop(r"\[ *{info}\.\]")),
    unit_token("entity", regex_start(r"&(\w+);")),
]

Parser(tokens, machine=Printer()).parse("[p]Hello [b]World[b.]&tm;[p.]\n")
