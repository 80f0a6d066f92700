"""Serialize a parse tree to JSON and load it back unchanged."""

from scanmark import from_json, parse, to_json, token, unit_token
from scanmark.probes import regex_start, regex_stop

tokens = [
    token("tag", regex_start(r"\[(\w+)\]"), regex_stop(r"\[{info}\.\]")),
    unit_token("entity", regex_start(r"&(\w+);")),
]

tree = parse("[p]Hello [b]World[b.]&tm;[p.]", tokens)
data = to_json(tree, indent=2)
print(data)

restored = from_json(data)
print("Round-trip equal:", restored == tree)
