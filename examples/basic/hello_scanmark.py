"""Tags and entities in a few lines: declare tokens, parse, inspect the tree."""

from scanmark import parse, token, unit_token
from scanmark.probes import regex_start, regex_stop

tag = token("tag", regex_start(r"\[ *(\w+)\]"), regex_stop(r"\[ *{info}\.\]"))
entity = unit_token("entity", regex_start(r"&(\w+);"))

tree = parse("[p]Hello [b]World[b.]&tm;[p.]\n", [tag, entity])

print(tree.outline())
for node in tree.iter_nodes():
    print(f"  {node.token}({node.info!r}) outer={node.outer_range} inner={node.inner_range}")
