"""Raw tokens: everything between the markers is text, even other markup."""

from scanmark import parse, token, unit_token
from scanmark.probes import literal_start, literal_stop, regex_start, regex_stop

tokens = [
    token("code", literal_start("[code]", info="code"), literal_stop("[code.]"), raw=True),
    token("tag", regex_start(r"\[(\w+)\]"), regex_stop(r"\[{info}\.\]")),
    unit_token("entity", regex_start(r"&(\w+);")),
]

tree = parse("[p]Use [code][b]x[b.] &amp;[code.] for [b]bold[b.][p.]", tokens)
print(tree.outline())
