"""Thread safe: one Parser, 1000 documents in parallel."""

from concurrent.futures import ThreadPoolExecutor

from scanmark import Parser, token, unit_token
from scanmark.probes import regex_start, regex_stop

parser = Parser(
    [
        token("tag", regex_start(r"\[(\w+)\]"), regex_stop(r"\[{info}\.\]")),
        unit_token("entity", regex_start(r"&(\w+);")),
    ]
)

docs = [f"[p]Doc {i} [b]bold {i}[b.]&e{i};[p.]" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parser.parse, docs))

print(f"Parsed {len(results)} documents in parallel")
print("First doc nodes:", len(results[0]))
print("Last doc outline:", results[-1].outline())
