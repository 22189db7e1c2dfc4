"""Thread-safe parsing: 1000 doc comments in parallel."""

from concurrent.futures import ThreadPoolExecutor

from docmark import parse

docs = [f":n: {i}\n\n= Item {{n}}\n\nDocumentation for item {{n}}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parse, docs))

print(f"Parsed {len(results)} doc comments in parallel")
print("First doc parts:", len(results[0].parts))
print("Last header:", results[-1].parts[0].text.plain())
