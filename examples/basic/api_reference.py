"""Pick argument and return-value blocks out of a function's doc comment."""

from docmark import HtmlRenderer, collect_doc_comment, parse

# One value per doc attribute, as a compiler front end would hand them over
doc_values = [
    " Copies `len` bytes from `src` into `dst`.",
    "",
    ":ret: the number of bytes copied",
    "",
    "[argument, dst]",
    "Destination buffer.",
    "",
    "[argument, src]",
    "Source buffer. Same rules as link:man:memcpy(3) apply.",
    "",
    "[return_value]",
    "Returns {ret}.",
]

doc = parse(collect_doc_comment(doc_values))
renderer = HtmlRenderer()

print("Summary:", renderer.short(doc))
for name in ("dst", "src"):
    print(f"{name}:", renderer.argument(doc, name))
if renderer.has_return_value(doc):
    print("returns:", renderer.return_value(doc))
