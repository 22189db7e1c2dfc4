"""Cache parsed doc comments to disk with a JSON round-trip."""

from docmark import parse
from docmark.serialization import from_json, to_json

doc = parse("= Description\n\n|===\n|name|type\n|len|`usize`\n|===\n")

json_str = to_json(doc)
restored = from_json(json_str)

print("Original == restored:", doc == restored)
print("JSON length:", len(json_str), "chars")
