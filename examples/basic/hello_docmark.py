"""Parse and render a doc comment in 3 lines, zero config, zero deps."""

from docmark import parse, render

doc = parse("Adds two numbers.\n\n= Remarks\n\nThe sum is *not* checked for overflow.\n")
html = render(doc)
print(html)
