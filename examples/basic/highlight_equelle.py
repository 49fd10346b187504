"""Highlight and re-indent an Equelle program — zero config, zero deps."""

from equelle_mode import highlight, reindent

source = """\
k : Scalar = InputScalarWithDefault("k", 0.3)
computeFlux(u) = {
fluxes = -k * Gradient(u)
-> fluxes
}"""

for spans in highlight(source):
    print(" ".join(f"{text!r}:{style}" for text, style in spans if style != "whitespace"))

print()
print(reindent(source))
