"""Re-tokenize only what changed — stops once the block state converges."""

from equelle_mode import IncrementalDocument

original = "f(x) = {\n  y = x\n  -> y\n}\nz = f(1)"
doc = IncrementalDocument(original)

# User edits "  y = x" → "  y = x * 2"
count = doc.edit(1, 2, ["  y = x * 2"])
print("Lines re-tokenized after a local edit:", count)

# User deletes the closing brace: everything after it moves one level deeper
count = doc.edit(3, 4, [])
print("Lines re-tokenized after a structural edit:", count)
print("Indent for last line:", doc.indent_for(len(doc) - 1))
