"""Extract entities from a post and render it as HTML."""

from chirp import StyleConfig, annotate, extract, to_json

post = "RT @alice: shipping #chirp 0.1 today, notes at https://example.com/notes $ACME"

for entity in extract(post):
    print(f"{entity.kind.value:>8}  {entity.indices.slice(post)!r}")

print(to_json(extract(post), indent=2))
print(annotate(post, style=StyleConfig(target="")))
