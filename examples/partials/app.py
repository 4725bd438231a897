"""Partial rendering -- the three partial() strategies in one page.

Demonstrates a blog index built from partials:

1. ``partial("header", {...})`` forwards explicit locals
2. ``partial("greeting", "Welcome back")`` binds one value as ``greeting``
3. ``partial("posts/summary", collection=posts)`` renders once per post

The page itself is rendered with the layout; every partial is rendered
without it.

Run:
    python app.py
"""

from pathlib import Path

from partialkit import Jinja2Engine, Value, resolve

templates_dir = Path(__file__).parent / "templates"
engine = Jinja2Engine.from_directory(templates_dir)

context = {
    "title": "Field Notes",
    "user": "Ada",
    "posts": [
        {"title": "Partials", "words": 1200},
        {"title": "Layouts", "words": 800},
        {"title": "Collections", "words": 450},
    ],
}

# Full page (index.html calls partial() for each section)
page_output = engine.render("index", {}, context)

# A single partial, as an HTMX-style fragment response. Value() binds the
# post dict as `summary` instead of spreading it into the locals.
fragment_output = engine.helper("posts/summary", Value(context["posts"][0]))

# The descriptor the helper hands to the engine
descriptor = resolve("greeting", "Welcome back")

output = page_output


def main() -> None:
    print("=== Page ===")
    print(page_output)
    print("\n=== Fragment ===")
    print(fragment_output)
    print("\n=== Descriptor ===")
    print(descriptor)


if __name__ == "__main__":
    main()
