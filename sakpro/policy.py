"""
Fixed cleaning policy. These tables are not user input.
"""

# Elements dropped together with everything nested inside them.
IGNORE_TAGS = frozenset(
    {
        "title",
        "script",
        "style",
        "iframe",
        "frame",
        "frameset",
        "noframes",
        "noembed",
        "embed",
        "applet",
        "object",
        "base",
    }
)

ALLOWED_TAGS = frozenset(
    {
        "html",
        "body",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "p",
        "br",
        "b",
        "i",
        "strong",
        "em",
        "ol",
        "ul",
        "li",
        "a",
        "img",
        "pre",
        "code",
        "blockquote",
        "table",
        "tr",
        "th",
        "td",
        "tbody",
        "thead",
        "caption",
    }
)

ALLOWED_ATTRIBUTES = frozenset({"class", "src", "href", "title", "alt", "name"})

# The only class marker kept; compared case-insensitively.
ALLOWED_CLASS = "abstract"
