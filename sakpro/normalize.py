"""
Structural cleanup of filtered markup.

Every pass takes and returns the whole document. They run in the order of
``PASSES``; later passes rely on the whitespace collapsing done first.
"""

import re

NBSP_RE = re.compile("\u00a0+")
# Only ASCII whitespace is structural; thin and em spaces belong to the text.
WHITESPACE_RE = re.compile(r"\s+", re.ASCII)
BR_RUN_RE = re.compile(r"(<br>\s*)+", re.ASCII)
LEADING_BR_RE = re.compile(r"<p>(\s*<br>\s*)+", re.ASCII)
TRAILING_BR_RE = re.compile(r"(\s*<br>\s*)+</p>", re.ASCII)
BLANK_HEADING_RE = re.compile(r"<(h[1-6])>\s*</\1>", re.ASCII)
BLANK_BOLD_RE = re.compile(r"<b>\s*</b>", re.ASCII)
BLANK_ITALICS_RE = re.compile(r"<i>\s*</i>", re.ASCII)
BLANK_PARAGRAPH_RE = re.compile(r"<p>\s*</p>", re.ASCII)
CELL_PARAGRAPH_RE = re.compile(r"<td>\s*<p>(.*?)</p>\s*</td>", re.ASCII)
NAME_ANCHOR_RE = re.compile(r'<a name="[^"]+">(.*?)</a>')
MASTHEAD_RE = re.compile(
    r"<p>\s*(Tidsskriftet Sakprosa)\s*</p>\s*"
    r"<p>\s*(Bind \d+, Nummer \d+)\s*</p>\s*"
    r"<p>\s*(Â© \d+)\s*</p>",
    re.ASCII,
)
H2_TAG_RE = re.compile(r"<(/?)h2([\s/>])", re.ASCII)


def replace_nbsp(markup: str) -> str:
    return NBSP_RE.sub(" ", markup)


def collapse_whitespace(markup: str) -> str:
    return WHITESPACE_RE.sub(" ", markup)


def collapse_breaks(markup: str) -> str:
    return BR_RUN_RE.sub("<br>", markup)


def strip_leading_breaks(markup: str) -> str:
    return LEADING_BR_RE.sub("<p>", markup)


def strip_trailing_breaks(markup: str) -> str:
    return TRAILING_BR_RE.sub("</p>", markup)


def drop_bold_break(markup: str) -> str:
    return markup.replace("<b><br></b>", "")


def drop_blank_headings(markup: str) -> str:
    """Headings holding only whitespace become one space."""
    return BLANK_HEADING_RE.sub(" ", markup)


def drop_blank_bold(markup: str) -> str:
    return BLANK_BOLD_RE.sub(" ", markup)


def drop_blank_italics(markup: str) -> str:
    return BLANK_ITALICS_RE.sub(" ", markup)


def drop_blank_paragraphs(markup: str) -> str:
    return BLANK_PARAGRAPH_RE.sub("", markup)


def unwrap_cell_paragraphs(markup: str) -> str:
    return CELL_PARAGRAPH_RE.sub(r"<td>\1</td>", markup)


def unwrap_name_anchors(markup: str) -> str:
    """Anchors that are only link targets keep their text and lose the tag."""
    return NAME_ANCHOR_RE.sub(r"\1", markup)


def merge_masthead(markup: str) -> str:
    """
    Fold the journal masthead (title, volume/number, copyright) into a
    single paragraph separated by line breaks.
    """
    return MASTHEAD_RE.sub(r"<p>\1<br>\2<br>\3</p>", markup)


def merge_break_before_rule(markup: str) -> str:
    return markup.replace("<br><hr>", "<hr>")


def demote_h2(markup: str) -> str:
    return H2_TAG_RE.sub(r"<\1h3\2", markup)


PASSES = (
    replace_nbsp,
    collapse_whitespace,
    collapse_breaks,
    strip_leading_breaks,
    strip_trailing_breaks,
    drop_bold_break,
    drop_blank_headings,
    drop_blank_bold,
    drop_blank_italics,
    drop_blank_paragraphs,
    unwrap_cell_paragraphs,
    unwrap_name_anchors,
    merge_masthead,
    collapse_whitespace,
    merge_break_before_rule,
    demote_h2,
)


def normalize_markup(markup: str) -> str:
    for rewrite in PASSES:
        markup = rewrite(markup)
    return markup
