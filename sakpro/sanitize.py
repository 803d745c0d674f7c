#!/usr/bin/env python3
# /// script
# requires-python = ">=3.10"
# dependencies = ["beautifulsoup4"]
# ///

"""
SPDX-License-Identifier: MIT
© 2025 Tidsskriftet Sakprosa. Released under the MIT license.

sanitize.py – token level HTML cleaning.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser
from typing import BinaryIO, Iterable, TextIO

from bs4.dammit import EncodingDetector, EntitySubstitution, UnicodeDammit

from sakpro.normalize import normalize_markup
from sakpro.policy import ALLOWED_ATTRIBUTES, ALLOWED_CLASS, ALLOWED_TAGS, IGNORE_TAGS

log = logging.getLogger(__name__)

Attribute = tuple[str, str | None]


class SanitizeError(ValueError):
    """Raised when the tokenizer gives up on a document."""


def decode_markup(data: bytes | str) -> str:
    """
    Turn raw document bytes into text.

    :param data: Document content as read from the stream.
    :returns: Decoded markup. ``str`` input is returned untouched.
    :notes:
        - Undeclared and UTF-8 declared documents are decoded as UTF-8 with
          ``surrogateescape``, so stray bytes survive a round trip unchanged.
        - A byte order mark or another ``<meta charset>`` declaration is left
          to ``UnicodeDammit``.
    """
    if isinstance(data, str):
        return data
    if not data:
        return ""
    _, sniffed = EncodingDetector.strip_byte_order_mark(data)
    declared = EncodingDetector.find_declared_encoding(data, is_html=True)
    if sniffed is None and declared in (None, "utf-8", "utf8"):
        return data.decode("utf-8", errors="surrogateescape")
    dammit = UnicodeDammit(data, is_html=True, user_encodings=["utf-8"])
    log.debug("[sanitize.decode_markup] encoding=%s", dammit.original_encoding)
    return dammit.unicode_markup


def clean_attributes(attrs: Iterable[Attribute], allowed: frozenset[str] = ALLOWED_ATTRIBUTES) -> list[tuple[str, str]]:
    """
    Reduce an attribute list to allowed keys with non-empty values.

    :param attrs: ``(key, value)`` pairs in source order; duplicates are kept.
    :param allowed: Attribute keys that may survive.
    :returns: Surviving pairs in their original order.
    :notes:
        - ``class`` is emptied (and so dropped) unless its value is the
          ``abstract`` marker, in any case.
    """
    cleaned = []
    for key, value in attrs:
        if key not in allowed:
            continue
        value = value or ""
        if key == "class" and value.lower() != ALLOWED_CLASS:
            value = ""
        if value:
            cleaned.append((key, value))
    return cleaned


def render_text(text: str) -> str:
    return EntitySubstitution.substitute_xml(text)


def render_start_tag(name: str, attrs: Iterable[tuple[str, str]], self_closing: bool = False) -> str:
    parts = [name]
    for key, value in attrs:
        parts.append("%s=%s" % (key, EntitySubstitution.substitute_xml(value, make_quoted_attribute=True)))
    return "<%s%s>" % (" ".join(parts), "/" if self_closing else "")


def render_end_tag(name: str) -> str:
    return "</%s>" % name


class TagFilter(HTMLParser):
    """
    Tokenizer callbacks that keep the allowed subset of a document.

    Only one ignore region is tracked at a time, by tag name. A nested
    element with the same name closes it early, and a different ignorable
    element opened inside it is simply dropped.
    """

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.buffer: list[str] = []
        self.ignore: str | None = None

    def handle_starttag(self, tag: str, attrs: list[Attribute]) -> None:
        if self.ignore is None and tag in ALLOWED_TAGS:
            self.buffer.append(render_start_tag(tag, clean_attributes(attrs)))
        elif tag in IGNORE_TAGS:
            if self.ignore is None:
                self.ignore = tag

    def handle_startendtag(self, tag: str, attrs: list[Attribute]) -> None:
        if self.ignore is None and tag in ALLOWED_TAGS:
            self.buffer.append(render_start_tag(tag, clean_attributes(attrs), self_closing=True))
        elif tag == self.ignore:
            self.ignore = None

    def handle_endtag(self, tag: str) -> None:
        if self.ignore is None and tag in ALLOWED_TAGS:
            self.buffer.append(render_end_tag(tag))
        elif tag == self.ignore:
            self.ignore = None

    def handle_data(self, data: str) -> None:
        if self.ignore is None:
            self.buffer.append(render_text(data))

    def getvalue(self) -> str:
        return "".join(self.buffer)


def clean_html_string(markup: bytes | str) -> str:
    """
    Clean an in-memory document.

    :param markup: Raw HTML, as bytes or text.
    :returns: Filtered and normalized markup.
    :raises SanitizeError: If the tokenizer rejects the markup.
    """
    text = decode_markup(markup)
    parser = TagFilter()
    try:
        parser.feed(text)
        parser.close()
    except AssertionError as e:
        raise SanitizeError("Unable to tokenize document: %s" % e) from e
    raw = parser.getvalue()
    log.debug("[sanitize.clean_html_string] input_len=%d filtered_len=%d", len(text), len(raw))
    return normalize_markup(raw)


def clean_html(stream: BinaryIO | TextIO) -> str:
    """
    Clean the HTML document readable from ``stream``.

    :param stream: Readable stream positioned at the start of the document.
    :returns: The cleaned markup.
    :workflow:
        1. Read the stream to exhaustion.
        2. Decode and tokenize; drop ignored subtrees, unknown tags and
           disallowed attributes.
        3. Run the structural normalizer once over the full result.
    :notes:
        - Read errors propagate unchanged; nothing partial is returned.
        - Tokenizer failures raise ``SanitizeError``.
    """
    return clean_html_string(stream.read())
