from __future__ import annotations

import io

import pytest

from sakpro.sanitize import SanitizeError, TagFilter, clean_attributes, clean_html, clean_html_string, decode_markup

scenarios = [
    ("<p></p>", ""),
    ("<p><br></p>", ""),
    ("<h2>Title</h2>", "<h3>Title</h3>"),
    ('<a name="x">Label</a>', "Label"),
    ('<script>alert(1)</script><p class="other">Hi</p>', "<p>Hi</p>"),
    (
        "<p>Tidsskriftet Sakprosa</p><p>Bind 1, Nummer 2</p><p>Â© 2020</p>",
        "<p>Tidsskriftet Sakprosa<br>Bind 1, Nummer 2<br>Â© 2020</p>",
    ),
]


@pytest.mark.parametrize(("html", "expected"), scenarios)
def test_end_to_end(html: str, expected: str) -> None:
    assert clean_html(io.BytesIO(html.encode("utf-8"))) == expected


def test_unknown_tags_leave_only_text() -> None:
    html = "<div><span>Hello</span> <font color='red'>world</font></div>"
    assert clean_html_string(html) == "Hello world"


def test_allowed_tags_keep_filtered_attributes() -> None:
    html = '<a href="/x" onclick="steal()" target="_blank">go</a>'
    assert clean_html_string(html) == '<a href="/x">go</a>'


def test_self_closing_tag_rendering() -> None:
    html = '<img src="a.png" alt="A" onerror="boom()"/>'
    assert clean_html_string(html) == '<img src="a.png" alt="A"/>'


def test_text_and_attribute_values_are_escaped() -> None:
    html = '<p>Fish &amp; chips &lt;3</p><a href="/?a=1&amp;b=2">q</a>'
    assert clean_html_string(html) == '<p>Fish &amp; chips &lt;3</p><a href="/?a=1&amp;b=2">q</a>'


def test_comments_and_doctype_are_dropped() -> None:
    assert clean_html_string("<!DOCTYPE html><!-- note --><b>x</b>") == "<b>x</b>"


@pytest.mark.parametrize(
    ("html", "expected"),
    [
        ('<p class="abstract">x</p>', '<p class="abstract">x</p>'),
        ('<p class="ABSTRACT">x</p>', '<p class="ABSTRACT">x</p>'),
        ('<p class="abstract intro">x</p>', "<p>x</p>"),
        ('<p class="">x</p>', "<p>x</p>"),
        ("<p class>x</p>", "<p>x</p>"),
    ],
)
def test_class_only_survives_as_abstract(html: str, expected: str) -> None:
    assert clean_html_string(html) == expected


def test_clean_attributes_keeps_order_and_duplicates() -> None:
    attrs = [
        ("class", "other"),
        ("href", "a"),
        ("onclick", "x()"),
        ("title", ""),
        ("alt", None),
        ("href", "b"),
        ("class", "Abstract"),
    ]
    assert clean_attributes(attrs) == [("href", "a"), ("href", "b"), ("class", "Abstract")]


def test_clean_attributes_respects_allowed_set() -> None:
    attrs = [("href", "a"), ("src", "b")]
    assert clean_attributes(attrs, frozenset({"src"})) == [("src", "b")]


def test_ignored_subtree_is_dropped() -> None:
    html = "<p>a</p><object><p>hidden <b>bold</b></p></object><p>b</p>"
    assert clean_html_string(html) == "<p>a</p><p>b</p>"


def test_same_named_self_closing_tag_ends_ignore_region() -> None:
    assert clean_html_string("<object>hidden<object/>shown") == "shown"


def test_nested_same_named_ignore_closes_early() -> None:
    html = "<object>a<object>b</object>c</object>d"
    assert clean_html_string(html) == "cd"


def test_other_ignored_tag_inside_region_does_not_replace_it() -> None:
    html = "<object><applet>x</applet>y</object>z"
    assert clean_html_string(html) == "z"


def test_allowed_tags_inside_ignore_region_are_dropped() -> None:
    html = "<applet><h1>t</h1><br/></applet><h1>u</h1>"
    assert clean_html_string(html) == "<h1>u</h1>"


def test_stream_errors_propagate() -> None:
    class BrokenStream:
        def read(self) -> bytes:
            raise OSError("device not ready")

    with pytest.raises(OSError, match="device not ready"):
        clean_html(BrokenStream())


def test_text_stream_is_accepted() -> None:
    assert clean_html(io.StringIO("<p>Hei</p>")) == "<p>Hei</p>"


def test_declared_charset_is_used() -> None:
    data = '<meta charset="iso-8859-1"><p>Blåbær</p>'.encode("latin-1")
    assert clean_html(io.BytesIO(data)) == "<p>Blåbær</p>"


def test_utf8_without_declaration() -> None:
    assert decode_markup("<p>Blåbær</p>".encode("utf-8")) == "<p>Blåbær</p>"


def test_decode_markup_passes_text_through() -> None:
    assert decode_markup("<p>x</p>") == "<p>x</p>"
    assert decode_markup(b"") == ""


def test_tokenizer_failure_is_a_sanitize_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def reject(self, data: str) -> None:
        raise AssertionError("unknown status keyword 'foo' in marked section")

    monkeypatch.setattr(TagFilter, "feed", reject)
    with pytest.raises(SanitizeError, match="unknown status keyword") as info:
        clean_html(io.BytesIO(b"<p>a</p><![foo]><p>b</p>"))
    assert isinstance(info.value.__cause__, AssertionError)


def test_stray_byte_keeps_utf8_text() -> None:
    data = "<p>Tidsskriftet Sakprosa</p><p>Bind 1, Nummer 2</p><p>Â© 2020</p><p>Blåbær".encode("utf-8") + b"\xff</p>"
    cleaned = clean_html(io.BytesIO(data))
    assert cleaned.startswith("<p>Tidsskriftet Sakprosa<br>Bind 1, Nummer 2<br>Â© 2020</p>")
    assert cleaned.encode("utf-8", errors="surrogateescape").endswith("<p>Blåbær".encode("utf-8") + b"\xff</p>")


def test_declared_utf8_with_stray_byte() -> None:
    data = b'<meta charset="utf-8"><p>Bl\xc3\xa5b\xe6r</p>'
    assert decode_markup(data) == '<meta charset="utf-8"><p>Blåb\udce6r</p>'
