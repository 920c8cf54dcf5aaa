"""
Tests for engine/ssr/formatter.py and engine/ssr/template.py
"""

from __future__ import annotations

import json

import pytest

from engine.ssr.errors import FormattingError
from engine.ssr.formatter import HTML_MEDIA_TYPE, JSON_MEDIA_TYPE, format_html, format_json
from engine.ssr.template import PageTemplate
from engine.ssr.types import RenderResult, ResponseEntry


class TestFormatHTML:
    def test_fragments_substituted_verbatim(self, template):
        result = RenderResult(head="<title>X</title>", body="<div>Y</div>")
        resp = format_html(template, result)
        assert resp.media_type == "text/html; charset=utf-8"
        assert resp.content == (
            b"<!DOCTYPE html><html><head><title>X</title></head><body><div>Y</div></body></html>"
        )

    def test_fragments_not_escaped(self, template):
        result = RenderResult(head="", body='<a href="/x?a=1&b=2">&amp;</a>')
        html = format_html(template, result).content.decode("utf-8")
        assert '<a href="/x?a=1&b=2">&amp;</a>' in html

    def test_unicode_encoded_as_utf8(self, template):
        resp = format_html(template, RenderResult(head="", body="<p>héllo ✓</p>"))
        assert "<p>héllo ✓</p>".encode() in resp.content

    def test_lone_surrogate_in_body(self, template):
        with pytest.raises(FormattingError):
            format_html(template, RenderResult(head="", body="<p>\ud800</p>"))

    def test_template_failure_is_formatting_error(self):
        broken = PageTemplate("<html>{{head</html>", name="broken.html")
        with pytest.raises(FormattingError, match="broken.html"):
            format_html(broken, RenderResult(head="a", body="b"))

    def test_template_from_build(self, tmp_path):
        (tmp_path / "template.html").write_text("<head>{{{head}}}</head>{{{body}}}", encoding="utf-8")
        tmpl = PageTemplate.from_build(tmp_path)
        assert tmpl.render(RenderResult(head="H", body="B")) == b"<head>H</head>B"


class TestFormatJSON:
    def test_exact_wire_format(self):
        entries = [ResponseEntry(file="/button.js", props={"label": "Hi"}, css=("button.css",))]
        resp = format_json(entries)
        assert resp.media_type == JSON_MEDIA_TYPE
        assert resp.content == b'[{"File":"/button.js","Props":{"label":"Hi"},"CSS":["button.css"]}]'

    def test_order_preserved(self):
        entries = [
            ResponseEntry(file="/layout.js", props={}, css=()),
            ResponseEntry(file="/button.js", props={}, css=()),
        ]
        data = json.loads(format_json(entries).content)
        assert [d["File"] for d in data] == ["/layout.js", "/button.js"]

    def test_empty_css_is_empty_list(self):
        data = json.loads(format_json([ResponseEntry(file="/", props={}, css=())]).content)
        assert data == [{"File": "/", "Props": {}, "CSS": []}]

    def test_empty_sequence(self):
        assert format_json([]).content == b"[]"

    def test_non_serializable_prop(self):
        entries = [ResponseEntry(file="/x.js", props={"when": object()}, css=())]
        with pytest.raises(FormattingError):
            format_json(entries)

    def test_lone_surrogate_in_props(self):
        entries = [ResponseEntry(file="/x.js", props={"s": "\ud800"}, css=())]
        with pytest.raises(FormattingError):
            format_json(entries)

    def test_nan_rejected(self):
        entries = [ResponseEntry(file="/x.js", props={"n": float("nan")}, css=())]
        with pytest.raises(FormattingError):
            format_json(entries)

    def test_html_media_type_constant(self):
        assert HTML_MEDIA_TYPE == "text/html; charset=utf-8"
