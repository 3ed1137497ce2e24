from __future__ import annotations

import html
import re

import markdown as md

from section_notes.core.sanitize import sanitize_rendered_html

_OUTER_P_RE = re.compile(r"(?s)\A\s*<p>(.*)</p>\s*\Z")

# Block syntax would eat list/heading/quote markers the user typed.
_BLOCK_PROCESSORS = (
    "indent",
    "code",
    "hashheader",
    "setextheader",
    "hr",
    "olist",
    "ulist",
    "quote",
    "reference",
)


def _inline_markdown() -> md.Markdown:
    converter = md.Markdown()
    for name in _BLOCK_PROCESSORS:
        converter.parser.blockprocessors.deregister(name, strict=False)
    return converter


class NoteTextRenderer:
    """
    note text -> HTML for a note row:
      1) escape the text, so typed "<div>" stays literal
      2) inline markdown only (bold, emphasis, code, links)
      3) sanitize HTML (inline tags only)
    Every character of the note stays visible. Results are cached per text
    since lists are rebuilt on every mutation.
    """

    def __init__(self, *, cache_size: int = 512):
        self._md = _inline_markdown()
        self._cache: dict[str, str] = {}
        self._cache_size = max(0, int(cache_size))

    def render(self, text: str) -> str:
        cached = self._cache.get(text)
        if cached is not None:
            return cached

        rendered = self._md.reset().convert(html.escape(text, quote=False))
        m = _OUTER_P_RE.match(rendered)
        if m and "<p>" not in m.group(1):
            rendered = m.group(1)
        html_out = sanitize_rendered_html(rendered).strip()

        if len(self._cache) >= self._cache_size:
            self._cache.clear()
        if self._cache_size:
            self._cache[text] = html_out
        return html_out
