from __future__ import annotations

import bleach

# Note rows are a single line of rich text in a QLabel: inline markup only.
ALLOWED_TAGS = [
    "a", "br",
    "strong", "em", "code", "del", "s",
]
ALLOWED_ATTRS = {
    "a": ["href", "title"],
}
ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def sanitize_rendered_html(rendered_html: str) -> str:
    """
    Sanitize HTML output from Markdown before handing it to a rich-text label.
    Anything outside the allow-list is stripped, not rendered.
    """
    return bleach.clean(
        rendered_html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRS,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
