"""Minimal markdown to HTML for mail bodies.

Handles bold, italic, links, bulleted and numbered lists and line breaks;
anything else passes through as escaped text.
"""
from __future__ import annotations

import re
from typing import List

_BOLD_STARS = re.compile(r"\*\*(.+?)\*\*")
_BOLD_UNDERSCORES = re.compile(r"__(.+?)__")
_ITALIC_STAR = re.compile(r"(?<!\w)\*([^*]+?)\*(?!\w)")
_ITALIC_UNDERSCORE = re.compile(r"(?<!\w)_([^_]+?)_(?!\w)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_UL_ITEM = re.compile(r"^\s*[-*]\s+(.+)$")
_OL_ITEM = re.compile(r"^\s*\d+\.\s+(.+)$")
# Newlines not followed by a list tag become <br>
_BREAK = re.compile(r"\n(?!</?[uo]l>|</?li>)")

_MARKDOWN_HINTS = re.compile(
    r"\*\*.+?\*\*|__.+?__|(?<!\w)\*[^*]+?\*(?!\w)|(?<!\w)_[^_]+?_(?!\w)"
    r"|\[.+?\]\(.+?\)|^\s*[-*]\s+|^\s*\d+\.\s+",
    re.MULTILINE,
)

HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
  body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.5; }}
  a {{ color: #0066cc; }}
  ul, ol {{ margin: 10px 0; padding-left: 20px; }}
  li {{ margin: 5px 0; }}
</style>
</head>
<body>
{body}
</body>
</html>"""


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _inline(text: str) -> str:
    text = _BOLD_STARS.sub(r"<strong>\1</strong>", text)
    text = _BOLD_UNDERSCORES.sub(r"<strong>\1</strong>", text)
    text = _ITALIC_STAR.sub(r"<em>\1</em>", text)
    text = _ITALIC_UNDERSCORE.sub(r"<em>\1</em>", text)
    return _LINK.sub(r'<a href="\2">\1</a>', text)


def _lists(lines: List[str]) -> List[str]:
    out: List[str] = []
    open_tag = None
    for line in lines:
        ul = _UL_ITEM.match(line)
        ol = None if ul else _OL_ITEM.match(line)
        tag = "ul" if ul else "ol" if ol else None
        if open_tag and tag != open_tag:
            out.append(f"</{open_tag}>")
            open_tag = None
        if tag is None:
            out.append(line)
            continue
        if open_tag is None:
            out.append(f"<{tag}>")
            open_tag = tag
        out.append(f"<li>{(ul or ol).group(1)}</li>")
    if open_tag:
        out.append(f"</{open_tag}>")
    return out


def markdown_body(text: str) -> str:
    """Convert markdown to an HTML fragment (no document wrapper)."""
    html = _inline(_escape(text))
    html = "\n".join(_lists(html.split("\n")))
    return _BREAK.sub("<br>\n", html)


def markdown_to_html(text: str) -> str:
    """Convert markdown to a complete HTML document suitable for a mail body."""
    return HTML_TEMPLATE.format(body=markdown_body(text))


def has_markdown(text: str) -> bool:
    """True when ``text`` contains any formatting ``markdown_to_html`` understands."""
    return bool(_MARKDOWN_HINTS.search(text or ""))


__all__ = ["markdown_body", "markdown_to_html", "has_markdown"]
