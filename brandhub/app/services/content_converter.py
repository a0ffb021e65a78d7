"""Convert stored page fields into markup for the page templates.

Fields arrive either as bare strings (trusted markup) or as tagged values
``{"type": "html"|"text"|"json", "value": ...}``. Only ``text`` and the text
nodes of ``json`` trees are escaped; everything else is injected as-is, so
the output must be wrapped with ``|safe`` / ``Markup`` by the caller.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Union

from ..schemas.page import ContentField, ContentKind, parse_content_field


VOID_TAGS = {"img", "br", "hr", "input", "meta", "link"}

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)
_STYLE_CLOSE_RE = re.compile(r"</(style)", re.IGNORECASE)

FieldInput = Union[str, Dict[str, Any], ContentField, None]


def escape_html(text: str) -> str:
    # "&" first so already produced entities are not escaped twice
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def render(field: FieldInput) -> str:
    if field is None:
        return ""
    if isinstance(field, str):
        return field
    parsed = parse_content_field(field)
    if parsed is None:
        return ""
    kind = parsed.kind
    value = parsed.value
    if kind == ContentKind.TEXT:
        return escape_html(_as_text(value))
    if kind == ContentKind.JSON:
        return render_json_tree(value)
    return _as_text(value)


def render_style(field: FieldInput) -> str:
    """CSS text for a ``<style>`` block, or "" when the field carries none."""
    if field is None:
        return ""
    parsed = parse_content_field(field, "style")
    if parsed is None or parsed.kind not in (ContentKind.CSS, ContentKind.PLAIN, ContentKind.TEXT):
        return ""
    css = _as_text(parsed.value)
    return _STYLE_CLOSE_RE.sub(r"<\\/\1", css)


def render_json_tree(nodes: Any) -> str:
    if not nodes:
        return ""
    if isinstance(nodes, list):
        return "".join(_render_node(node) for node in nodes)
    return _render_node(nodes)


def _render_node(node: Any) -> str:
    if not isinstance(node, dict):
        return ""
    node_type = node.get("type")
    if node_type == "text":
        return escape_html(_as_text(node.get("text")))
    tag = node.get("tag")
    if node_type != "element" or not tag:
        return ""
    attrs: Dict[str, Any] = node.get("attributes") or {}
    children: List[Any] = node.get("children") or []
    attr_str = " ".join(f'{key}="{escape_html(str(val))}"' for key, val in attrs.items())
    opening = f"<{tag} {attr_str}" if attr_str else f"<{tag}"
    if str(tag).lower() in VOID_TAGS:
        return f"{opening} />"
    inner = "".join(_render_node(child) for child in children)
    return f"{opening}>{inner}</{tag}>"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)
