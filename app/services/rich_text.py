"""
Serializers for the content API's structured rich text.

A rich text field is a list of blocks such as::

    {"type": "paragraph", "text": "Hello world", "spans": [
        {"start": 0, "end": 5, "type": "strong"}
    ]}

`as_text` gives the plain-text projection used for word counts and
`as_html` the markup inserted into post pages. They are independent
derivations of the same blocks.
"""

import logging
from typing import Callable, List, Optional

from markupsafe import escape

logger = logging.getLogger(__name__)

LinkResolver = Callable[[dict], str]

LIST_TAGS = {"list-item": "ul", "o-list-item": "ol"}
TEXT_TAGS = {
    "heading1": "h1",
    "heading2": "h2",
    "heading3": "h3",
    "heading4": "h4",
    "heading5": "h5",
    "heading6": "h6",
    "paragraph": "p",
    "preformatted": "pre",
}


def resolve_link(link: dict) -> str:
    """Map a link to a URL; documents of type posts go to their page."""
    if link.get("link_type") == "Document":
        if link.get("type") == "posts" and link.get("uid"):
            return f"/post/{link['uid']}"
        return "/"
    return link.get("url", "")


def as_text(blocks: Optional[List[dict]], join_with: str = " ") -> str:
    if not blocks:
        return ""
    return join_with.join(block["text"] for block in blocks if "text" in block)


def as_html(
    blocks: Optional[List[dict]], link_resolver: LinkResolver = resolve_link
) -> str:
    if not blocks:
        return ""

    out: List[str] = []
    open_list: Optional[str] = None
    for block in blocks:
        block_type = block.get("type")
        list_tag = LIST_TAGS.get(block_type)

        if open_list and list_tag != open_list:
            out.append(f"</{open_list}>")
            open_list = None
        if list_tag and open_list is None:
            out.append(f"<{list_tag}>")
            open_list = list_tag

        if list_tag:
            out.append(f"<li>{_render_text(block, link_resolver)}</li>")
        elif block_type in TEXT_TAGS:
            tag = TEXT_TAGS[block_type]
            out.append(f"<{tag}>{_render_text(block, link_resolver)}</{tag}>")
        elif block_type == "image":
            out.append(_render_image(block, link_resolver))
        elif block_type == "embed":
            out.append(_render_embed(block))
        else:
            logger.debug(f"Skipping unsupported rich text block {block_type}")

    if open_list:
        out.append(f"</{open_list}>")
    return "".join(out)


def _render_text(block: dict, link_resolver: LinkResolver) -> str:
    text = block.get("text", "")
    spans = block.get("spans") or []
    return _render_spans(text, spans, 0, len(text), link_resolver)


def _render_spans(
    text: str, spans: List[dict], start: int, end: int, link_resolver: LinkResolver
) -> str:
    pending = sorted(
        (s for s in spans if start <= s["start"] < end), key=_span_order
    )
    out: List[str] = []
    cursor = start
    while pending:
        span = pending.pop(0)
        span_end = min(span["end"], end)
        children = [s for s in pending if s["start"] < span_end]
        pending = [s for s in pending if s["start"] >= span_end]
        # spans crossing span_end carry on after the enclosing span closes
        pending.extend(
            {**s, "start": span_end} for s in children if min(s["end"], end) > span_end
        )
        pending.sort(key=_span_order)

        out.append(_escape_text(text[cursor : span["start"]]))
        inner = _render_spans(text, children, span["start"], span_end, link_resolver)
        out.append(_wrap(span, inner, link_resolver))
        cursor = span_end
    out.append(_escape_text(text[cursor:end]))
    return "".join(out)


def _span_order(span: dict):
    return span["start"], -span["end"]


def _wrap(span: dict, inner: str, link_resolver: LinkResolver) -> str:
    span_type = span.get("type")
    data = span.get("data") or {}
    if span_type == "strong":
        return f"<strong>{inner}</strong>"
    if span_type == "em":
        return f"<em>{inner}</em>"
    if span_type == "hyperlink":
        target = (
            f' target="{escape(data["target"])}" rel="noopener"'
            if data.get("target")
            else ""
        )
        return f'<a href="{escape(link_resolver(data))}"{target}>{inner}</a>'
    if span_type == "label":
        return f'<span class="{escape(data.get("label", ""))}">{inner}</span>'
    return inner


def _render_image(block: dict, link_resolver: LinkResolver) -> str:
    img = f'<img src="{escape(block.get("url", ""))}" alt="{escape(block.get("alt") or "")}" />'
    if block.get("linkTo"):
        img = f'<a href="{escape(link_resolver(block["linkTo"]))}">{img}</a>'
    return f'<p class="block-img">{img}</p>'


def _render_embed(block: dict) -> str:
    oembed = block.get("oembed") or {}
    return (
        f'<div data-oembed="{escape(oembed.get("embed_url", ""))}"'
        f' data-oembed-type="{escape(oembed.get("type", ""))}"'
        f' data-oembed-provider="{escape(oembed.get("provider_name", ""))}">'
        f'{oembed.get("html") or ""}</div>'
    )


def _escape_text(text: str) -> str:
    return str(escape(text)).replace("\n", "<br />")
