"""Convert Atlassian Document Format (ADF) trees to Markdown."""

from __future__ import annotations

from typing import Iterable

from jt.schemas.adf import ADFDoc, ADFMark, ADFNode, attr_int, attr_str

_LIST_TYPES = {"bulletList", "orderedList"}

_PANEL_LABELS = {
    "info": "**Info:**",
    "note": "**Note:**",
    "warning": "**Warning:**",
    "error": "**Error:**",
    "success": "**Success:**",
}


def render_adf(doc: ADFDoc | None) -> str:
    """Render an ADF document as Markdown.

    Unknown node and mark types never raise: a node the converter does not
    recognise renders its children, else its raw text, else nothing.

    Parameters
    ----------
    doc : ADFDoc | None
        The document to convert. ``None`` or an empty document yields ``""``.
    """
    if doc is None or not doc.content:
        return ""
    return _serialize_blocks(doc.content, 0).rstrip("\n")


def _serialize_blocks(nodes: Iterable[ADFNode], depth: int) -> str:
    return "".join(_serialize_block(node, depth) for node in nodes)


def _serialize_block(node: ADFNode, depth: int) -> str:
    if node.type == "paragraph":
        return _serialize_inlines(node.content) + "\n\n"

    if node.type == "heading":
        level = attr_int(node.attrs, "level", 1)
        return f"{'#' * level} {_serialize_inlines(node.content)}\n\n"

    if node.type in _LIST_TYPES:
        return _serialize_list(node.content, depth, ordered=node.type == "orderedList")

    if node.type == "listItem":
        return _serialize_list_item(node, depth)

    if node.type == "codeBlock":
        language = attr_str(node.attrs, "language")
        return f"```{language}\n{_plain_text(node.content)}\n```\n\n"

    if node.type == "blockquote":
        return _quote(_serialize_blocks(node.content, depth)) + "\n"

    if node.type == "panel":
        label = _PANEL_LABELS.get(attr_str(node.attrs, "panelType").lower(), "")
        return _quote(_serialize_blocks(node.content, depth), label=label) + "\n"

    if node.type == "table":
        return _serialize_table(node.content)

    if node.type == "rule":
        return "---\n\n"

    if node.type in {"mediaSingle", "mediaGroup"}:
        # The media payload has no Markdown form; captions and the like survive.
        return _serialize_blocks(node.content, depth)

    if node.content:
        return _serialize_blocks(node.content, depth)
    return node.text


def _serialize_inlines(nodes: Iterable[ADFNode]) -> str:
    return "".join(_serialize_inline(node) for node in nodes)


def _serialize_inline(node: ADFNode) -> str:
    if node.type == "text":
        return apply_marks(node.text, node.marks)

    if node.type == "mention":
        name = attr_str(node.attrs, "text") or node.text
        return name if name.startswith("@") else f"@{name}"

    if node.type == "emoji":
        return attr_str(node.attrs, "shortName")

    if node.type == "hardBreak":
        return "  \n"

    if node.type == "inlineCard":
        url = attr_str(node.attrs, "url")
        return f"[{url}]({url})" if url else ""

    if node.content:
        return _serialize_inlines(node.content)
    return node.text


def apply_marks(text: str, marks: Iterable[ADFMark]) -> str:
    """Wrap ``text`` with each mark in order; later marks wrap earlier ones."""
    for mark in marks:
        if mark.type == "strong":
            text = f"**{text}**"
        elif mark.type == "em":
            text = f"*{text}*"
        elif mark.type == "code":
            text = f"`{text}`"
        elif mark.type == "strike":
            text = f"~~{text}~~"
        elif mark.type == "link":
            text = f"[{text}]({attr_str(mark.attrs, 'href')})"
    return text


def _serialize_list(items: list[ADFNode], depth: int, *, ordered: bool) -> str:
    parts: list[str] = []
    indent = "  " * depth
    for index, item in enumerate(items, start=1):
        marker = f"{index}. " if ordered else "- "
        parts.append(indent + marker + (_serialize_list_item(item, depth) or "\n"))
    if depth == 0:
        parts.append("\n")
    return "".join(parts)


def _serialize_list_item(item: ADFNode, depth: int) -> str:
    parts: list[str] = []
    for index, child in enumerate(item.content):
        if child.type == "paragraph":
            parts.append(_serialize_inlines(child.content) + "\n")
        elif child.type in _LIST_TYPES:
            if index == 0:
                parts.append("\n")
            parts.append(
                _serialize_list(
                    child.content, depth + 1, ordered=child.type == "orderedList"
                )
            )
        else:
            parts.append(_serialize_block(child, depth).rstrip("\n") + "\n")
    return "".join(parts)


def _plain_text(nodes: Iterable[ADFNode]) -> str:
    return "".join(node.text + _plain_text(node.content) for node in nodes)


def _quote(content: str, *, label: str = "") -> str:
    lines = content.rstrip("\n").split("\n")
    quoted: list[str] = []
    for index, line in enumerate(lines):
        prefix = "> "
        if index == 0 and label:
            prefix += label + " "
        quoted.append(prefix + line + "\n")
    return "".join(quoted)


def _serialize_table(rows: list[ADFNode]) -> str:
    table: list[list[str]] = []
    for row in rows:
        if row.type != "tableRow":
            continue
        table.append(
            [
                _serialize_blocks(cell.content, 0).rstrip("\n").replace("\n", " ")
                for cell in row.content
            ]
        )

    if not table:
        return ""

    max_cols = max(len(row) for row in table)
    normalized = [row + [""] * (max_cols - len(row)) for row in table]
    lines = [
        _table_row(normalized[0]),
        "|" + " --- |" * max_cols,
    ]
    lines.extend(_table_row(row) for row in normalized[1:])
    return "\n".join(lines) + "\n\n"


def _table_row(cells: list[str]) -> str:
    return "|" + "".join(f" {cell} |" for cell in cells)
