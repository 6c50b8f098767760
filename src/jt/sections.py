"""Section extraction and replacement on saved ticket Markdown.

Saved tickets are flat text; the only structure understood here is that a
line starting with ``## `` opens a second-level section which runs until the
next such line or the end of the text. ``## My Notes`` belongs to the user
and is never generated, so every operation keeps it intact.
"""

from __future__ import annotations

NOTES_HEADING = "## My Notes"
_H2_BOUNDARY = "\n## "


def extract_notes(content: str) -> str:
    """Return the ``## My Notes`` section through the end of ``content``.

    The result is right-trimmed and ends with exactly one newline, or is
    empty when the heading is absent.
    """
    index = content.find(NOTES_HEADING)
    if index < 0:
        return ""
    return content[index:].rstrip("\n") + "\n"


def replace_section(content: str, section_prefix: str, new_section: str) -> str:
    """Replace the section starting with ``section_prefix`` by ``new_section``.

    ``section_prefix`` is matched literally, so ``"## Comments"`` finds
    ``"## Comments (3)"`` regardless of the count. When the section is
    missing, ``new_section`` goes right before ``## My Notes`` if present,
    otherwise at the end.
    """
    start = content.find(section_prefix)
    if start < 0:
        notes_index = content.find(NOTES_HEADING)
        if notes_index >= 0:
            return _join(content[:notes_index], new_section.rstrip("\n"), content[notes_index:])
        return _join(content, new_section)

    end = _find_next_h2(content, start + len(section_prefix))
    if end < 0:
        # Last section: notes may still follow on a line we did not split on.
        notes_index = content.find(NOTES_HEADING, start + len(section_prefix))
        if notes_index >= 0:
            return _join(content[:start], new_section.rstrip("\n"), content[notes_index:])
        return _join(content[:start], new_section)

    return _join(content[:start], new_section.rstrip("\n"), content[end:])


def _find_next_h2(content: str, offset: int) -> int:
    index = content.find(_H2_BOUNDARY, offset)
    if index < 0:
        return -1
    return index + 1


def _join(before: str, *blocks: str) -> str:
    return before.rstrip("\n") + "\n\n" + "\n\n".join(blocks)
