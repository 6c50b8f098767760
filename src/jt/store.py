"""Local storage of ticket Markdown files."""

from __future__ import annotations

import asyncio
from pathlib import Path

from jt.exceptions import TicketNotFoundError


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory."""
    return Path(path).expanduser()


def ticket_path(tickets_dir: str | Path, key: str) -> Path:
    """Get the file path for a ticket: ``<tickets_dir>/<KEY>.md``.

    Args:
        tickets_dir: Directory holding saved tickets; ``~`` is expanded.
        key: The issue key, e.g. ``PROJ-123``.

    Returns:
        Path to the ticket's Markdown file.
    """
    return expand_path(tickets_dir) / f"{key}.md"


def ticket_exists(tickets_dir: str | Path, key: str) -> bool:
    """Check whether a ticket has been saved locally."""
    return ticket_path(tickets_dir, key).is_file()


def load_ticket(tickets_dir: str | Path, key: str) -> str:
    """Read a saved ticket.

    Raises:
        TicketNotFoundError: If no file exists for ``key``.
    """
    path = ticket_path(tickets_dir, key)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TicketNotFoundError(
            f"ticket {key} not found locally; run 'jt pull {key}' first"
        ) from exc


def save_ticket(tickets_dir: str | Path, key: str, content: str) -> Path:
    """Write a ticket, creating the tickets directory if needed.

    Returns:
        The path that was written.
    """
    path = ticket_path(tickets_dir, key)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


async def load_ticket_async(tickets_dir: str | Path, key: str) -> str:
    """Read a saved ticket using a thread pool."""
    return await asyncio.to_thread(load_ticket, tickets_dir, key)


async def save_ticket_async(tickets_dir: str | Path, key: str, content: str) -> Path:
    """Write a ticket using a thread pool."""
    return await asyncio.to_thread(save_ticket, tickets_dir, key, content)
