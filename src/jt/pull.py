"""Pull pipeline: Jira issue -> Markdown file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jt.client import JiraClient
from jt.config import JiraSettings
from jt.exceptions import TicketNotFoundError
from jt.renderer import render_comments, render_issue
from jt.sections import extract_notes, replace_section
from jt.store import load_ticket_async, save_ticket_async, ticket_exists, ticket_path

logger = logging.getLogger(__name__)

COMMENTS_PREFIX = "## Comments"


@dataclass
class PullOptions:
    """Options for pulling a ticket.

    Attributes:
        comments_only: If True, only refresh the comments section of an
            existing local file.
        dry_run: If True, compute the new content without writing it.
    """

    comments_only: bool = False
    dry_run: bool = False


@dataclass
class PullResult:
    """Outcome of a pull.

    Attributes:
        key: Canonical issue key as returned by Jira.
        path: Location of the ticket file.
        content: The new file content.
        previous: Content of the file before the pull, if it existed.
        written: Whether ``content`` was saved.
    """

    key: str
    path: Path
    content: str
    previous: str | None
    written: bool


def normalize_key(key: str) -> str:
    """Normalise user input such as ``proj-1 `` to ``PROJ-1``."""
    return key.strip().upper()


async def pull_ticket(
    key: str,
    *,
    settings: JiraSettings,
    options: PullOptions | None = None,
    client: JiraClient | None = None,
    now: datetime | None = None,
) -> PullResult:
    """Fetch an issue, render it, merge it with the local file, and save it.

    A full pull re-renders the whole document and re-appends the existing
    ``## My Notes`` section. A comments-only pull replaces just the
    ``## Comments`` section of the existing file.

    Args:
        key: Issue key; case and surrounding whitespace are normalised.
        settings: Jira connection settings and tickets directory.
        options: Pull options. Uses defaults if None.
        client: Optional JiraClient; one is created from ``settings`` if
            not provided.
        now: Fetch time for the meta comment.

    Returns:
        The pull result.

    Raises:
        TicketNotFoundError: If ``comments_only`` is set and no local file
            exists.
        FetchError: If the issue cannot be fetched.
    """
    opts = options or PullOptions()
    ticket_key = normalize_key(key)
    if opts.comments_only and not ticket_exists(settings.tickets_dir, ticket_key):
        raise _missing_local_file(ticket_key)

    if client is None:
        async with JiraClient(
            settings.instance, settings.email, settings.api_token
        ) as own_client:
            issue = await own_client.get_issue(ticket_key)
    else:
        issue = await client.get_issue(ticket_key)

    canonical_key = issue.key or ticket_key
    previous = await _load_previous(settings.tickets_dir, canonical_key)

    if opts.comments_only:
        if previous is None:
            raise _missing_local_file(canonical_key)
        content = replace_section(previous, COMMENTS_PREFIX, render_comments(issue))
    else:
        content = render_issue(issue, now=now)
        notes = extract_notes(previous) if previous is not None else ""
        if notes:
            logger.debug("Preserving local notes for %s", canonical_key)
            content = content.rstrip("\n") + "\n\n" + notes

    path = ticket_path(settings.tickets_dir, canonical_key)
    if opts.dry_run:
        return PullResult(canonical_key, path, content, previous, written=False)

    path = await save_ticket_async(settings.tickets_dir, canonical_key, content)
    logger.info("Saved %s to %s", canonical_key, path)
    return PullResult(canonical_key, path, content, previous, written=True)


def _missing_local_file(key: str) -> TicketNotFoundError:
    return TicketNotFoundError(f"no local file for {key}; run 'jt pull {key}' first")


async def _load_previous(tickets_dir: str, key: str) -> str | None:
    try:
        return await load_ticket_async(tickets_dir, key)
    except TicketNotFoundError:
        return None


def format_dry_run(key: str, previous: str | None, content: str) -> str:
    """Describe what a pull would change.

    This is a positional line comparison, not a minimal diff: line ``i`` of
    the old text is compared with line ``i`` of the new one.
    """
    if previous is None:
        return f"Would create new file for {key}:\n\n{content}"
    if previous == content:
        return f"No changes for {key}\n"

    old_lines = previous.split("\n")
    new_lines = content.split("\n")
    out = [f"Changes for {key}:", ""]
    for index in range(max(len(old_lines), len(new_lines))):
        old_line = old_lines[index] if index < len(old_lines) else ""
        new_line = new_lines[index] if index < len(new_lines) else ""
        if old_line == new_line:
            continue
        if old_line:
            out.append(f"- {old_line}")
        if new_line:
            out.append(f"+ {new_line}")
    return "\n".join(out) + "\n"
