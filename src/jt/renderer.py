"""Render Jira issues into self-contained Markdown documents."""

from __future__ import annotations

from datetime import datetime, timezone

from jt.adf import render_adf
from jt.schemas import Issue, User

_DONE_STATUSES = frozenset({"done", "closed", "resolved"})

_DATE_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def render_issue(issue: Issue, *, now: datetime | None = None) -> str:
    """Create the full Markdown document for an issue.

    Args:
        issue: The decoded issue.
        now: Fetch time stamped into the meta comment. Defaults to the
            current UTC time; pass a fixed value for reproducible output.

    Returns:
        Markdown text ending with a single newline.
    """
    fields = issue.fields
    fetched = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

    blocks: list[str] = [
        f"<!-- jt:meta ticket={issue.key} fetched={fetched.strftime('%Y-%m-%dT%H:%M:%SZ')} -->\n"
        f"# {issue.key}: {fields.summary}",
        _render_metadata_table(issue),
    ]

    description = "*No description provided.*"
    if fields.description is not None:
        description = render_adf(fields.description)
    blocks.append("## Description\n\n" + description if description else "## Description")

    if fields.subtasks:
        blocks.append(_render_subtasks(issue))

    if fields.issue_links:
        blocks.append(_render_links(issue))

    if fields.comment is not None and fields.comment.total > 0:
        blocks.append(_render_comment_section(issue))

    return "\n\n".join(blocks).rstrip("\n") + "\n"


def render_comments(issue: Issue) -> str:
    """Render only the ``## Comments`` section of an issue."""
    comments = issue.fields.comment
    if comments is None or comments.total <= 0:
        return "## Comments (0)\n\n*No comments.*\n"
    return _render_comment_section(issue).rstrip("\n") + "\n"


def format_date(value: str) -> str:
    """Normalise a Jira timestamp to ``YYYY-MM-DD``.

    Unparseable values fall back to their first ten characters, or the whole
    value when shorter; an empty value renders as ``-``.
    """
    if not value:
        return "-"
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    return value[:10]


def _render_metadata_table(issue: Issue) -> str:
    fields = issue.fields
    rows: list[tuple[str, str]] = [
        ("Status", fields.status.name if fields.status else ""),
        ("Type", fields.issue_type.name if fields.issue_type else ""),
        ("Priority", fields.priority.name if fields.priority else ""),
        ("Assignee", _user_display(fields.assignee)),
        ("Reporter", _user_display(fields.reporter)),
    ]
    if issue.sprint is not None and issue.sprint.name:
        rows.append(("Sprint", issue.sprint.name))
    if issue.epic is not None:
        rows.append(("Epic", _key_with_summary(issue.epic.key, issue.epic.summary)))
    if fields.parent is not None:
        rows.append(
            ("Parent", _key_with_summary(fields.parent.key, fields.parent.fields.summary))
        )
    if fields.labels:
        rows.append(("Labels", ", ".join(fields.labels)))
    rows.append(("Created", format_date(fields.created)))
    rows.append(("Updated", format_date(fields.updated)))

    lines = ["| Field | Value |", "|-------|-------|"]
    lines.extend(f"| {name} | {value or '-'} |" for name, value in rows)
    return "\n".join(lines)


def _render_subtasks(issue: Issue) -> str:
    lines = ["## Subtasks", ""]
    for subtask in issue.fields.subtasks:
        status = subtask.fields.status.name if subtask.fields.status else ""
        checkbox = "x" if status.lower() in _DONE_STATUSES else " "
        suffix = f" ({status})" if status else ""
        lines.append(f"- [{checkbox}] {subtask.key}: {subtask.fields.summary}{suffix}")
    return "\n".join(lines)


def _render_links(issue: Issue) -> str:
    lines = ["## Linked Issues", ""]
    for link in issue.fields.issue_links:
        if link.type is None:
            continue
        if link.outward_issue is not None:
            lines.append(
                f"- {link.type.outward} {link.outward_issue.key}: "
                f"{link.outward_issue.fields.summary}"
            )
        if link.inward_issue is not None:
            lines.append(
                f"- {link.type.inward} {link.inward_issue.key}: "
                f"{link.inward_issue.fields.summary}"
            )
    return "\n".join(lines)


def _render_comment_section(issue: Issue) -> str:
    page = issue.fields.comment
    total = page.total if page is not None else 0
    blocks = [f"## Comments ({total})"]
    for comment in page.comments if page is not None else []:
        author = comment.author.display_name if comment.author else "Unknown"
        blocks.append(f"### {author} -- {format_date(comment.created)}")
        body = render_adf(comment.body)
        if body:
            blocks.append(body)
    return "\n\n".join(blocks)


def _user_display(user: User | None) -> str:
    if user is None:
        return ""
    return user.display_name or user.email


def _key_with_summary(key: str, summary: str) -> str:
    return f"{key}: {summary}" if summary else key
