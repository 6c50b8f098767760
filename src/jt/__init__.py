"""jt: pull Jira tickets into local Markdown files."""

from jt.adf import render_adf
from jt.client import JiraClient
from jt.config import JiraSettings, load_settings, load_tickets_dir
from jt.exceptions import (
    APIError,
    ConfigError,
    FetchError,
    JtError,
    NotFoundError,
    ParseError,
    TicketNotFoundError,
    UnauthorizedError,
)
from jt.pull import PullOptions, PullResult, pull_ticket
from jt.renderer import format_date, render_comments, render_issue
from jt.schemas import ADFDoc, ADFMark, ADFNode, Issue
from jt.sections import extract_notes, replace_section

__all__ = [
    "ADFDoc",
    "ADFMark",
    "ADFNode",
    "APIError",
    "ConfigError",
    "FetchError",
    "Issue",
    "JiraClient",
    "JiraSettings",
    "JtError",
    "NotFoundError",
    "ParseError",
    "PullOptions",
    "PullResult",
    "TicketNotFoundError",
    "UnauthorizedError",
    "extract_notes",
    "format_date",
    "load_settings",
    "load_tickets_dir",
    "pull_ticket",
    "render_adf",
    "render_comments",
    "render_issue",
    "replace_section",
]
