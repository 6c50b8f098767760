"""Command-line interface for jt."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from jt.client import JiraClient
from jt.config import load_settings, load_tickets_dir
from jt.exceptions import JtError, UnauthorizedError
from jt.pull import PullOptions, format_dry_run, normalize_key, pull_ticket
from jt.store import load_ticket, ticket_path

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jt", description="Fetch Jira tickets as local Markdown files."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    pull = subparsers.add_parser(
        "pull",
        help="Fetch a Jira ticket and save it as Markdown",
        description="Fetches a Jira issue via the REST API, converts it to "
        "Markdown, and saves it locally. A '## My Notes' section in an "
        "existing file is kept.",
    )
    pull.add_argument("key", metavar="TICKET-KEY")
    pull.add_argument(
        "--comments-only", action="store_true", help="Only update the comments section"
    )
    pull.add_argument(
        "--dry-run", action="store_true", help="Show what would change without saving"
    )
    pull.set_defaults(handler=_run_pull)

    view = subparsers.add_parser("view", help="Print a local ticket to stdout")
    view.add_argument("key", metavar="TICKET-KEY")
    view.set_defaults(handler=_run_view)

    path = subparsers.add_parser(
        "path",
        help="Print the local file path for a ticket",
        description="Prints the full path of the ticket's Markdown file, for scripting.",
    )
    path.add_argument("key", metavar="TICKET-KEY")
    path.set_defaults(handler=_run_path)

    auth = subparsers.add_parser("auth", help="Verify Jira credentials")
    auth.set_defaults(handler=_run_auth)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return args.handler(args)
    except JtError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1


def _run_pull(args: argparse.Namespace) -> int:
    settings = load_settings()
    options = PullOptions(comments_only=args.comments_only, dry_run=args.dry_run)
    try:
        result = asyncio.run(pull_ticket(args.key, settings=settings, options=options))
    except UnauthorizedError as exc:
        raise UnauthorizedError(f"authentication failed: {exc}") from exc

    if options.dry_run:
        sys.stdout.write(format_dry_run(result.key, result.previous, result.content))
    elif options.comments_only:
        print(f"Updated comments for {result.key} in {result.path}")
    else:
        print(f"Saved {result.key} to {result.path}")
    return 0


def _run_view(args: argparse.Namespace) -> int:
    sys.stdout.write(load_ticket(load_tickets_dir(), normalize_key(args.key)))
    return 0


def _run_path(args: argparse.Namespace) -> int:
    print(ticket_path(load_tickets_dir(), normalize_key(args.key)))
    return 0


def _run_auth(args: argparse.Namespace) -> int:
    settings = load_settings()

    async def _verify():
        async with JiraClient(settings.instance, settings.email, settings.api_token) as client:
            return await client.myself()

    try:
        user = asyncio.run(_verify())
    except UnauthorizedError as exc:
        raise UnauthorizedError(f"authentication failed: {exc}") from exc

    print(f"Authenticated as {user.display_name} ({user.email})")
    print(f"Account ID: {user.account_id}")
    print(f"Time zone:  {user.time_zone}")
    print(f"Active:     {user.active}")
    return 0
