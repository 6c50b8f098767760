"""Jira Cloud REST client."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from jt.exceptions import NotFoundError, ParseError
from jt.http_utils import build_client, fetch_json_with_retries
from jt.schemas import Epic, Issue, Sprint, User

logger = logging.getLogger(__name__)

_SPRINT_FIELD_NAME = "sprint"
_EPIC_FIELD_NAME = "epic link"


class JiraClient:
    """Authenticated client for the Jira Cloud REST API (v3).

    Uses basic auth with the account email and an API token. Pass
    ``http_client`` to share a connection pool or to inject a transport in
    tests; otherwise one is created and closed with the client.
    """

    def __init__(
        self,
        instance: str,
        email: str,
        token: str,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = instance.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or build_client(httpx.BasicAuth(email, token))

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def myself(self) -> User:
        """Return the authenticated user; used to verify credentials."""
        data = await fetch_json_with_retries(
            f"{self.base_url}/rest/api/3/myself", client=self._client
        )
        try:
            return User.model_validate(data)
        except ValidationError as exc:
            raise ParseError(f"decoding user response: {exc}") from exc

    async def get_issue(self, key: str) -> Issue:
        """Fetch an issue, including Sprint and Epic custom fields.

        Raises:
            NotFoundError: If the issue does not exist.
            UnauthorizedError: If the credentials are rejected.
            ParseError: If the response cannot be decoded.
        """
        url = f"{self.base_url}/rest/api/3/issue/{key}?expand=names"
        logger.debug("Fetching issue %s", key)
        data = await fetch_json_with_retries(
            url,
            client=self._client,
            on_404=NotFoundError,
            on_404_message=f"ticket {key} not found",
        )
        return parse_issue(data)


def parse_issue(data: Any) -> Issue:
    """Decode an issue payload and resolve its Sprint/Epic custom fields."""
    if not isinstance(data, dict):
        raise ParseError("decoding issue: expected a JSON object")
    try:
        issue = Issue.model_validate(data)
    except ValidationError as exc:
        raise ParseError(f"decoding issue: {exc}") from exc

    names = data.get("names")
    raw_fields = data.get("fields")
    if not isinstance(names, dict) or not isinstance(raw_fields, dict):
        return issue

    sprint_field_id = epic_field_id = None
    for field_id, name in names.items():
        if not isinstance(name, str):
            continue
        if name.lower() == _SPRINT_FIELD_NAME:
            sprint_field_id = field_id
        elif name.lower() == _EPIC_FIELD_NAME:
            epic_field_id = field_id

    if sprint_field_id is not None:
        issue.sprint = parse_sprint(raw_fields.get(sprint_field_id))
    if epic_field_id is not None:
        issue.epic = parse_epic(raw_fields.get(epic_field_id))
    return issue


def parse_sprint(value: Any) -> Sprint | None:
    """Parse a Sprint field value; arrays yield their last (active) entry."""
    if isinstance(value, list):
        if not value:
            return None
        value = value[-1]
    if not isinstance(value, dict):
        return None
    try:
        sprint = Sprint.model_validate(value)
    except ValidationError:
        logger.debug("Ignoring malformed sprint value: %r", value)
        return None
    return sprint if sprint.name else None


def parse_epic(value: Any) -> Epic | None:
    """Parse an Epic Link value: an object with a key, or a bare key string."""
    if isinstance(value, str):
        return Epic(key=value) if value else None
    if not isinstance(value, dict):
        return None
    try:
        epic = Epic.model_validate(value)
    except ValidationError:
        logger.debug("Ignoring malformed epic value: %r", value)
        return None
    return epic if epic.key else None
