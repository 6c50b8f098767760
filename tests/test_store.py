"""Tests for the ticket store."""

from __future__ import annotations

from pathlib import Path

import pytest

from jt.exceptions import TicketNotFoundError
from jt.store import (
    load_ticket,
    load_ticket_async,
    save_ticket,
    save_ticket_async,
    ticket_exists,
    ticket_path,
)


class TestTicketPath:
    """Tests for ticket_path."""

    def test_joins_key_with_md_suffix(self) -> None:
        assert ticket_path("/tmp/tickets", "PROJ-99") == Path("/tmp/tickets/PROJ-99.md")

    def test_expands_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("HOME", str(tmp_path))
        assert ticket_path("~/.jt/tickets", "A-1") == tmp_path / ".jt" / "tickets" / "A-1.md"


class TestSaveAndLoad:
    """Tests for saving and loading tickets."""

    def test_round_trip(self, tmp_path: Path) -> None:
        content = "# TEST-1: Sample ticket\n\nSome content.\n"
        save_ticket(tmp_path, "TEST-1", content)
        assert load_ticket(tmp_path, "TEST-1") == content

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        directory = tmp_path / "sub" / "tickets"
        path = save_ticket(directory, "TEST-2", "content")
        assert path == directory / "TEST-2.md"
        assert path.is_file()

    def test_exists(self, tmp_path: Path) -> None:
        assert not ticket_exists(tmp_path, "NOPE-1")
        save_ticket(tmp_path, "NOPE-1", "test")
        assert ticket_exists(tmp_path, "NOPE-1")

    def test_load_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TicketNotFoundError, match="jt pull MISSING-1"):
            load_ticket(tmp_path, "MISSING-1")

    def test_utf8_content(self, tmp_path: Path) -> None:
        save_ticket(tmp_path, "U-1", "Café ✓\n")
        assert (tmp_path / "U-1.md").read_bytes() == "Café ✓\n".encode("utf-8")

    @pytest.mark.asyncio
    async def test_async_round_trip(self, tmp_path: Path) -> None:
        await save_ticket_async(tmp_path / "t", "A-2", "async content")
        assert await load_ticket_async(tmp_path / "t", "A-2") == "async content"
