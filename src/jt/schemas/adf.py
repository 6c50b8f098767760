"""Atlassian Document Format models."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_as_empty(value: Any, empty: Any) -> Any:
    return empty if value is None else value


class ADFMark(BaseModel):
    """An inline decoration (strong, em, code, strike, link, ...)."""

    model_config = ConfigDict(extra="ignore")

    type: str
    attrs: dict[str, Any] = Field(default_factory=dict)

    @field_validator("attrs", mode="before")
    @classmethod
    def null_attrs(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class ADFNode(BaseModel):
    """A node in an ADF tree.

    ``type`` is an open vocabulary: Jira adds node types independently of
    this tool, so any string is accepted and the renderer decides what to do
    with types it does not know. A JSON ``null`` in any optional field reads
    as the empty value.
    """

    model_config = ConfigDict(extra="ignore")

    type: str
    text: str = ""
    content: list["ADFNode"] = Field(default_factory=list)
    marks: list[ADFMark] = Field(default_factory=list)
    attrs: dict[str, Any] = Field(default_factory=dict)

    @field_validator("text", mode="before")
    @classmethod
    def null_text(cls, value: Any) -> Any:
        return _null_as_empty(value, "")

    @field_validator("content", "marks", mode="before")
    @classmethod
    def null_list(cls, value: Any) -> Any:
        return _null_as_empty(value, [])

    @field_validator("attrs", mode="before")
    @classmethod
    def null_attrs(cls, value: Any) -> Any:
        return _null_as_empty(value, {})


class ADFDoc(BaseModel):
    """Root of an ADF document."""

    model_config = ConfigDict(extra="ignore")

    type: str = "doc"
    version: int = 1
    content: list[ADFNode] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def null_content(cls, value: Any) -> Any:
        return _null_as_empty(value, [])


def attr_str(attrs: Mapping[str, Any] | None, key: str, default: str = "") -> str:
    """Return a string attribute, or ``default`` when missing or not a string."""
    if not attrs:
        return default
    value = attrs.get(key)
    if isinstance(value, str):
        return value
    return default


def attr_int(attrs: Mapping[str, Any] | None, key: str, default: int) -> int:
    """Return an integer attribute, or ``default`` when missing or not numeric.

    JSON numbers may arrive as floats; they are truncated.
    """
    if not attrs:
        return default
    value = attrs.get(key)
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return default
