"""Jira issue models decoded from /rest/api/3/issue responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from jt.schemas.adf import ADFDoc


class JiraModel(BaseModel):
    """Base model: accepts Jira's camelCase keys and ignores the rest."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class User(JiraModel):
    """A Jira Cloud user."""

    account_id: str = Field("", alias="accountId")
    display_name: str = Field("", alias="displayName")
    email: str = Field("", alias="emailAddress")
    active: bool = False
    time_zone: str = Field("", alias="timeZone")


class Status(JiraModel):
    name: str = ""


class IssueType(JiraModel):
    name: str = ""


class Priority(JiraModel):
    name: str = ""


class SubtaskFields(JiraModel):
    summary: str = ""
    status: Status | None = None


class Subtask(JiraModel):
    key: str
    fields: SubtaskFields = Field(default_factory=SubtaskFields)


class IssueLinkType(JiraModel):
    """Link type; ``inward``/``outward`` are the relation verbs."""

    name: str = ""
    inward: str = ""
    outward: str = ""


class LinkedIssueFields(JiraModel):
    summary: str = ""


class LinkedIssue(JiraModel):
    key: str
    fields: LinkedIssueFields = Field(default_factory=LinkedIssueFields)


class IssueLink(JiraModel):
    type: IssueLinkType | None = None
    inward_issue: LinkedIssue | None = Field(None, alias="inwardIssue")
    outward_issue: LinkedIssue | None = Field(None, alias="outwardIssue")


class ParentIssueFields(JiraModel):
    summary: str = ""


class ParentIssue(JiraModel):
    key: str
    fields: ParentIssueFields = Field(default_factory=ParentIssueFields)


class Comment(JiraModel):
    author: User | None = None
    body: ADFDoc | None = None
    created: str = ""


class CommentPage(JiraModel):
    total: int = 0
    comments: list[Comment] = Field(default_factory=list)


class IssueFields(JiraModel):
    """The subset of issue fields jt renders."""

    summary: str = ""
    status: Status | None = None
    issue_type: IssueType | None = Field(None, alias="issuetype")
    priority: Priority | None = None
    assignee: User | None = None
    reporter: User | None = None
    labels: list[str] = Field(default_factory=list)
    created: str = ""
    updated: str = ""
    description: ADFDoc | None = None
    subtasks: list[Subtask] = Field(default_factory=list)
    issue_links: list[IssueLink] = Field(default_factory=list, alias="issuelinks")
    parent: ParentIssue | None = None
    comment: CommentPage | None = None


class Sprint(JiraModel):
    id: int = 0
    name: str = ""
    state: str = ""


class Epic(JiraModel):
    key: str = ""
    summary: str = ""


class Issue(JiraModel):
    """A decoded Jira issue.

    ``sprint`` and ``epic`` live in site-specific custom fields and are
    filled in by the client after decoding.
    """

    key: str
    fields: IssueFields = Field(default_factory=IssueFields)
    sprint: Sprint | None = None
    epic: Epic | None = None
