"""Shared schemas for jt."""

from jt.schemas.adf import ADFDoc, ADFMark, ADFNode, attr_int, attr_str
from jt.schemas.issue import (
    Comment,
    CommentPage,
    Epic,
    Issue,
    IssueFields,
    IssueLink,
    IssueLinkType,
    IssueType,
    LinkedIssue,
    LinkedIssueFields,
    ParentIssue,
    ParentIssueFields,
    Priority,
    Sprint,
    Status,
    Subtask,
    SubtaskFields,
    User,
)

__all__ = [
    "ADFDoc",
    "ADFMark",
    "ADFNode",
    "Comment",
    "CommentPage",
    "Epic",
    "Issue",
    "IssueFields",
    "IssueLink",
    "IssueLinkType",
    "IssueType",
    "LinkedIssue",
    "LinkedIssueFields",
    "ParentIssue",
    "ParentIssueFields",
    "Priority",
    "Sprint",
    "Status",
    "Subtask",
    "SubtaskFields",
    "User",
    "attr_int",
    "attr_str",
]
