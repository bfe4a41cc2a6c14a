"""Notification rule models."""

from toolkit_notifications.models.conditions import (
    ConditionalClause,
    CriteriaCondition,
    CriteriaType,
    DisplayIf,
    ExactMatchClause,
    OrClause,
    RangeClause,
)
from toolkit_notifications.models.context import AuthState, ExtensionInfo, RuleContext
from toolkit_notifications.models.notification import ToolkitNotification, parse_notifications

__all__ = [
    "AuthState",
    "ConditionalClause",
    "CriteriaCondition",
    "CriteriaType",
    "DisplayIf",
    "ExactMatchClause",
    "ExtensionInfo",
    "OrClause",
    "RangeClause",
    "RuleContext",
    "ToolkitNotification",
    "parse_notifications",
]
