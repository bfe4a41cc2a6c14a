"""Notification payloads as delivered by a notification feed."""

from typing import List, Optional, Union

from pydantic import ConfigDict

from toolkit_notifications.models.base import PayloadModel
from toolkit_notifications.models.conditions import DisplayIf


class ToolkitNotification(PayloadModel):
    """
    One notification. Only `display_if` is interpreted here; content,
    render instructions and any other keys are carried through as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    display_if: DisplayIf


def parse_notifications(payload: Union[dict, List[dict]]) -> List[ToolkitNotification]:
    """
    Validate a feed into notifications.

    Accepts a bare list of notification objects or a feed object holding
    them under "notifications".
    """
    if isinstance(payload, dict):
        payload = payload.get("notifications", [])
    return [ToolkitNotification.model_validate(item) for item in payload]
