"""
Host Environment: the narrow interface through which live host facts are read.

Queried by: get_rule_context
Implemented by: the embedding application (or StaticHostEnvironment for fixed facts)
"""

import platform
from typing import List, Protocol, Sequence

from pydantic import BaseModel, Field

from toolkit_notifications.models.context import ExtensionInfo


def detect_operating_system() -> str:
    """Classify the current platform as WINDOWS, MAC or LINUX."""
    system = platform.system()
    if system == "Windows":
        return "WINDOWS"
    if system == "Darwin":
        return "MAC"
    return "LINUX"


class HostEnvironment(Protocol):
    """Protocol for host introspection: pluggable backend."""

    extension_id: str
    extension_version: str
    ide_version: str
    operating_system: str
    compute_env: str
    extensions: Sequence[ExtensionInfo]


class StaticHostEnvironment(BaseModel):
    """Host facts fixed at construction time."""

    extension_id: str
    extension_version: str
    ide_version: str
    operating_system: str = Field(default_factory=detect_operating_system)
    compute_env: str = "local"
    extensions: List[ExtensionInfo] = []
