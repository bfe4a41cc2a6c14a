"""Rule context: snapshot of the environment a notification is evaluated against."""

from typing import Optional, Tuple

from toolkit_notifications.models.base import PayloadModel


class RuleContext(PayloadModel):
    """Facts about the running host. Built once per evaluation pass."""

    extension_id: str
    ide_version: str
    extension_version: str
    os: str
    compute_env: str
    auth_types: Tuple[str, ...] = ()
    auth_regions: Tuple[str, ...] = ()      # zero or one
    auth_states: Tuple[str, ...] = ()       # exactly one once built from AuthState
    auth_scopes: Tuple[str, ...] = ()
    installed_extensions: Tuple[str, ...] = ()
    active_extensions: Tuple[str, ...] = ()


class AuthState(PayloadModel):
    """Authentication state as reported by the auth subsystem."""

    auth_enabled_connections: str           # Comma-delimited, e.g. "builderId,identityCenter"
    aws_region: Optional[str] = None
    auth_status: str                        # e.g. "connected", "notConnected", "expired"
    auth_scopes: Optional[str] = None       # Comma-delimited


class ExtensionInfo(PayloadModel):
    """An installed companion extension."""

    id: str
    is_active: bool = False
