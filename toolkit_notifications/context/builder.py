"""Builds a RuleContext snapshot from live host and auth state."""

from toolkit_notifications.context.host import HostEnvironment
from toolkit_notifications.models.context import AuthState, RuleContext


def get_rule_context(host: HostEnvironment, auth_state: AuthState) -> RuleContext:
    """
    Snapshot the host for one evaluation pass.

    Connection kinds and scopes arrive comma-delimited and are split as-is.
    A missing region gives no regions; missing scopes give no scopes.
    """
    extensions = list(host.extensions)
    return RuleContext(
        extension_id=host.extension_id,
        ide_version=host.ide_version,
        extension_version=host.extension_version,
        os=host.operating_system,
        compute_env=host.compute_env,
        auth_types=auth_state.auth_enabled_connections.split(","),
        auth_regions=[auth_state.aws_region] if auth_state.aws_region else [],
        auth_states=[auth_state.auth_status],
        auth_scopes=auth_state.auth_scopes.split(",") if auth_state.auth_scopes else [],
        installed_extensions=[e.id for e in extensions],
        active_extensions=[e.id for e in extensions if e.is_active],
    )
