"""Tests for building a RuleContext from host and auth state."""

import pytest

from toolkit_notifications.context.builder import get_rule_context
from toolkit_notifications.context.host import StaticHostEnvironment, detect_operating_system
from toolkit_notifications.models.context import AuthState, ExtensionInfo
from toolkit_notifications.models.notification import parse_notifications
from toolkit_notifications.rules.engine import RuleEngine


def _make_host(**overrides) -> StaticHostEnvironment:
    fields = dict(
        extension_id="amazonwebservices.aws-toolkit-vscode",
        extension_version="3.30.0",
        ide_version="1.95.2",
        operating_system="MAC",
        compute_env="local",
        extensions=[
            ExtensionInfo(id="amazonwebservices.aws-toolkit-vscode", is_active=True),
            ExtensionInfo(id="amazonwebservices.amazon-q-vscode", is_active=True),
            ExtensionInfo(id="ms-python.python", is_active=False),
        ],
    )
    fields.update(overrides)
    return StaticHostEnvironment(**fields)


def _make_auth_state(**overrides) -> AuthState:
    fields = dict(
        auth_enabled_connections="builderId,identityCenter",
        aws_region="us-west-2",
        auth_status="connected",
        auth_scopes="codewhisperer:completions,codewhisperer:analysis",
    )
    fields.update(overrides)
    return AuthState(**fields)


class TestGetRuleContext:
    def test_host_facts(self):
        context = get_rule_context(_make_host(), _make_auth_state())
        assert context.extension_id == "amazonwebservices.aws-toolkit-vscode"
        assert context.extension_version == "3.30.0"
        assert context.ide_version == "1.95.2"
        assert context.os == "MAC"
        assert context.compute_env == "local"

    def test_auth_fields_are_split(self):
        context = get_rule_context(_make_host(), _make_auth_state())
        assert context.auth_types == ("builderId", "identityCenter")
        assert context.auth_regions == ("us-west-2",)
        assert context.auth_states == ("connected",)
        assert context.auth_scopes == ("codewhisperer:completions", "codewhisperer:analysis")

    def test_missing_region_and_scopes(self):
        context = get_rule_context(
            _make_host(), _make_auth_state(aws_region=None, auth_scopes=None)
        )
        assert context.auth_regions == ()
        assert context.auth_scopes == ()

    def test_empty_scopes_string(self):
        context = get_rule_context(_make_host(), _make_auth_state(auth_scopes=""))
        assert context.auth_scopes == ()

    def test_installed_and_active_extensions(self):
        context = get_rule_context(_make_host(), _make_auth_state())
        assert context.installed_extensions == (
            "amazonwebservices.aws-toolkit-vscode",
            "amazonwebservices.amazon-q-vscode",
            "ms-python.python",
        )
        assert context.active_extensions == (
            "amazonwebservices.aws-toolkit-vscode",
            "amazonwebservices.amazon-q-vscode",
        )

    def test_no_extensions(self):
        context = get_rule_context(_make_host(extensions=[]), _make_auth_state())
        assert context.installed_extensions == ()
        assert context.active_extensions == ()


class TestHostEnvironment:
    @pytest.mark.parametrize(
        "system,expected",
        [("Windows", "WINDOWS"), ("Darwin", "MAC"), ("Linux", "LINUX"), ("FreeBSD", "LINUX")],
    )
    def test_detect_operating_system(self, monkeypatch, system, expected):
        monkeypatch.setattr("toolkit_notifications.context.host.platform.system", lambda: system)
        assert detect_operating_system() == expected

    def test_static_host_defaults(self, monkeypatch):
        monkeypatch.setattr("toolkit_notifications.context.host.platform.system", lambda: "Windows")
        host = StaticHostEnvironment(
            extension_id="ext", extension_version="1.0.0", ide_version="1.0.0"
        )
        assert host.operating_system == "WINDOWS"
        assert host.compute_env == "local"
        assert host.extensions == []


class TestEndToEnd:
    def test_feed_filtered_for_live_context(self):
        """Snapshot the host, parse a feed, and keep only what applies."""
        feed = {
            "notifications": [
                {
                    "id": "q_upsell",
                    "displayIf": {
                        "extensionId": "amazonwebservices.aws-toolkit-vscode",
                        "additionalCriteria": [
                            {"type": "InstalledExtensions", "values": ["amazonwebservices.amazon-q-vscode"]},
                        ],
                    },
                },
                {
                    "id": "old_ide_warning",
                    "displayIf": {
                        "extensionId": "amazonwebservices.aws-toolkit-vscode",
                        "ideVersion": {"type": "range", "upperExclusive": "1.83.0"},
                    },
                },
                {
                    "id": "reauth_prompt",
                    "displayIf": {
                        "extensionId": "amazonwebservices.aws-toolkit-vscode",
                        "extensionVersion": {
                            "type": "or",
                            "clauses": [
                                {"type": "exactMatch", "values": ["3.29.0"]},
                                {"type": "range", "lowerInclusive": "3.30.0"},
                            ],
                        },
                        "additionalCriteria": [
                            {"type": "AuthState", "values": ["expired"]},
                        ],
                    },
                },
                {
                    "id": "pdx_only",
                    "displayIf": {
                        "extensionId": "amazonwebservices.aws-toolkit-vscode",
                        "additionalCriteria": [
                            {"type": "AuthRegion", "values": ["us-west-2"]},
                            {"type": "OS", "values": ["MAC", "LINUX"]},
                        ],
                    },
                },
            ]
        }
        context = get_rule_context(_make_host(), _make_auth_state())
        engine = RuleEngine(context)

        shown = engine.filter_notifications(parse_notifications(feed))

        assert [n.id for n in shown] == ["q_upsell", "pdx_only"]

    def test_expired_session_sees_reauth_prompt(self):
        feed = [
            {
                "id": "reauth_prompt",
                "displayIf": {
                    "extensionId": "amazonwebservices.aws-toolkit-vscode",
                    "additionalCriteria": [{"type": "AuthState", "values": ["expired"]}],
                },
            }
        ]
        context = get_rule_context(_make_host(), _make_auth_state(auth_status="expired"))
        assert RuleEngine(context).filter_notifications(parse_notifications(feed))[0].id == (
            "reauth_prompt"
        )
