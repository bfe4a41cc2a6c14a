"""
Rule Engine: decides whether a notification should be displayed.

Behavioral Contract:
- Holds one RuleContext for its lifetime; a new context needs a new engine
- Evaluates a DisplayIf gate left to right and stops at the first failing part
- Unknown clause or criteria tags raise rather than resolve to True or False
- Never mutates the context or the notifications it is given
"""

import logging
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

import semver

from toolkit_notifications.errors import (
    InvalidVersionError,
    UnknownClauseTypeError,
    UnknownCriteriaTypeError,
)
from toolkit_notifications.models.conditions import (
    ConditionalClause,
    CriteriaCondition,
    CriteriaType,
    DisplayIf,
)
from toolkit_notifications.models.context import RuleContext
from toolkit_notifications.models.notification import ToolkitNotification

logger = logging.getLogger(__name__)


def _parse_version(version: str) -> semver.Version:
    if not isinstance(version, str):
        raise InvalidVersionError(version)
    try:
        # npm-style prefixes ("v1.2.3", "=1.2.3") are accepted
        return semver.Version.parse(version.strip().lstrip("=v"))
    except ValueError:
        raise InvalidVersionError(version) from None


def _compare_versions(left: str, right: str) -> int:
    """Semantic precedence comparison. Build metadata does not count."""
    return _parse_version(left).compare(_parse_version(right))


def _is_valid_version(version: str, clause: ConditionalClause) -> bool:
    """
    Check whether a version satisfies a version clause, e.g.

        RangeClause(lower_inclusive="1.21.0")

    matches every version from 1.21.0 up.
    """
    if clause.type == "range":
        lower_ok = (
            not clause.lower_inclusive
            or _compare_versions(version, clause.lower_inclusive) >= 0
        )
        upper_ok = (
            not clause.upper_exclusive
            or _compare_versions(version, clause.upper_exclusive) < 0
        )
        return lower_ok and upper_ok

    if clause.type == "exactMatch":
        return any(_compare_versions(version, v) == 0 for v in clause.values)

    if clause.type == "or":
        return any(_is_valid_version(version, c) for c in clause.clauses)

    raise UnknownClauseTypeError(getattr(clause, "type", None))


def _is_expected(actual: str, expected: Sequence[str]) -> bool:
    return actual in set(expected)


def _has_any_of_expected(actual: Sequence[str], expected: Sequence[str]) -> bool:
    expected_set = set(expected)
    return any(v in expected_set for v in actual)


def _is_superset_of_expected(actual: Sequence[str], expected: Sequence[str]) -> bool:
    return set(expected) <= set(actual)


def _is_equal_set_to_expected(actual: Sequence[str], expected: Sequence[str]) -> bool:
    return set(actual) == set(expected)


# Criteria registry: maps each criteria type to the context field it reads
# and the comparison applied against the expected values.
_CRITERIA_CHECKS: Dict[CriteriaType, Tuple[str, Callable[..., bool]]] = {
    CriteriaType.OS: ("os", _is_expected),
    CriteriaType.COMPUTE_ENV: ("compute_env", _is_expected),
    CriteriaType.AUTH_TYPE: ("auth_types", _has_any_of_expected),
    CriteriaType.AUTH_REGION: ("auth_regions", _has_any_of_expected),
    CriteriaType.AUTH_STATE: ("auth_states", _has_any_of_expected),
    CriteriaType.AUTH_SCOPES: ("auth_scopes", _is_equal_set_to_expected),
    CriteriaType.INSTALLED_EXTENSIONS: ("installed_extensions", _is_superset_of_expected),
    CriteriaType.ACTIVE_EXTENSIONS: ("active_extensions", _is_superset_of_expected),
}


class RuleEngine:
    """
    Decides whether notifications fit the context given on construction.

    Usage:
        engine = RuleEngine(context)
        visible = [n for n in notifications if engine.should_display_notification(n)]
    """

    def __init__(self, context: RuleContext):
        self._context = context

    @property
    def context(self) -> RuleContext:
        return self._context

    def should_display_notification(self, notification: ToolkitNotification) -> bool:
        """True if every part of the notification's display_if gate is satisfied."""
        return self._evaluate(notification.display_if)

    def filter_notifications(
        self, notifications: Iterable[ToolkitNotification]
    ) -> List[ToolkitNotification]:
        """Keep the notifications that should be displayed, in their original order."""
        return [n for n in notifications if self.should_display_notification(n)]

    def _evaluate(self, condition: DisplayIf) -> bool:
        if condition.extension_id != self._context.extension_id:
            logger.debug(
                "Blocked: notification targets %s, running extension is %s",
                condition.extension_id,
                self._context.extension_id,
            )
            return False

        if condition.ide_version is not None:
            if not _is_valid_version(self._context.ide_version, condition.ide_version):
                logger.debug("Blocked: IDE version %s out of range", self._context.ide_version)
                return False

        if condition.extension_version is not None:
            if not _is_valid_version(
                self._context.extension_version, condition.extension_version
            ):
                logger.debug(
                    "Blocked: extension version %s out of range",
                    self._context.extension_version,
                )
                return False

        if condition.additional_criteria:
            for criteria in condition.additional_criteria:
                if not self._evaluate_rule(criteria):
                    logger.debug("Blocked: %s criteria not met", criteria.type)
                    return False

        return True

    def _evaluate_rule(self, criteria: CriteriaCondition) -> bool:
        check = _CRITERIA_CHECKS.get(criteria.type)
        if check is None:
            raise UnknownCriteriaTypeError(criteria.type)

        field_name, compare = check
        return compare(getattr(self._context, field_name), criteria.values)
