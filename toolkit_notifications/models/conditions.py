"""Display conditions: the declarative rule tree attached to a notification."""

from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, field_validator

from toolkit_notifications.errors import UnknownClauseTypeError, UnknownCriteriaTypeError
from toolkit_notifications.models.base import PayloadModel

CLAUSE_TYPES = ("range", "exactMatch", "or")


def _reject_unknown_clause(value: Any) -> Any:
    """Fail fast on raw clause payloads whose tag is not a known variant."""
    if isinstance(value, dict):
        clause_type = value.get("type")
        if clause_type not in CLAUSE_TYPES:
            raise UnknownClauseTypeError(clause_type)
    return value


class RangeClause(PayloadModel):
    """Matches lower_inclusive <= version < upper_exclusive; a missing bound is open."""

    type: Literal["range"] = "range"
    lower_inclusive: Optional[str] = None
    upper_exclusive: Optional[str] = None


class ExactMatchClause(PayloadModel):
    """Matches any of the listed versions."""

    type: Literal["exactMatch"] = "exactMatch"
    values: List[str] = []


class OrClause(PayloadModel):
    """Matches when any sub-clause matches. No sub-clauses never matches."""

    type: Literal["or"] = "or"
    clauses: List["ConditionalClause"] = []

    @field_validator("clauses", mode="before")
    @classmethod
    def _check_clause_tags(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            for clause in value:
                _reject_unknown_clause(clause)
        return value


ConditionalClause = Annotated[
    Union[RangeClause, ExactMatchClause, OrClause],
    Field(discriminator="type"),
]

OrClause.model_rebuild()


class CriteriaType(str, Enum):
    OS = "OS"
    COMPUTE_ENV = "ComputeEnv"
    AUTH_TYPE = "AuthType"
    AUTH_REGION = "AuthRegion"
    AUTH_STATE = "AuthState"
    AUTH_SCOPES = "AuthScopes"
    INSTALLED_EXTENSIONS = "InstalledExtensions"
    ACTIVE_EXTENSIONS = "ActiveExtensions"


class CriteriaCondition(PayloadModel):
    """A single environment fact check. `values` is the expected set."""

    type: CriteriaType
    values: List[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def _check_criteria_type(cls, value: Any) -> Any:
        if isinstance(value, CriteriaType):
            return value
        try:
            return CriteriaType(value)
        except ValueError:
            raise UnknownCriteriaTypeError(value) from None


class DisplayIf(PayloadModel):
    """Top-level gate for one notification. Every present part must pass."""

    extension_id: str
    ide_version: Optional[ConditionalClause] = None
    extension_version: Optional[ConditionalClause] = None
    additional_criteria: Optional[List[CriteriaCondition]] = None

    @field_validator("ide_version", "extension_version", mode="before")
    @classmethod
    def _check_clause_tag(cls, value: Any) -> Any:
        return _reject_unknown_clause(value)
