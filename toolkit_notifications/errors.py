"""Errors raised while building or evaluating notification rule trees."""


class RuleEngineError(Exception):
    """Base class for rule engine failures."""
    pass


class UnknownClauseTypeError(RuleEngineError):
    """Raised when a version clause carries a tag the engine does not know."""

    def __init__(self, clause_type):
        self.clause_type = clause_type
        super().__init__(f"Unknown clause type: {clause_type}")


class UnknownCriteriaTypeError(RuleEngineError):
    """Raised when a criteria condition carries a type the engine does not know."""

    def __init__(self, criteria_type):
        self.criteria_type = criteria_type
        super().__init__(f"Unknown criteria type: {criteria_type}")


class InvalidVersionError(RuleEngineError):
    """Raised when a version string is not a semantic version."""

    def __init__(self, version):
        self.version = version
        super().__init__(f"Invalid semantic version: {version!r}")
