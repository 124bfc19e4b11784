"""Errors raised when the environment fails validation."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

# pydantic error type -> reported reason
_REASONS = {
    "missing": "missing",
    "string_too_short": "missing",
    "string_type": "invalid_type",
    "invalid_url": "invalid_format",
    "invalid_email": "invalid_format",
    "literal_error": "invalid_choice",
    "invalid_boolean": "invalid_boolean",
}

MISSING_REASONS = frozenset({"missing", "invalid_type"})


@dataclass(frozen=True)
class EnvIssue:
    """A single offending environment variable."""

    field: str
    reason: str
    message: str
    value_provided: bool

    @property
    def is_missing(self) -> bool:
        return self.reason in MISSING_REASONS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "reason": self.reason,
            "message": self.message,
            "value_provided": self.value_provided,
        }


class SchemaValidationError(ValueError):
    """The environment does not satisfy the schema."""

    def __init__(self, issues: Iterable[EnvIssue], message: Optional[str] = None):
        self.issues: Tuple[EnvIssue, ...] = tuple(issues)
        if message is None:
            message = f"{len(self.issues)} invalid environment variable(s): " + ", ".join(self.fields)
        super().__init__(message)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(issue.field for issue in self.issues)

    @property
    def missing_fields(self) -> Tuple[str, ...]:
        """Variables that are absent, empty when required, or of the wrong type."""
        return tuple(issue.field for issue in self.issues if issue.is_missing)

    @classmethod
    def from_validation_error(
        cls, error: ValidationError, environ: Mapping[str, str]
    ) -> "SchemaValidationError":
        """
        Convert a pydantic ValidationError into a SchemaValidationError.

        Input values are never copied into the issues.

        Args:
            error: Error raised by SiteEnv validation
            environ: Mapping that was validated

        Returns:
            SchemaValidationError with one issue per failed check
        """
        issues = []
        for detail in error.errors():
            field = ".".join(str(part) for part in detail["loc"])
            issues.append(
                EnvIssue(
                    field=field,
                    reason=_REASONS.get(detail["type"], "invalid_value"),
                    message=detail["msg"],
                    value_provided=field in environ,
                )
            )
        return cls(issues)


class StartupAbortedError(SchemaValidationError):
    """Raised in production when required variables are missing."""

    def __init__(self, issues: Iterable[EnvIssue]):
        super().__init__(issues, "Environment validation failed. Check logs above.")
