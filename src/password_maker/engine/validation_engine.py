"""Validation Engine - reports every problem in a profile.

Generation stops at the first unusable setting. The validator instead walks
all settings and reports each problem, so a front end can show the whole
list at once.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from password_maker.engine.leet import LeetMode, validate_leet_level
from password_maker.engine.password_engine import MAX_PASSWORD_LENGTH
from password_maker.engine.url_parsing import UrlMode
from password_maker.errors import SettingsError, SettingsErrorKind
from password_maker.hashing.backends import HashBackendRegistry

if TYPE_CHECKING:
    from password_maker.profiles.base import Profile


class ValidationSeverity(str, Enum):
    """Severity levels for validation issues."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: ValidationSeverity
    message: str
    path: str = ""
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "path": self.path,
            "context": self.context,
        }


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    issues: list[ValidationIssue] = field(default_factory=list)
    validated_count: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == ValidationSeverity.WARNING)

    def add_issue(
        self,
        severity: ValidationSeverity,
        message: str,
        path: str = "",
        **context: Any,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                path=path,
                context=context,
            )
        )
        if severity == ValidationSeverity.ERROR:
            self.valid = False

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another validation result into this one."""
        return ValidationResult(
            valid=self.valid and other.valid,
            issues=self.issues + other.issues,
            validated_count=self.validated_count + other.validated_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "error_count": self.error_count,
            "warning_count": self.warning_count,
            "validated_count": self.validated_count,
            "issues": [i.to_dict() for i in self.issues],
        }


class ProfileValidator:
    """Checks profiles for settings that would fail or weaken generation."""

    def __init__(self, hash_registry: HashBackendRegistry | None = None):
        self.hash_registry = hash_registry or HashBackendRegistry()

    def validate_profile(self, profile: "Profile") -> ValidationResult:
        """Validate a single profile.

        Checks:
        - Name is present
        - Hash algorithm is known
        - Leet mode is known and its level is in range
        - Alphabet is non-empty (warns on duplicates and single characters)
        - Password length is within bounds
        - use_params has an effect under the URL mode
        """
        result = ValidationResult(valid=True, validated_count=1)

        if not profile.name:
            result.add_issue(
                ValidationSeverity.ERROR,
                "Profile must have a name",
                path="name",
            )

        if profile.hash_algorithm not in self.hash_registry:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Unknown hash algorithm: {profile.hash_algorithm}",
                path="hash_algorithm",
                actual=profile.hash_algorithm,
            )

        try:
            mode = LeetMode.from_name(profile.leet_mode)
            if mode is not LeetMode.NOT_AT_ALL:
                validate_leet_level(profile.leet_level)
        except SettingsError as e:
            result.add_issue(
                ValidationSeverity.ERROR,
                str(e),
                path="leet_level" if e.kind is SettingsErrorKind.INVALID_LEET_LEVEL else "leet_mode",
                kind=e.kind.value,
            )

        self._check_alphabet(profile.alphabet, result)

        if not 0 <= profile.password_length <= MAX_PASSWORD_LENGTH:
            result.add_issue(
                ValidationSeverity.ERROR,
                f"Password length must be from 0 to {MAX_PASSWORD_LENGTH}: "
                f"{profile.password_length}",
                path="password_length",
            )
        elif profile.password_length == 0 and not (profile.prefix or profile.suffix):
            result.add_issue(
                ValidationSeverity.WARNING,
                "Password length is 0; passwords will be empty",
                path="password_length",
            )

        if profile.use_params and profile.url_mode is UrlMode.COMPONENTS:
            result.add_issue(
                ValidationSeverity.INFO,
                "use_params has no effect unless url_mode is 'all'",
                path="use_params",
            )

        return result

    def validate_profiles(self, profiles: Iterable["Profile"]) -> ValidationResult:
        """Validate several profiles, also warning on duplicate names."""
        result = ValidationResult(valid=True)
        names: list[str] = []

        for profile in profiles:
            result = result.merge(self.validate_profile(profile))
            names.append(profile.name)

        for name, occurrences in Counter(names).items():
            if occurrences > 1:
                result.add_issue(
                    ValidationSeverity.WARNING,
                    f"Duplicate profile name: {name}",
                    path="name",
                    occurrences=occurrences,
                )

        return result

    def _check_alphabet(self, alphabet: str, result: ValidationResult) -> None:
        if not alphabet:
            result.add_issue(
                ValidationSeverity.ERROR,
                "The character set must not be empty",
                path="alphabet",
            )
            return

        if len(alphabet) < 2:
            result.add_issue(
                ValidationSeverity.WARNING,
                "A single-character set produces a constant password",
                path="alphabet",
            )

        duplicates = sorted(char for char, n in Counter(alphabet).items() if n > 1)
        if duplicates:
            result.add_issue(
                ValidationSeverity.WARNING,
                f"Character set contains duplicates: {''.join(duplicates)}",
                path="alphabet",
                duplicates=duplicates,
            )
