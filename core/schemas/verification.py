"""
Module 01 - Schemas
File: verification.py

Purpose: Report format for the whitelist pre-flight self-check.
Each CheckResult is one assertion about a generated tree; the
VerificationResult collects them and names the first artifact to blame.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# "warn" checks never fail the report
CheckSeverity = Literal["info", "warn", "error"]

# A failed self-check blames either one leaf's proof or the stored root
ChallengeKind = Literal["whitelist_leaf", "whitelist_root"]


class CheckResult(BaseModel):
    """A single self-check assertion."""

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(..., min_length=1)
    ok: bool
    severity: CheckSeverity
    message: str
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        return not self.ok and self.severity == "error"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, severity="info", message=message, details=details or {})

    @classmethod
    def warning(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=True, severity="warn", message=message, details=details or {})

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(check_id=check_id, ok=False, severity="error", message=message, details=details or {})


class ChallengeRef(BaseModel):
    """Points at the artifact a failed self-check blames."""

    model_config = ConfigDict(extra="forbid")

    kind: ChallengeKind
    leaf_index: int | None = Field(default=None, description="Set for whitelist_leaf")
    address: str | None = Field(default=None, description="Set for whitelist_leaf")
    expected_root: str | None = Field(
        default=None,
        description="Root recomputed from the leaves (whitelist_root only)",
    )
    reason: str | None = None

    @classmethod
    def for_leaf(
        cls,
        leaf_index: int,
        address: str | None = None,
        reason: str | None = None,
    ) -> "ChallengeRef":
        return cls(kind="whitelist_leaf", leaf_index=leaf_index, address=address, reason=reason)

    @classmethod
    def for_root(cls, expected_root: str, reason: str | None = None) -> "ChallengeRef":
        return cls(kind="whitelist_root", expected_root=expected_root, reason=reason)


class VerificationResult(BaseModel):
    """
    Outcome of a self-check run.

    ok starts True and flips to False on the first error-level check.
    Warnings are reported but leave ok untouched.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = True
    checks: list[CheckResult] = Field(default_factory=list)
    challenge: ChallengeRef | None = None

    def add_check(self, check: CheckResult) -> None:
        self.checks.append(check)
        if check.is_error:
            self.ok = False

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.ok and check.severity == "info")

    @property
    def error_count(self) -> int:
        return sum(1 for check in self.checks if check.is_error)

    @property
    def error_messages(self) -> list[str]:
        return [check.message for check in self.checks if check.is_error]

    @property
    def warnings(self) -> list[str]:
        return [check.message for check in self.checks if check.severity == "warn"]
