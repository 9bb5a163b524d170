"""Audit primitives: result type, severity and the abstract audit."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pagescan.models.seo import BrokenLinkInfo, PageData


class AuditSeverity(Enum):
    """Severity levels for audit findings."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"
    PASS = "pass"


@dataclass
class AuditResult:
    """Outcome of one audit over one page.

    ``score`` (0 to ``max_score``) is added to the breakdown bucket named by
    ``category``. ``issues`` maps SEOIssues field names to flags or lists and
    is merged across audits by the scorer; ``broken_links`` carries per-link
    diagnostics. ``passed`` is true for PASS and INFO severities.
    """
    audit_id: str
    name: str
    category: str
    severity: AuditSeverity
    score: int
    max_score: int
    passed: bool
    message: str
    issues: dict[str, Any] = field(default_factory=dict)
    broken_links: list[BrokenLinkInfo] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    recommendation: str | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "audit_id": self.audit_id,
            "name": self.name,
            "category": self.category,
            "severity": self.severity.value,
            "score": self.score,
            "max_score": self.max_score,
            "passed": self.passed,
            "message": self.message,
            "issues": {k: v for k, v in self.issues.items() if v},
            "broken_links": [b.to_dict() for b in self.broken_links],
            "details": self.details,
            "recommendation": self.recommendation,
        }


class BaseAudit(ABC):
    """One scored check contributing to a breakdown bucket.

    Concrete audits name themselves through ``audit_id``, ``name`` and
    ``category`` and implement ``run``. ``_result`` derives severity from the
    score and the flagged issues.
    """

    @property
    @abstractmethod
    def audit_id(self) -> str:
        """Unique identifier for this audit type."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this audit."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Score breakdown bucket this audit contributes to."""

    @property
    def description(self) -> str:
        """Optional description of what this audit checks."""
        return ""

    @abstractmethod
    def run(self, page_data: PageData, **context: Any) -> AuditResult:
        """Execute the audit check.

        Args:
            page_data: Facts extracted by the content scanner
            **context: Additional context (e.g. alternate thresholds)

        Returns:
            AuditResult with findings
        """

    def _result(
        self,
        score: int,
        max_score: int,
        message: str,
        *,
        issues: dict[str, Any] | None = None,
        broken_links: list[BrokenLinkInfo] | None = None,
        details: dict[str, Any] | None = None,
        recommendation: str | None = None,
    ) -> AuditResult:
        score = max(0, min(max_score, score))
        issues = issues or {}
        flagged = any(issues.values())

        if score == max_score and not flagged:
            severity = AuditSeverity.PASS
        elif score < max_score / 2:
            severity = AuditSeverity.CRITICAL
        elif score < max_score:
            severity = AuditSeverity.WARNING
        else:
            severity = AuditSeverity.INFO

        return AuditResult(
            audit_id=self.audit_id,
            name=self.name,
            category=self.category,
            severity=severity,
            score=score,
            max_score=max_score,
            passed=severity in (AuditSeverity.PASS, AuditSeverity.INFO),
            message=message,
            issues=issues,
            broken_links=broken_links or [],
            details=details or {},
            recommendation=recommendation if severity is not AuditSeverity.PASS else None,
        )
