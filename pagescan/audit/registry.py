"""Audit registry for managing available audits."""
from __future__ import annotations

from typing import Any

from pagescan.audit.base import AuditResult, BaseAudit
from pagescan.models.seo import PageData


class AuditRegistry:
    """Registry for managing and running audit checks.

    Usage:
        registry = AuditRegistry()
        registry.register(MyAudit())
        results = registry.run_all(page_data)
    """

    def __init__(self):
        self._audits: dict[str, BaseAudit] = {}
        self._categories: dict[str, list[str]] = {}

    def register(self, audit: BaseAudit) -> None:
        """Register an audit instance, replacing any with the same id."""
        if audit.audit_id in self._audits:
            self.unregister(audit.audit_id)
        self._audits[audit.audit_id] = audit
        self._categories.setdefault(audit.category, []).append(audit.audit_id)

    def unregister(self, audit_id: str) -> None:
        audit = self._audits.pop(audit_id, None)
        if audit is None:
            return
        category = audit.category
        if category in self._categories:
            self._categories[category] = [
                aid for aid in self._categories[category]
                if aid != audit_id
            ]

    def get(self, audit_id: str) -> BaseAudit | None:
        return self._audits.get(audit_id)

    def get_by_category(self, category: str) -> list[BaseAudit]:
        audit_ids = self._categories.get(category, [])
        return [self._audits[aid] for aid in audit_ids if aid in self._audits]

    def list_all(self) -> list[BaseAudit]:
        return list(self._audits.values())

    def list_categories(self) -> list[str]:
        return [c for c, ids in self._categories.items() if ids]

    def run(self, audit_id: str, page_data: PageData, **context: Any) -> AuditResult | None:
        """Run a specific audit.

        Returns:
            AuditResult or None if audit not found
        """
        audit = self._audits.get(audit_id)
        if audit is None:
            return None
        return audit.run(page_data, **context)

    def run_all(self, page_data: PageData, **context: Any) -> list[AuditResult]:
        """Run all registered audits in registration order."""
        return [audit.run(page_data, **context) for audit in self._audits.values()]
