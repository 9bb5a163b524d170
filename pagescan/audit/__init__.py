"""Audit framework for SEO checks."""
from pagescan.audit.base import AuditResult, AuditSeverity, BaseAudit
from pagescan.audit.registry import AuditRegistry
from pagescan.audit.seo_audits import (
    AccessibilityAudit,
    ContentAudit,
    LinksAudit,
    MetadataAudit,
    default_audits,
)

audit_registry = AuditRegistry()
for _audit in default_audits():
    audit_registry.register(_audit)

__all__ = [
    "BaseAudit",
    "AuditResult",
    "AuditSeverity",
    "AuditRegistry",
    "audit_registry",
    "MetadataAudit",
    "ContentAudit",
    "AccessibilityAudit",
    "LinksAudit",
    "default_audits",
]
