"""
Audit Models for Expense Ledger

Every mutation of the ledger is recorded as an audit event.
This provides:
1. Traceability of every add, edit, delete and cascade
2. Debugging information when a request is rejected
3. A way to see what happened during a session

DESIGN DECISION: Audit trails are append-only. We never delete or modify events.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every ledger operation has an event for its success and for its no-op.
    """
    # Expense store
    EXPENSE_ADDED = "expense_added"
    EXPENSE_REJECTED = "expense_rejected"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_UPDATE_SKIPPED = "expense_update_skipped"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_DELETE_SKIPPED = "expense_delete_skipped"

    # Category registry
    CATEGORY_ADDED = "category_added"
    CATEGORY_REJECTED = "category_rejected"
    CATEGORY_REMOVED = "category_removed"
    CATEGORY_REMOVAL_BLOCKED = "category_removal_blocked"
    EXPENSES_REASSIGNED = "expenses_reassigned"

    # Export
    EXPORT_GENERATED = "export_generated"
    EXPORT_REJECTED = "export_rejected"

    # Session
    SAMPLE_DATA_LOADED = "sample_data_loaded"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'category', 'export')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID or name of the entity this event relates to"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
        }

    def to_row(self) -> list[str]:
        """
        Flatten to a list of strings.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, entity_type, entity_id,
         description, details_json]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            self.entity_type or "",
            self.entity_id or "",
            self.description,
            json.dumps(self.details, default=str) if self.details else "",
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, amount, category)
        event = AuditEventBuilder.category_removed(name, reassigned_to)
    """

    @staticmethod
    def expense_added(
        expense_id: int,
        amount: Decimal,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense added: {category} - {amount}",
            details={
                "amount": str(amount),
                "category": category,
            },
        )

    @staticmethod
    def expense_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def expense_updated(expense_id: int, amount: Decimal) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense {expense_id} updated",
            details={
                "amount": str(amount),
            },
        )

    @staticmethod
    def expense_update_skipped(
        expense_id: int,
        reason: str,
        issues: Optional[list[dict]] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATE_SKIPPED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense {expense_id} not updated: {reason}",
            details={
                "reason": reason,
                "issues": issues or [],
            },
        )

    @staticmethod
    def expense_deleted(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense {expense_id} deleted",
        )

    @staticmethod
    def expense_delete_skipped(expense_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETE_SKIPPED,
            severity=AuditSeverity.DEBUG,
            entity_type="expense",
            entity_id=str(expense_id),
            description=f"Expense {expense_id} not found, nothing deleted",
        )

    @staticmethod
    def category_added(name: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_ADDED,
            entity_type="category",
            entity_id=name,
            description=f"Category added: {name}",
        )

    @staticmethod
    def category_rejected(name: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="category",
            entity_id=name,
            description=f"Category rejected: {reason}",
            details={
                "reason": reason,
            },
        )

    @staticmethod
    def category_removed(name: str, reassigned_to: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REMOVED,
            entity_type="category",
            entity_id=name,
            description=f"Category removed: {name}",
            details={
                "reassigned_to": reassigned_to,
            },
        )

    @staticmethod
    def category_removal_blocked(name: str, remaining: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_REMOVAL_BLOCKED,
            severity=AuditSeverity.WARNING,
            entity_type="category",
            entity_id=name,
            description="Cannot remove the last remaining category",
            details={
                "remaining": remaining,
            },
        )

    @staticmethod
    def expenses_reassigned(
        from_category: str,
        to_category: str,
        count: int,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSES_REASSIGNED,
            entity_type="category",
            entity_id=from_category,
            description=f"{count} expenses moved from {from_category} to {to_category}",
            details={
                "from_category": from_category,
                "to_category": to_category,
                "count": count,
            },
        )

    @staticmethod
    def export_generated(
        filename: str,
        record_count: int,
        grand_total: Decimal,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_GENERATED,
            entity_type="export",
            entity_id=filename,
            description=f"Export generated: {filename} ({record_count} expenses)",
            details={
                "record_count": record_count,
                "grand_total": str(grand_total),
            },
        )

    @staticmethod
    def export_rejected(filters: dict) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPORT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="export",
            description="Export rejected: no expenses match the selected filters",
            details={
                "filters": filters,
            },
        )

    @staticmethod
    def sample_data_loaded(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAMPLE_DATA_LOADED,
            description=f"Loaded {count} sample expenses",
            details={
                "count": count,
            },
        )
