"""
Audit Logger

DESIGN DECISION: Every ledger mutation is logged, accepted or not.
This provides:
1. Traceability of what changed and why a request was refused
2. Debugging capability
3. A session history the presentation layer can show

The audit logger:
- Writes a structured log line for every event
- Appends events to an audit trail when one is configured
- Never lets a failing trail break the ledger operation
"""

import logging
from typing import Optional

import structlog

from expense_ledger.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from expense_ledger.store.interface import AuditTrailInterface


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    """Configure structlog (and the stdlib logger underneath it)."""
    logging.getLogger("expense_ledger").setLevel(level)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. The audit trail (for session history), if one is given
    """

    def __init__(self, trail: Optional[AuditTrailInterface] = None):
        """
        Initialize audit logger.

        Args:
            trail: Where events are appended. If None, only logs locally.
        """
        self._trail = trail
        self._logger = structlog.get_logger("expense_ledger.audit")

    @property
    def trail(self) -> Optional[AuditTrailInterface]:
        return self._trail

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Appends to the trail if available.

        Returns True if the trail write succeeded (or no trail configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._trail is not None:
            try:
                return self._trail.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_trail_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_expense_added(self, expense_id, amount, category) -> None:
        self.log(AuditEventBuilder.expense_added(expense_id, amount, category))

    def log_expense_rejected(self, issues: list[dict]) -> None:
        self.log(AuditEventBuilder.expense_rejected(issues))

    def log_expense_updated(self, expense_id, amount) -> None:
        self.log(AuditEventBuilder.expense_updated(expense_id, amount))

    def log_expense_update_skipped(
        self,
        expense_id,
        reason: str,
        issues: Optional[list[dict]] = None,
    ) -> None:
        self.log(AuditEventBuilder.expense_update_skipped(expense_id, reason, issues))

    def log_expense_deleted(self, expense_id) -> None:
        self.log(AuditEventBuilder.expense_deleted(expense_id))

    def log_expense_delete_skipped(self, expense_id) -> None:
        self.log(AuditEventBuilder.expense_delete_skipped(expense_id))

    def log_category_added(self, name: str) -> None:
        self.log(AuditEventBuilder.category_added(name))

    def log_category_rejected(self, name: Optional[str], reason: str) -> None:
        self.log(AuditEventBuilder.category_rejected(name or "", reason))

    def log_category_removed(self, name: str, reassigned_to: str) -> None:
        self.log(AuditEventBuilder.category_removed(name, reassigned_to))

    def log_category_removal_blocked(self, name: str, remaining: int) -> None:
        self.log(AuditEventBuilder.category_removal_blocked(name, remaining))

    def log_expenses_reassigned(self, from_category: str, to_category: str, count: int) -> None:
        self.log(AuditEventBuilder.expenses_reassigned(from_category, to_category, count))

    def log_export_generated(self, filename: str, record_count: int, grand_total) -> None:
        self.log(AuditEventBuilder.export_generated(filename, record_count, grand_total))

    def log_export_rejected(self, filters: dict) -> None:
        self.log(AuditEventBuilder.export_rejected(filters))

    def log_sample_data_loaded(self, count: int) -> None:
        self.log(AuditEventBuilder.sample_data_loaded(count))


# Default configuration; Ledger.from_settings() reconfigures from settings
configure_logging()
