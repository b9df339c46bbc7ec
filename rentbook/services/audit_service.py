"""Audit service for logging tenant, bill and rent payment events."""

from sqlalchemy.orm import Session

from rentbook.models.audit_log import AuditLog


class AuditService:
    """Service for audit log operations."""

    @staticmethod
    def log(
        db: Session,
        entity_type: str,
        entity_id: int,
        action: str,
        changes: dict | None = None,
    ) -> AuditLog:
        """Create audit log entry (one-liner).

        The entry is added to the session; the caller commits it together
        with the change it describes.

        Args:
            db: Database session
            entity_type: Type of entity ("tenant", "bill", "rent_payment")
            entity_id: Primary key of the entity
            action: Action performed ("create", "update", "delete", "paid", "toggle")
            changes: Optional JSON snapshot of changed fields

        Returns:
            Created AuditLog object
        """
        audit = AuditLog(
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            changes=changes,
        )
        db.add(audit)
        return audit


__all__ = ["AuditService"]
