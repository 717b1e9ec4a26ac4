from vsm.extensions import db
from .base import BaseModel
from sqlalchemy import event


class AuditLog(BaseModel):
    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_entity", "entity_type", "entity_id"),
    )

    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False, index=True)
    entity_id = db.Column(db.String(36), nullable=False, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)


@event.listens_for(AuditLog, 'before_update')
@event.listens_for(AuditLog, 'before_delete')
def prevent_audit_mutation(mapper, connection, target):
    raise RuntimeError("Audit logs are immutable")
