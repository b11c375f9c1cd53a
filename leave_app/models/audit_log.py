"""
Audit log model
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from leave_app.db.base import Base


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    actor_id = Column(String(16), nullable=True, index=True)
    action = Column(String, nullable=False)  # e.g. "LEAVE_CREATE", "LEAVE_STATUS_UPDATE"
    entity_type = Column(String, nullable=False)  # e.g. "leave", "employee", "holidays"
    entity_id = Column(String, nullable=True)
    meta_json = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
