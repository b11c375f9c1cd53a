"""
Employee model
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from leave_app.db.base import Base
from leave_app.utils.datetime_utils import now_utc


class Employee(Base):
    __tablename__ = "employees"

    # Employee code, e.g. K012345
    id = Column(String(16), primary_key=True, index=True)
    name = Column(String, nullable=False)
    manager_id = Column(String(16), ForeignKey("employees.id"), nullable=True, index=True)
    contract_hours = Column(Integer, nullable=False, default=40)
    is_manager = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    # Relationships
    manager = relationship("Employee", remote_side=[id], back_populates="subordinates")
    subordinates = relationship("Employee", back_populates="manager")
    leaves = relationship("Leave", foreign_keys="Leave.employee_id", back_populates="employee")
    approved_leaves = relationship("Leave", foreign_keys="Leave.approver_id", back_populates="approver")

    __table_args__ = (
        CheckConstraint("contract_hours > 0", name="check_contract_hours_positive"),
    )

    @property
    def employee_id(self) -> str:
        return self.id
