"""
Leave models
"""
from sqlalchemy import (
    Column,
    Integer,
    DateTime,
    ForeignKey,
    String,
    Float,
    Enum as SQLEnum,
    UniqueConstraint,
    Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
import enum
from leave_app.db.base import Base
from leave_app.utils.datetime_utils import now_utc


class LeaveStatus(str, enum.Enum):
    REQUESTED = "REQUESTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"
    CLOSED = "CLOSED"


class LeaveType(str, enum.Enum):
    REGULAR = "REGULAR"
    SPECIAL = "SPECIAL"


class SpecialLeaveType(str, enum.Enum):
    MOVING = "MOVING"
    WEDDING = "WEDDING"
    CHILD_BIRTH = "CHILD_BIRTH"
    PARENTAL_CARE = "PARENTAL_CARE"


# Terminal leaves are ignored by overlap checks and never consume balance
TERMINAL_LEAVE_STATUSES = frozenset({
    LeaveStatus.REJECTED,
    LeaveStatus.CANCELLED,
    LeaveStatus.CLOSED,
})


class Leave(Base):
    __tablename__ = "leaves"

    id = Column(Integer, primary_key=True, index=True)
    leave_label = Column(String(255), nullable=False)
    employee_id = Column(String(16), ForeignKey("employees.id"), nullable=False, index=True)
    # Naive local wall-clock time
    start_of_leave = Column(DateTime, nullable=False)
    end_of_leave = Column(DateTime, nullable=False)
    approver_id = Column(String(16), ForeignKey("employees.id"), nullable=True, index=True)
    status = Column(SQLEnum(LeaveStatus), nullable=False, default=LeaveStatus.REQUESTED)
    leave_type = Column(SQLEnum(LeaveType), nullable=False, default=LeaveType.REGULAR)
    special_leave_type = Column(SQLEnum(SpecialLeaveType), nullable=True)
    total_hours = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    # Relationships
    employee = relationship("Employee", foreign_keys=[employee_id], back_populates="leaves")
    approver = relationship("Employee", foreign_keys=[approver_id], back_populates="approved_leaves")

    __table_args__ = (
        Index("ix_leaves_employee_dates", "employee_id", "start_of_leave", "end_of_leave"),
        CheckConstraint("end_of_leave > start_of_leave", name="check_end_after_start"),
    )

    @property
    def leave_id(self) -> int:
        return self.id


class LeaveBalance(Base):
    """
    Regular leave entitlement: one row per (employee_id, year).
    remaining = total - used (derived, not stored).
    """
    __tablename__ = "leave_balances"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String(16), ForeignKey("employees.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    total_days = Column(Integer, nullable=False, default=0)
    total_hours = Column(Float, nullable=False, default=0)
    used_days = Column(Integer, nullable=False, default=0)
    used_hours = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    employee = relationship("Employee", backref="leave_balances")

    __table_args__ = (
        UniqueConstraint("employee_id", "year", name="uq_leave_balances_employee_year"),
    )

    @property
    def remaining_days(self) -> int:
        return self.total_days - self.used_days

    @property
    def remaining_hours(self) -> float:
        return self.total_hours - self.used_hours


class SpecialLeaveUsage(Base):
    """Special leave consumed per (employee_id, year, special_leave_type)."""
    __tablename__ = "special_leave_usages"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(String(16), ForeignKey("employees.id"), nullable=False, index=True)
    year = Column(Integer, nullable=False, index=True)
    special_leave_type = Column(SQLEnum(SpecialLeaveType), nullable=False)
    used_days = Column(Integer, nullable=False, default=0)
    used_hours = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    employee = relationship("Employee", backref="special_leave_usages")

    __table_args__ = (
        UniqueConstraint(
            "employee_id", "year", "special_leave_type",
            name="uq_special_leave_usages_employee_year_type",
        ),
    )
