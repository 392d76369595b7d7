from sqlalchemy import Integer, Float, Boolean, String, Text, Date, DateTime, ForeignKey, CheckConstraint, Index, func
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from typing import Optional
from shiftdesk.db.database import Base


class Shifts(Base):
    __tablename__ = "shifts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    organization_id: Mapped[int] = mapped_column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    # no ondelete: deleting an employee with shifts must fail, not orphan or drop history
    employee_id: Mapped[int] = mapped_column(Integer, ForeignKey("employees.id"), nullable=False)
    shift_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_hour: Mapped[float] = mapped_column(Float, nullable=False)
    end_hour: Mapped[float] = mapped_column(Float, nullable=False)
    job: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    pay_rate: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    is_blocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("start_hour < end_hour", name="ck_shifts_hour_order"),
        Index("ix_shifts_org_date", "organization_id", "shift_date"),
        Index("ix_shifts_employee_date", "employee_id", "shift_date"),
    )
