from typing import Optional
from datetime import date, datetime
from sqlalchemy import Date, DateTime, Float, ForeignKey, Integer, Text, CheckConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column

from shiftdesk.db.database import Base


class BlockedPeriods(Base):
    __tablename__ = "blocked_periods"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    organization_id: Mapped[int] = mapped_column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    # NULL employee_id is an organization-wide blackout
    employee_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_hour: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    end_hour: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    created_by: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("employees.id", ondelete="SET NULL"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_blocked_date_order"),
        Index("ix_blocked_periods_org_dates", "organization_id", "start_date", "end_date"),
    )
