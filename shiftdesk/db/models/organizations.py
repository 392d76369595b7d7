from enum import Enum
from sqlalchemy import Integer, String, DateTime, Enum as SQLEnum, func
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from shiftdesk.db.database import Base


class WeekStartDay(str, Enum):
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"


class Organizations(Base):
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    week_start_day: Mapped[WeekStartDay] = mapped_column(SQLEnum(WeekStartDay, name="week_start_day_enum"), nullable=False, default=WeekStartDay.SUNDAY)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
