from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


class Reading(Base):
    __tablename__ = "readings"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    pot_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    raw_value: Mapped[float] = mapped_column(Float, nullable=False)
    moisture_percent: Mapped[float] = mapped_column(Float, nullable=False)
    # set by the store clock, never by the client
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
