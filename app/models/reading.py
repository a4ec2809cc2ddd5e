from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey
from sqlalchemy.sql import func

from app.core.database import Base


def _as_float(value):
    return float(value) if value is not None else None


class Reading(Base):
    """A single power/energy/cost sample owned by a user. Rows are never updated."""

    __tablename__ = "energy_readings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    power_w = Column(Numeric(10, 2))
    energy_wh = Column(Numeric(10, 2))
    cost = Column(Numeric(10, 4))
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Reading(user_id={self.user_id}, timestamp={self.timestamp}, power_w={self.power_w})>"

    def to_dict(self) -> dict:
        """Convert reading to dictionary"""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "power_w": _as_float(self.power_w),
            "energy_wh": _as_float(self.energy_wh),
            "cost": _as_float(self.cost),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }
