"""SQLAlchemy ORM models for IntervalWatch."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class HistoryItem(Base):
    """One saved workout (label like ``"1 min ×3 + rest 20s"``)."""

    __tablename__ = "history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    when = Column("completed_at", DateTime, nullable=False, default=datetime.now)
    label = Column(String(255), nullable=False)
    seconds = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<HistoryItem id={self.id} label={self.label!r} seconds={self.seconds}>"


class CustomPreset(Base):
    """User-saved duration shown next to the built-in presets."""

    __tablename__ = "custom_presets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False)
    seconds = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<CustomPreset id={self.id} name={self.name!r} seconds={self.seconds}>"
