from __future__ import annotations

from sqlalchemy import (
    Column,
    Float,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class EmotionalStateRow(Base):
    """One appended emotional-state sample. Rows are never updated or deleted."""

    __tablename__ = "emotional_states"
    # AUTOINCREMENT keeps ids strictly increasing and never reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(String, nullable=False)  # RFC-3339, UTC
    focus = Column(Float, nullable=False)
    stress = Column(Float, nullable=False)
    confusion = Column(Float, nullable=False)
    flow = Column(Float, nullable=False)
    valence = Column(Float, nullable=False)
    arousal = Column(Float, nullable=False)
    context = Column(Text, nullable=True)


class SessionSummaryRow(Base):
    """Reserved for session-level summaries. Nothing reads or writes it yet."""

    __tablename__ = "sessions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=True)
    avg_focus = Column(Float, nullable=True)
    avg_stress = Column(Float, nullable=True)
    avg_flow = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)
