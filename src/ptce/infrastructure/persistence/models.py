"""Database models for stored contenders and decided matches."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Index, Integer, String, Text

from .database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SavedModelRecord(Base):
    """A stored contender with its five attributes."""

    __tablename__ = "saved_models"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    prompt = Column(Text, nullable=False, default="")
    thumbnail_url = Column(Text, nullable=True)
    model_3d_url = Column(Text, nullable=True)
    video_url = Column(Text, nullable=True)
    texture_urls = Column(Text, nullable=True)  # JSON-encoded list
    attack_power = Column(Float, nullable=False)
    defense = Column(Float, nullable=False)
    speed_agility = Column(Float, nullable=False)
    strategy = Column(Float, nullable=False)
    endurance = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utc_now)

    __table_args__ = (
        Index("ix_saved_models_name", "name"),
        Index("ix_saved_models_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<SavedModelRecord(id={self.id}, name='{self.name}')>"


class MatchEvaluationRecord(Base):
    """One decided match."""

    __tablename__ = "ptce_evaluations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    match_id = Column(String(50), nullable=False)
    model1_id = Column(String(50), nullable=False)
    model2_id = Column(String(50), nullable=False)
    winner_id = Column(String(50), nullable=False)
    model1_score = Column(Float, nullable=False)
    model2_score = Column(Float, nullable=False)
    confidence = Column(Float, nullable=False)
    reasoning = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=_utc_now)

    __table_args__ = (
        Index("ix_ptce_evaluations_match_id", "match_id"),
        Index("ix_ptce_evaluations_model1_id", "model1_id"),
        Index("ix_ptce_evaluations_model2_id", "model2_id"),
        Index("ix_ptce_evaluations_winner_id", "winner_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<MatchEvaluationRecord(match_id={self.match_id}, "
            f"winner_id={self.winner_id})>"
        )
