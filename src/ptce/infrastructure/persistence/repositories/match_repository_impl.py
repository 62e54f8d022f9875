"""Match result repository implementation."""

from typing import List, Optional

from sqlalchemy import case, func, literal, or_, select, union_all

from ....domain.tournament.repositories.match_repository import MatchResultRepository
from ....domain.tournament.value_objects.match_record import ContenderPerformance, MatchRecord
from ..database import SessionFactory
from ..models import MatchEvaluationRecord
from .mappers import MatchRecordMapper


class MatchResultRepositoryImpl(MatchResultRepository):
    """SQLAlchemy implementation of MatchResultRepository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self.mapper = MatchRecordMapper()

    async def save_match_result(self, record: MatchRecord) -> None:
        async with self.session_factory() as session:
            try:
                session.add(self.mapper.to_model(record))
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def get_by_match_id(self, match_id: str) -> Optional[MatchRecord]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(MatchEvaluationRecord).where(MatchEvaluationRecord.match_id == match_id)
            )
            model = result.scalars().first()
            return self.mapper.to_domain(model) if model is not None else None

    async def get_contender_matches(self, contender_id: str) -> List[MatchRecord]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(MatchEvaluationRecord)
                .where(
                    or_(
                        MatchEvaluationRecord.model1_id == contender_id,
                        MatchEvaluationRecord.model2_id == contender_id,
                    )
                )
                .order_by(MatchEvaluationRecord.created_at.desc(), MatchEvaluationRecord.id.desc())
            )
            return [self.mapper.to_domain(model) for model in result.scalars().all()]

    async def get_contender_performance(
        self, contender_id: str
    ) -> Optional[ContenderPerformance]:
        """Aggregate over both participant columns, like the model performance view."""
        record = MatchEvaluationRecord
        as_first = select(
            record.model1_score.label("score"),
            case((record.model1_id == record.winner_id, 1), else_=0).label("won"),
            record.confidence.label("confidence"),
        ).where(record.model1_id == contender_id)
        as_second = select(
            record.model2_score.label("score"),
            case((record.model2_id == record.winner_id, 1), else_=0).label("won"),
            record.confidence.label("confidence"),
        ).where(record.model2_id == contender_id)
        participations = union_all(as_first, as_second).subquery()

        query = select(
            func.count(literal(1)).label("total_matches"),
            func.coalesce(func.sum(participations.c.won), 0).label("wins"),
            func.avg(participations.c.score).label("avg_score"),
            func.avg(participations.c.confidence).label("avg_confidence"),
        ).select_from(participations)

        async with self.session_factory() as session:
            row = (await session.execute(query)).one()

        total_matches = int(row.total_matches or 0)
        if total_matches == 0:
            return None

        wins = int(row.wins)
        return ContenderPerformance(
            contender_id=contender_id,
            total_matches=total_matches,
            wins=wins,
            losses=total_matches - wins,
            avg_score=round(float(row.avg_score), 2),
            avg_confidence=round(float(row.avg_confidence), 3),
        )
