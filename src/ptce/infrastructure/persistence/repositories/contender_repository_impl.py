"""Contender repository implementation."""

from dataclasses import replace
from typing import List, Optional

from sqlalchemy import select

from ....domain.tournament.entities.contender import Contender
from ....domain.tournament.repositories.contender_repository import ContenderRepository
from ..database import SessionFactory
from ..models import SavedModelRecord
from .mappers import ContenderMapper


def _to_key(contender_id: str) -> Optional[int]:
    """saved_models uses integer keys; anything else cannot match a row."""
    contender_id = str(contender_id).strip()
    return int(contender_id) if contender_id.isdigit() else None


class ContenderRepositoryImpl(ContenderRepository):
    """SQLAlchemy implementation of ContenderRepository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory
        self.mapper = ContenderMapper()

    async def save(self, contender: Contender) -> Contender:
        """Insert or update a contender; non-numeric ids get a new row id."""
        async with self.session_factory() as session:
            try:
                model = self.mapper.to_model(contender)
                merged = await session.merge(model)
                await session.commit()

                if contender.id != str(merged.id):
                    contender = replace(contender, id=str(merged.id))
                return contender

            except Exception:
                await session.rollback()
                raise

    async def get_by_id(self, contender_id: str) -> Optional[Contender]:
        key = _to_key(contender_id)
        if key is None:
            return None

        async with self.session_factory() as session:
            model = await session.get(SavedModelRecord, key)
            return self.mapper.to_domain(model) if model is not None else None

    async def get_by_ids(self, contender_ids: List[str]) -> List[Contender]:
        keys = [key for key in (_to_key(cid) for cid in contender_ids) if key is not None]
        if not keys:
            return []

        async with self.session_factory() as session:
            result = await session.execute(
                select(SavedModelRecord).where(SavedModelRecord.id.in_(keys))
            )
            by_key = {model.id: model for model in result.scalars().all()}

        # Preserve the caller's ordering
        return [self.mapper.to_domain(by_key[key]) for key in keys if key in by_key]
