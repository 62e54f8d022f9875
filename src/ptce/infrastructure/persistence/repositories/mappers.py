"""Mappers between tournament domain objects and database models."""

import json
from typing import List, Optional

from ....domain.tournament.entities.contender import Contender, ContenderAttributes
from ....domain.tournament.value_objects.match_record import MatchRecord
from ..models import MatchEvaluationRecord, SavedModelRecord


class ContenderMapper:
    """Maps Contender <-> saved_models rows, which use the legacy attribute names."""

    def to_model(self, contender: Contender) -> SavedModelRecord:
        attributes = contender.attributes
        model = SavedModelRecord(
            name=contender.name,
            prompt=contender.prompt,
            thumbnail_url=contender.thumbnail_url,
            model_3d_url=contender.model_url,
            video_url=contender.video_url,
            texture_urls=json.dumps(list(contender.texture_urls)),
            attack_power=attributes.offense,
            defense=attributes.defense,
            speed_agility=attributes.agility,
            strategy=attributes.strategy,
            endurance=attributes.endurance,
        )
        if contender.id.isdigit():
            model.id = int(contender.id)
        return model

    def to_domain(self, model: SavedModelRecord) -> Contender:
        return Contender(
            id=str(model.id),
            name=model.name,
            attributes=ContenderAttributes(
                offense=model.attack_power,
                defense=model.defense,
                agility=model.speed_agility,
                strategy=model.strategy,
                endurance=model.endurance,
            ),
            prompt=model.prompt or "",
            thumbnail_url=model.thumbnail_url,
            model_url=model.model_3d_url,
            video_url=model.video_url,
            texture_urls=tuple(self._decode_texture_urls(model.texture_urls)),
        )

    @staticmethod
    def _decode_texture_urls(raw: Optional[str]) -> List[str]:
        if not raw:
            return []
        try:
            decoded = json.loads(raw)
        except ValueError:
            # Older rows hold a comma separated list
            return [url.strip() for url in raw.split(",") if url.strip()]
        return [str(url) for url in decoded] if isinstance(decoded, list) else [str(decoded)]


class MatchRecordMapper:
    """Maps MatchRecord <-> ptce_evaluations rows."""

    def to_model(self, record: MatchRecord) -> MatchEvaluationRecord:
        model = MatchEvaluationRecord(
            match_id=record.match_id,
            model1_id=record.contender1_id,
            model2_id=record.contender2_id,
            winner_id=record.winner_id,
            model1_score=record.contender1_score,
            model2_score=record.contender2_score,
            confidence=record.confidence,
            reasoning=record.reasoning,
        )
        if record.created_at is not None:
            model.created_at = record.created_at
        return model

    def to_domain(self, model: MatchEvaluationRecord) -> MatchRecord:
        return MatchRecord(
            match_id=model.match_id,
            contender1_id=model.model1_id,
            contender2_id=model.model2_id,
            winner_id=model.winner_id,
            contender1_score=model.model1_score,
            contender2_score=model.model2_score,
            confidence=model.confidence,
            reasoning=model.reasoning or "",
            created_at=model.created_at,
        )
