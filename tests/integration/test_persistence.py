"""Integration tests for the SQLAlchemy repositories."""

from datetime import datetime, timedelta

import pytest

from ptce.domain.tournament.entities.contender import Contender
from tests.factories import ContenderFactory, MatchRecordFactory


class TestDatabaseManager:
    @pytest.mark.asyncio
    async def test_health_check(self, database):
        health = await database.health_check()

        assert health["status"] == "healthy"


class TestContenderRepository:
    """Integration tests for ContenderRepositoryImpl."""

    @pytest.mark.asyncio
    async def test_save_assigns_numeric_id(self, contender_repository):
        contender = ContenderFactory(id="draft", texture_urls=("a.png", "b.png"))

        saved = await contender_repository.save(contender)

        assert saved.id.isdigit()
        loaded = await contender_repository.get_by_id(saved.id)
        assert loaded.name == contender.name
        assert loaded.attributes == contender.attributes
        assert loaded.texture_urls == ("a.png", "b.png")

    @pytest.mark.asyncio
    async def test_save_updates_existing_row(self, contender_repository):
        saved = await contender_repository.save(ContenderFactory(id="draft", name="Before"))

        await contender_repository.save(ContenderFactory(id=saved.id, name="After"))

        assert (await contender_repository.get_by_id(saved.id)).name == "After"

    @pytest.mark.asyncio
    async def test_unknown_ids(self, contender_repository):
        assert await contender_repository.get_by_id("12345") is None
        assert await contender_repository.get_by_id("not-a-number") is None

    @pytest.mark.asyncio
    async def test_get_by_ids_keeps_order(self, contender_repository):
        first = await contender_repository.save(ContenderFactory(id="draft"))
        second = await contender_repository.save(ContenderFactory(id="draft"))

        loaded = await contender_repository.get_by_ids([second.id, "999", first.id])

        assert [c.id for c in loaded] == [second.id, first.id]
        assert all(isinstance(c, Contender) for c in loaded)


class TestMatchResultRepository:
    """Integration tests for MatchResultRepositoryImpl."""

    @pytest.mark.asyncio
    async def test_save_and_get(self, match_repository):
        record = MatchRecordFactory()

        await match_repository.save_match_result(record)
        loaded = await match_repository.get_by_match_id(record.match_id)

        assert loaded.winner_id == record.winner_id
        assert loaded.contender1_score == record.contender1_score
        assert loaded.reasoning == record.reasoning
        assert loaded.created_at is not None

    @pytest.mark.asyncio
    async def test_missing_match(self, match_repository):
        assert await match_repository.get_by_match_id("absent") is None

    @pytest.mark.asyncio
    async def test_contender_matches_newest_first(self, match_repository):
        now = datetime(2024, 5, 1, 12, 0, 0)
        older = MatchRecordFactory(contender1_id="1", contender2_id="2", created_at=now)
        newer = MatchRecordFactory(
            contender1_id="3", contender2_id="1", created_at=now + timedelta(minutes=5)
        )
        unrelated = MatchRecordFactory(contender1_id="4", contender2_id="5")
        for record in (older, newer, unrelated):
            await match_repository.save_match_result(record)

        matches = await match_repository.get_contender_matches("1")

        assert [m.match_id for m in matches] == [newer.match_id, older.match_id]

    @pytest.mark.asyncio
    async def test_performance_counts_both_columns(self, match_repository):
        await match_repository.save_match_result(
            MatchRecordFactory(
                contender1_id="1",
                contender2_id="2",
                winner_id="1",
                contender1_score=8.0,
                contender2_score=6.0,
                confidence=1.0,
            )
        )
        await match_repository.save_match_result(
            MatchRecordFactory(
                contender1_id="3",
                contender2_id="1",
                winner_id="3",
                contender1_score=7.5,
                contender2_score=7.0,
                confidence=0.75,
            )
        )

        performance = await match_repository.get_contender_performance("1")

        assert performance.total_matches == 2
        assert performance.wins == 1
        assert performance.losses == 1
        assert performance.avg_score == 7.5
        assert performance.avg_confidence == 0.875
        assert performance.win_rate == 0.5

    @pytest.mark.asyncio
    async def test_performance_without_matches(self, match_repository):
        assert await match_repository.get_contender_performance("1") is None
