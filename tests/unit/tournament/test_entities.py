"""Tests for tournament domain entities."""

import pytest

from ptce.domain.tournament.entities.contender import Contender, ContenderAttributes
from ptce.domain.tournament.exceptions import ValidationError
from tests.factories import ContenderAttributesFactory, ContenderFactory


class TestContenderAttributes:
    """Test cases for ContenderAttributes."""

    def test_valid_bounds(self):
        """Attributes at both ends of the range are accepted."""
        attributes = ContenderAttributes(
            offense=0, defense=100, agility=50.5, strategy=0.0, endurance=100.0
        )

        assert attributes.offense == 0
        assert attributes.defense == 100

    @pytest.mark.parametrize("value", [-1, 100.01, float("nan"), float("inf")])
    def test_out_of_range_rejected(self, value):
        """Values outside 0-100 or non-finite values fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            ContenderAttributesFactory(offense=value)

        assert exc_info.value.field_name == "offense"

    def test_non_numeric_rejected(self):
        """Strings and booleans are not attribute values."""
        with pytest.raises(ValidationError):
            ContenderAttributesFactory(defense="high")

        with pytest.raises(ValidationError):
            ContenderAttributesFactory(defense=True)

    def test_from_dict_accepts_legacy_names(self):
        """Stored records use attack_power and speed_agility."""
        attributes = ContenderAttributes.from_dict(
            {
                "attack_power": 80,
                "defense": 60,
                "speed_agility": 70,
                "strategy": 50,
                "endurance": 40,
            }
        )

        assert attributes.offense == 80
        assert attributes.agility == 70

    def test_from_dict_missing_attribute(self):
        """Every attribute is required."""
        with pytest.raises(ValidationError, match="Missing attributes: endurance"):
            ContenderAttributes.from_dict(
                {"offense": 80, "defense": 60, "agility": 70, "strategy": 50}
            )

    def test_strongest(self):
        """Strongest attributes come highest first."""
        attributes = ContenderAttributes(
            offense=90, defense=20, agility=30, strategy=95, endurance=10
        )

        assert attributes.strongest() == ["strategy", "offense"]
        assert attributes.strongest(1) == ["strategy"]


class TestContender:
    """Test cases for Contender entity."""

    def test_create_contender(self):
        """Create builds attributes from a plain mapping."""
        contender = Contender.create(
            7,
            "Iron Fox",
            {"offense": 70, "defense": 60, "agility": 90, "strategy": 55, "endurance": 65},
            texture_urls=["a.png", "b.png"],
        )

        assert contender.id == "7"
        assert contender.attributes.agility == 90
        assert contender.texture_urls == ("a.png", "b.png")

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError, match="Contender ID cannot be empty"):
            ContenderFactory(id="  ")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="Contender name cannot be empty"):
            ContenderFactory(name="")

    def test_attributes_required(self):
        with pytest.raises(ValidationError):
            ContenderFactory(attributes={"offense": 1})

    def test_contender_is_immutable(self):
        """Contenders are never mutated by the pipeline."""
        contender = ContenderFactory()

        with pytest.raises(AttributeError):
            contender.name = "Renamed"

    def test_to_dict(self):
        contender = ContenderFactory(id="42", name="Blue")

        data = contender.to_dict()

        assert data["id"] == "42"
        assert data["name"] == "Blue"
        assert set(data["attributes"]) == {"offense", "defense", "agility", "strategy", "endurance"}
        assert data["texture_urls"] == []
