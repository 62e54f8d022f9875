"""Contender entity."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..exceptions import ValidationError

ATTRIBUTE_NAMES: Tuple[str, ...] = ("offense", "defense", "agility", "strategy", "endurance")

# Wire names used by stored model records
LEGACY_ATTRIBUTE_NAMES: Dict[str, str] = {
    "attack_power": "offense",
    "speed_agility": "agility",
}

ATTRIBUTE_MIN = 0.0
ATTRIBUTE_MAX = 100.0


@dataclass(frozen=True)
class ContenderAttributes:
    """The five bounded attributes a contender is judged on."""

    offense: float
    defense: float
    agility: float
    strategy: float
    endurance: float

    def __post_init__(self):
        """Validate attribute bounds."""
        for name in ATTRIBUTE_NAMES:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValidationError(f"Attribute '{name}' must be numeric", field_name=name)
            if not math.isfinite(value) or not (ATTRIBUTE_MIN <= value <= ATTRIBUTE_MAX):
                raise ValidationError(
                    f"Attribute '{name}' must be between {ATTRIBUTE_MIN:g} and {ATTRIBUTE_MAX:g}",
                    field_name=name,
                )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContenderAttributes":
        """Create from a mapping, accepting legacy attribute names."""
        normalized = {}
        for key, value in data.items():
            normalized[LEGACY_ATTRIBUTE_NAMES.get(key, key)] = value

        missing = [name for name in ATTRIBUTE_NAMES if name not in normalized]
        if missing:
            raise ValidationError(f"Missing attributes: {', '.join(missing)}")

        return cls(**{name: normalized[name] for name in ATTRIBUTE_NAMES})

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    def strongest(self, count: int = 2) -> List[str]:
        """Names of the highest-valued attributes, strongest first."""
        ranked = sorted(ATTRIBUTE_NAMES, key=lambda name: getattr(self, name), reverse=True)
        return list(ranked[:count])


@dataclass(frozen=True)
class Contender:
    """One of the two models competing in a match.

    Owned by the caller; the pipeline never mutates it.
    """

    id: str
    name: str
    attributes: ContenderAttributes
    prompt: str = ""
    thumbnail_url: Optional[str] = None
    model_url: Optional[str] = None
    video_url: Optional[str] = None
    texture_urls: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate contender identity."""
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValidationError("Contender ID cannot be empty", field_name="id")

        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationError("Contender name cannot be empty", field_name="name")

        if not isinstance(self.attributes, ContenderAttributes):
            raise ValidationError("Contender attributes are required", field_name="attributes")

        if not isinstance(self.texture_urls, tuple):
            object.__setattr__(self, "texture_urls", tuple(self.texture_urls))

    @classmethod
    def create(
        cls, contender_id: str, name: str, attributes: Dict[str, Any], **kwargs: Any
    ) -> "Contender":
        """Factory method building attributes from a plain mapping."""
        return cls(
            id=str(contender_id),
            name=name,
            attributes=ContenderAttributes.from_dict(attributes),
            **kwargs,
        )

    def summary(self) -> Dict[str, str]:
        """Identity fields used in log payloads."""
        return {"id": self.id, "name": self.name}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "prompt": self.prompt,
            "thumbnail_url": self.thumbnail_url,
            "model_url": self.model_url,
            "video_url": self.video_url,
            "texture_urls": list(self.texture_urls),
            "attributes": self.attributes.to_dict(),
        }

    def __str__(self) -> str:
        return f"Contender(id={self.id}, name={self.name})"
