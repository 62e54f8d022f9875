"""Consensus engine API models."""

from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ....domain.tournament.entities.contender import Contender, ContenderAttributes
from ....domain.tournament.value_objects.match_record import ContenderPerformance
from ....domain.tournament.value_objects.match_result import DetailedMatchResult, MatchResult


def _to_identifier(value: Any) -> Any:
    """Accept numeric ids as sent by clients of the stored model table."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class AttributesModel(BaseModel):
    """The five contender attributes, each 0-100."""

    model_config = ConfigDict(populate_by_name=True)

    offense: float = Field(
        ..., ge=0, le=100, validation_alias=AliasChoices("offense", "attack_power")
    )
    defense: float = Field(..., ge=0, le=100)
    agility: float = Field(
        ..., ge=0, le=100, validation_alias=AliasChoices("agility", "speed_agility")
    )
    strategy: float = Field(..., ge=0, le=100)
    endurance: float = Field(..., ge=0, le=100)

    def to_domain(self) -> ContenderAttributes:
        return ContenderAttributes(**self.model_dump())


class ContenderModel(BaseModel):
    """A contender as supplied by the client."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    prompt: str = ""
    thumbnail_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("thumbnail_url", "finalThumbnailUrl")
    )
    model_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("model_url", "finalModelUrl")
    )
    video_url: Optional[str] = None
    texture_urls: List[str] = Field(default_factory=list)
    attributes: AttributesModel

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _to_identifier(value)

    def to_domain(self) -> Contender:
        return Contender(
            id=self.id,
            name=self.name,
            attributes=self.attributes.to_domain(),
            prompt=self.prompt,
            thumbnail_url=self.thumbnail_url,
            model_url=self.model_url,
            video_url=self.video_url,
            texture_urls=tuple(self.texture_urls),
        )


class DetermineWinnerRequest(BaseModel):
    """Two fully described contenders."""

    model1: ContenderModel
    model2: ContenderModel


class DetermineWinnerByIdsRequest(BaseModel):
    """Two stored contender ids."""

    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    model1_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("model1_id", "model1Id")
    )
    model2_id: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("model2_id", "model2Id")
    )

    @field_validator("model1_id", "model2_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: Any) -> Any:
        return _to_identifier(value)


class ContenderResponse(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    id: str
    name: str
    prompt: str
    thumbnail_url: Optional[str]
    model_url: Optional[str]
    video_url: Optional[str]
    texture_urls: List[str]
    attributes: Dict[str, float]


class MatchResultResponse(BaseModel):
    """Outcome of one match."""

    match_id: str
    winner: ContenderResponse
    scores: Dict[str, float]
    confidence: float
    reasoning: str

    @classmethod
    def from_result(cls, result: Union[MatchResult, DetailedMatchResult]) -> "MatchResultResponse":
        if isinstance(result, DetailedMatchResult):
            result = result.result
        return cls(**result.to_dict())


class DetailedMatchResultResponse(MatchResultResponse):
    """Outcome of one match with every intermediate artifact."""

    interactions: List[Dict[str, Any]]
    initial_evaluations: Dict[str, Dict[str, Dict[str, Any]]]
    discussion_results: Dict[str, Any]
    consensus_scores: Dict[str, Any]
    predictive_outcomes: Dict[str, float]
    evaluation_mode: str

    @classmethod
    def from_result(cls, result: DetailedMatchResult) -> "DetailedMatchResultResponse":
        return cls(**result.to_dict())


class ContenderPerformanceResponse(BaseModel):
    contender_id: str
    total_matches: int
    wins: int
    losses: int
    avg_score: float
    avg_confidence: float
    win_rate: float

    @classmethod
    def from_domain(cls, performance: ContenderPerformance) -> "ContenderPerformanceResponse":
        return cls(**performance.to_dict())


class HealthResponse(BaseModel):
    status: str
    message: str
    evaluation_source: Optional[str] = None
