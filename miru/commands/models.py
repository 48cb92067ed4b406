"""Request and result models mirroring the backend's command bindings.

Request models keep the backend's snake_case field names; entity results
(collections, anime) arrive camelCase and are validated through aliases.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Season = Literal["winter", "spring", "summer", "fall"]
AnimeProvider = Literal["jikan", "anilist"]


class _Entity(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


# -- collections ---------------------------------------------------------


class CreateCollectionRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None


class GetCollectionRequest(BaseModel):
    id: str


class UpdateCollectionRequest(BaseModel):
    id: str
    name: str | None = None
    description: str | None = None


class DeleteCollectionRequest(BaseModel):
    id: str


class AddAnimeToCollectionRequest(BaseModel):
    collection_id: str
    anime_id: str
    user_score: float | None = Field(default=None, ge=0, le=10)
    notes: str | None = None


class RemoveAnimeFromCollectionRequest(BaseModel):
    collection_id: str
    anime_id: str


class GetCollectionAnimeRequest(BaseModel):
    collection_id: str


class UpdateAnimeInCollectionRequest(BaseModel):
    collection_id: str
    anime_id: str
    user_score: float | None = Field(default=None, ge=0, le=10)
    notes: str | None = None


class Collection(_Entity):
    id: str
    name: str
    description: str | None = None
    anime_ids: list[str] = Field(default_factory=list)
    anime_count: int | None = None
    created_at: datetime
    updated_at: datetime


# -- anime ---------------------------------------------------------------


class AnimeTitle(_Entity):
    main: str
    english: str | None = None
    japanese: str | None = None
    romaji: str | None = None


class AnimeSummary(_Entity):
    """Subset of the backend's detailed anime record the UI relies on."""

    id: str
    title: AnimeTitle
    score: float | None = None
    episodes: int | None = None
    status: str | None = None
    anime_type: str | None = None


class SearchAnimeRequest(BaseModel):
    query: str


class GetAnimeByIdRequest(BaseModel):
    id: str


class GetTopAnimeRequest(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=25, ge=1)


class GetSeasonalAnimeRequest(BaseModel):
    year: int
    season: Season
    page: int = Field(default=1, ge=1)


class SearchAnimeExternalRequest(BaseModel):
    query: str
    limit: int | None = Field(default=None, ge=1)


class GetAnimeByExternalIdRequest(BaseModel):
    id: str
    preferred_provider: AnimeProvider | None = None


class GetAnimeWithRelationsRequest(BaseModel):
    anime_id: str


class AnimeWithRelation(_Entity):
    anime: AnimeSummary
    relation_type: str | None = None


class GetRelationsRequest(BaseModel):
    anime_id: str


class AutoEnrichRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    anime_id: str = Field(alias="animeId")


class AutoEnrichResult(_Entity):
    anime_id: str
    enrichment_performed: bool
    providers_found: list[str] = Field(default_factory=list)
    should_reload: bool = False


# -- franchise discovery (AniList ids, snake_case on the wire) -------------


class BasicRelation(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    relation_type: str


class FranchiseRelation(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    relation_type: str | None = None
    title: str | None = None
    year: int | None = None
    episodes: int | None = None
    format: str | None = None


class CategorizedFranchise(BaseModel):
    model_config = ConfigDict(extra="allow")

    main_story: list[FranchiseRelation] = Field(default_factory=list)
    side_stories: list[FranchiseRelation] = Field(default_factory=list)
    movies: list[FranchiseRelation] = Field(default_factory=list)
    ovas_specials: list[FranchiseRelation] = Field(default_factory=list)
    other: list[FranchiseRelation] = Field(default_factory=list)


class PerformanceComparison(BaseModel):
    anilist_calls: int
    other_provider_calls: int
    anilist_time_seconds: float
    other_provider_time_seconds: float
    efficiency_multiplier: float


class RelationshipCapabilities(BaseModel):
    model_config = ConfigDict(extra="allow")

    supported_provider: str
    reasons_for_exclusivity: list[str] = Field(default_factory=list)
    performance_comparison: PerformanceComparison | None = None


# -- import --------------------------------------------------------------


class ImportAnimeBatchRequest(BaseModel):
    titles: list[str]


class ValidateAnimeTitlesRequest(BaseModel):
    titles: list[str]


class ValidatedAnime(BaseModel):
    model_config = ConfigDict(extra="allow")

    input_title: str
    anime_data: dict[str, Any]
    confidence: float | None = None


class ImportValidatedAnimeRequest(BaseModel):
    validated_anime: list[ValidatedAnime]


class ImportResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    imported: list[dict[str, Any]] = Field(default_factory=list)
    failed: list[dict[str, Any]] = Field(default_factory=list)
    skipped: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0


class ImportBatchResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    imported_anime: list[ImportResult] = Field(default_factory=list)
    providers_used: list[str] = Field(default_factory=list)
    gaps_filled: int = 0


class ValidationResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    found: list[ValidatedAnime] = Field(default_factory=list)
    not_found: list[dict[str, Any]] = Field(default_factory=list)
    already_exists: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
