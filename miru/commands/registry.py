"""Command schema registry for the backend's exported commands.

Mirrors the backend's command list; add a definition here whenever the
backend exports a new command.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from miru.bridge.schema import CommandParam, CommandSchema, CommandSignature

from .models import (
    AddAnimeToCollectionRequest,
    AnimeSummary,
    AnimeWithRelation,
    AutoEnrichRequest,
    AutoEnrichResult,
    BasicRelation,
    CategorizedFranchise,
    Collection,
    CreateCollectionRequest,
    DeleteCollectionRequest,
    FranchiseRelation,
    GetAnimeByExternalIdRequest,
    GetAnimeByIdRequest,
    GetAnimeWithRelationsRequest,
    GetCollectionAnimeRequest,
    GetCollectionRequest,
    GetRelationsRequest,
    GetSeasonalAnimeRequest,
    GetTopAnimeRequest,
    ImportAnimeBatchRequest,
    ImportBatchResult,
    ImportResult,
    ImportValidatedAnimeRequest,
    RelationshipCapabilities,
    RemoveAnimeFromCollectionRequest,
    SearchAnimeExternalRequest,
    SearchAnimeRequest,
    UpdateAnimeInCollectionRequest,
    UpdateCollectionRequest,
    ValidateAnimeTitlesRequest,
    ValidationResult,
)


def _command(
    name: str,
    request: type | None,
    returns: Any,
    description: str,
    *,
    params: tuple[CommandParam, ...] | None = None,
) -> CommandSignature:
    if params is None:
        params = (CommandParam("request", request),) if request is not None else ()
    return CommandSignature(name=name, params=params, returns=returns, error=str, description=description)


_ANILIST_ID = (CommandParam("anime_id", int),)

COMMAND_DEFINITIONS: tuple[CommandSignature, ...] = (
    # Anime
    _command("searchAnime", SearchAnimeRequest, list[AnimeSummary], "Search the local catalog"),
    _command("getAnimeById", GetAnimeByIdRequest, AnimeSummary | None, "Fetch one anime by id"),
    _command("getTopAnime", GetTopAnimeRequest, list[AnimeSummary], "Top ranked anime"),
    _command("getSeasonalAnime", GetSeasonalAnimeRequest, list[AnimeSummary], "Anime airing in a season"),
    _command("searchAnimeExternal", SearchAnimeExternalRequest, list[AnimeSummary], "Search external providers"),
    _command("getAnimeByExternalId", GetAnimeByExternalIdRequest, AnimeSummary | None, "Fetch by provider id"),
    _command("getAnimeRelations", GetRelationsRequest, list[AnimeSummary], "Legacy relations lookup"),
    _command("autoEnrichOnLoad", AutoEnrichRequest, AutoEnrichResult, "Fill missing provider data for one anime"),
    _command(
        "getAnimeWithRelations", GetAnimeWithRelationsRequest, list[AnimeWithRelation], "Anime plus its franchise"
    ),
    # Collections
    _command("createCollection", CreateCollectionRequest, Collection, "Create a collection"),
    _command("getCollection", GetCollectionRequest, Collection | None, "Fetch one collection"),
    _command("getAllCollections", None, list[Collection], "List all collections"),
    _command("updateCollection", UpdateCollectionRequest, Collection, "Rename or describe a collection"),
    _command("deleteCollection", DeleteCollectionRequest, None, "Delete a collection"),
    _command("addAnimeToCollection", AddAnimeToCollectionRequest, None, "Add anime to a collection"),
    _command("removeAnimeFromCollection", RemoveAnimeFromCollectionRequest, None, "Remove anime from a collection"),
    _command("getCollectionAnime", GetCollectionAnimeRequest, list[AnimeSummary], "Anime in a collection"),
    _command("updateAnimeInCollection", UpdateAnimeInCollectionRequest, None, "Update score or notes"),
    # Import
    _command("importAnimeBatch", ImportAnimeBatchRequest, ImportBatchResult, "Import titles in one pass"),
    _command("validateAnimeTitles", ValidateAnimeTitlesRequest, ValidationResult, "Match titles before import"),
    _command("importValidatedAnime", ImportValidatedAnimeRequest, ImportResult, "Import matched titles"),
    # Franchise discovery (AniList ids)
    _command("getFranchiseRelations", None, list[BasicRelation], "Direct relations", params=_ANILIST_ID),
    _command(
        "discoverFranchiseDetails", None, list[FranchiseRelation], "Whole franchise with metadata", params=_ANILIST_ID
    ),
    _command(
        "discoverCategorizedFranchise", None, CategorizedFranchise, "Franchise grouped by kind", params=_ANILIST_ID
    ),
    _command("getRelationshipCapabilities", None, RelationshipCapabilities, "Which provider serves relations"),
)


@lru_cache(maxsize=1)
def get_command_schema() -> CommandSchema:
    """Build the registry once per process."""
    return CommandSchema(COMMAND_DEFINITIONS)
