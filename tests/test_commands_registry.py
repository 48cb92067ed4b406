import pytest
from pydantic import ValidationError

from miru.bridge.errors import InvalidArgumentsError, UnknownCommandError
from miru.commands.models import AnimeSummary, Collection
from miru.commands.registry import COMMAND_DEFINITIONS, get_command_schema

EXPECTED_COMMANDS = {
    "searchAnime",
    "getAnimeById",
    "getTopAnime",
    "getSeasonalAnime",
    "searchAnimeExternal",
    "getAnimeByExternalId",
    "getAnimeWithRelations",
    "createCollection",
    "getCollection",
    "getAllCollections",
    "updateCollection",
    "deleteCollection",
    "addAnimeToCollection",
    "removeAnimeFromCollection",
    "getCollectionAnime",
    "updateAnimeInCollection",
    "importAnimeBatch",
    "validateAnimeTitles",
    "importValidatedAnime",
    "getAnimeRelations",
    "autoEnrichOnLoad",
    "getFranchiseRelations",
    "discoverFranchiseDetails",
    "discoverCategorizedFranchise",
    "getRelationshipCapabilities",
}

NO_ARG_COMMANDS = {"getAllCollections", "getRelationshipCapabilities"}


def test_registry_lists_every_backend_command():
    schema = get_command_schema()
    assert set(schema) == EXPECTED_COMMANDS
    assert len(COMMAND_DEFINITIONS) == len(EXPECTED_COMMANDS)
    assert get_command_schema() is schema


def test_every_command_takes_one_argument_unless_parameterless():
    schema = get_command_schema()
    for name, signature in schema.items():
        expected = 0 if name in NO_ARG_COMMANDS else 1
        assert len(signature.params) == expected, name
        assert signature.description


def test_create_collection_binds_request_with_defaults():
    signature = get_command_schema().resolve("createCollection")
    assert signature.bind(({"name": "Favorites"},)) == [{"name": "Favorites", "description": None}]


def test_create_collection_rejects_empty_name():
    signature = get_command_schema().resolve("createCollection")
    with pytest.raises(InvalidArgumentsError):
        signature.bind(({"name": ""},))


def test_add_anime_rejects_out_of_range_score():
    signature = get_command_schema().resolve("addAnimeToCollection")
    with pytest.raises(InvalidArgumentsError):
        signature.bind(({"collection_id": "c1", "anime_id": "a1", "user_score": 11},))


def test_seasonal_request_requires_known_season():
    signature = get_command_schema().resolve("getSeasonalAnime")
    assert signature.bind(({"year": 2024, "season": "fall"},)) == [{"year": 2024, "season": "fall", "page": 1}]
    with pytest.raises(InvalidArgumentsError):
        signature.bind(({"year": 2024, "season": "monsoon"},))


def test_unknown_command():
    with pytest.raises(UnknownCommandError):
        get_command_schema().resolve("dropDatabase")


def test_entity_results_accept_camel_case():
    collection = Collection.model_validate(
        {
            "id": "c1",
            "name": "Favorites",
            "animeIds": ["a1"],
            "createdAt": "2025-01-01T00:00:00Z",
            "updatedAt": "2025-01-01T00:00:00Z",
        }
    )
    assert collection.anime_ids == ["a1"]
    anime = AnimeSummary.model_validate({"id": "a1", "title": {"main": "Frieren"}, "animeType": "tv"})
    assert anime.anime_type == "tv"


def test_result_check_rejects_wrong_shape():
    signature = get_command_schema().resolve("getAllCollections")
    signature.check_result([])
    with pytest.raises(ValidationError):
        signature.check_result([{"id": "c1"}])


def test_auto_enrich_request_is_sent_camel_case():
    signature = get_command_schema().resolve("autoEnrichOnLoad")
    assert signature.bind(({"anime_id": "a1"},)) == [{"animeId": "a1"}]
    assert signature.bind(({"animeId": "a1"},)) == [{"animeId": "a1"}]


def test_franchise_commands_take_a_bare_anilist_id():
    schema = get_command_schema()
    for name in ("getFranchiseRelations", "discoverFranchiseDetails", "discoverCategorizedFranchise"):
        assert schema.resolve(name).bind((154587,)) == [154587]
        with pytest.raises(InvalidArgumentsError):
            schema.resolve(name).bind(("not-an-id",))


def test_relationship_capabilities_result_shape():
    signature = get_command_schema().resolve("getRelationshipCapabilities")
    signature.check_result(
        {
            "supported_provider": "AniList",
            "reasons_for_exclusivity": ["single GraphQL query"],
            "performance_comparison": {
                "anilist_calls": 1,
                "other_provider_calls": 13,
                "anilist_time_seconds": 0.4,
                "other_provider_time_seconds": 10.0,
                "efficiency_multiplier": 25.0,
            },
        }
    )
    with pytest.raises(ValidationError):
        signature.check_result({"reasons_for_exclusivity": []})
