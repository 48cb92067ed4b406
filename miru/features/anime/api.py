"""Anime catalog call sites."""

from __future__ import annotations

from typing import Any

from miru.features.base import FeatureApi

EXTERNAL_SEARCH_MAX = 50


class AnimeApi(FeatureApi):
    async def search(self, query: str) -> list[dict[str, Any]]:
        return await self._call("searchAnime", {"query": query})

    async def get_by_id(self, anime_id: str) -> dict[str, Any] | None:
        return await self._call("getAnimeById", {"id": anime_id})

    async def get_top(self, page: int = 1, limit: int = 25) -> list[dict[str, Any]]:
        return await self._call("getTopAnime", {"page": page, "limit": limit})

    async def get_seasonal(self, year: int, season: str, page: int = 1) -> list[dict[str, Any]]:
        return await self._call("getSeasonalAnime", {"year": year, "season": season, "page": page})

    async def search_external(self, query: str, limit: int | None = None) -> list[dict[str, Any]]:
        if limit is not None:
            limit = min(limit, EXTERNAL_SEARCH_MAX)
        return await self._call("searchAnimeExternal", {"query": query, "limit": limit})

    async def get_by_external_id(
        self, external_id: str, preferred_provider: str | None = None
    ) -> dict[str, Any] | None:
        return await self._call(
            "getAnimeByExternalId", {"id": external_id, "preferred_provider": preferred_provider}
        )

    async def get_with_relations(self, anime_id: str) -> list[dict[str, Any]]:
        return await self._call("getAnimeWithRelations", {"anime_id": anime_id})

    async def get_relations(self, anime_id: str) -> list[dict[str, Any]]:
        return await self._call("getAnimeRelations", {"anime_id": anime_id})

    async def auto_enrich_on_load(self, anime_id: str) -> dict[str, Any]:
        """Ask the backend to fill missing provider data; check ``shouldReload`` on the result."""
        return await self._call("autoEnrichOnLoad", {"anime_id": anime_id})
