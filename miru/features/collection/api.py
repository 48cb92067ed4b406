"""Collection call sites."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from miru.bridge.errors import BridgeError
from miru.features.base import FeatureApi


@dataclass(slots=True)
class AddManyResult:
    """Per-anime outcome of add_many_anime."""

    added: list[str] = field(default_factory=list)
    failed: dict[str, BridgeError] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.added) + len(self.failed)


class CollectionApi(FeatureApi):
    async def create(self, name: str, description: str | None = None) -> dict[str, Any]:
        return await self._call("createCollection", {"name": name, "description": description})

    async def get(self, collection_id: str) -> dict[str, Any] | None:
        return await self._call("getCollection", {"id": collection_id})

    async def get_all(self) -> list[dict[str, Any]]:
        return await self._call("getAllCollections")

    async def update(
        self,
        collection_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> dict[str, Any]:
        return await self._call("updateCollection", {"id": collection_id, "name": name, "description": description})

    async def delete(self, collection_id: str) -> None:
        await self._call("deleteCollection", {"id": collection_id})

    async def get_anime(self, collection_id: str) -> list[dict[str, Any]]:
        return await self._call("getCollectionAnime", {"collection_id": collection_id})

    async def add_anime(
        self,
        collection_id: str,
        anime_id: str,
        *,
        user_score: float | None = None,
        notes: str | None = None,
    ) -> None:
        await self._call(
            "addAnimeToCollection",
            {"collection_id": collection_id, "anime_id": anime_id, "user_score": user_score, "notes": notes},
        )

    async def remove_anime(self, collection_id: str, anime_id: str) -> None:
        await self._call("removeAnimeFromCollection", {"collection_id": collection_id, "anime_id": anime_id})

    async def update_anime(
        self,
        collection_id: str,
        anime_id: str,
        *,
        user_score: float | None = None,
        notes: str | None = None,
    ) -> None:
        await self._call(
            "updateAnimeInCollection",
            {"collection_id": collection_id, "anime_id": anime_id, "user_score": user_score, "notes": notes},
        )

    async def add_many_anime(self, collection_id: str, anime_ids: list[str]) -> AddManyResult:
        """Add anime concurrently; backend failures are collected, not raised."""
        outcomes = await asyncio.gather(
            *(self.add_anime(collection_id, anime_id) for anime_id in anime_ids),
            return_exceptions=True,
        )
        result = AddManyResult()
        for anime_id, outcome in zip(anime_ids, outcomes):
            if isinstance(outcome, BridgeError):
                result.failed[anime_id] = outcome
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                result.added.append(anime_id)
        return result
