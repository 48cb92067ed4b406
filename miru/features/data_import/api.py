"""Batch import call sites."""

from __future__ import annotations

from typing import Any

from miru.features.base import FeatureApi


class ImportApi(FeatureApi):
    async def validate_titles(self, titles: list[str]) -> dict[str, Any]:
        return await self._call("validateAnimeTitles", {"titles": titles})

    async def import_validated(self, validated_anime: list[dict[str, Any]]) -> dict[str, Any]:
        return await self._call("importValidatedAnime", {"validated_anime": validated_anime})

    async def import_batch(self, titles: list[str]) -> dict[str, Any]:
        return await self._call("importAnimeBatch", {"titles": titles})
