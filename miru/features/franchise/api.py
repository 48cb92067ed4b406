"""Franchise discovery call sites.

These commands take AniList media ids (integers), not catalog ids.
"""

from __future__ import annotations

from typing import Any

from miru.features.base import FeatureApi


class FranchiseApi(FeatureApi):
    async def get_relations(self, anilist_id: int) -> list[dict[str, Any]]:
        return await self._call("getFranchiseRelations", anilist_id)

    async def discover_details(self, anilist_id: int) -> list[dict[str, Any]]:
        return await self._call("discoverFranchiseDetails", anilist_id)

    async def discover_categorized(self, anilist_id: int) -> dict[str, Any]:
        return await self._call("discoverCategorizedFranchise", anilist_id)

    async def capabilities(self) -> dict[str, Any]:
        return await self._call("getRelationshipCapabilities")
