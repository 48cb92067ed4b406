"""Feature-level call sites over the command bridge."""

from .anime.api import AnimeApi
from .collection.api import AddManyResult, CollectionApi
from .data_import.api import ImportApi
from .franchise.api import FranchiseApi

__all__ = ["AddManyResult", "AnimeApi", "CollectionApi", "FranchiseApi", "ImportApi"]
