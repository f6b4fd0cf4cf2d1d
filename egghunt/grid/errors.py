"""Errors raised while populating a grid."""

from __future__ import annotations


class PopulationError(Exception):
    """Base class for grid population failures."""


class InvalidConfiguration(PopulationError, ValueError):
    """Dimensions, probabilities or margins that cannot describe a grid."""


class CatalogTooSmall(PopulationError, IndexError):
    """A category catalog has fewer entries than the band rules index into."""


class MissingCollectibleCatalog(PopulationError, LookupError):
    """An egg-eligible cell was reached with no collectible ids to choose from."""
