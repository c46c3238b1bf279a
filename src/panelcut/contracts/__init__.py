"""Contracts between the application layer and its collaborators."""

from .protocols import CatalogLookupProtocol, RateSourceProtocol

__all__ = ["CatalogLookupProtocol", "RateSourceProtocol"]
