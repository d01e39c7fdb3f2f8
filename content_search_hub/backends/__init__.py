"""In-process collaborators for the search pipeline.

These back the query executor and item repository interfaces with plain
Python collections, for embedding and tests.
"""

from .memory import InMemoryItemRepository, InMemoryQueryExecutor

__all__ = ["InMemoryItemRepository", "InMemoryQueryExecutor"]
