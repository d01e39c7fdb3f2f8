"""Search pipeline steps invoked by the host."""

from .search_step import ContentSearchStep

__all__ = ["ContentSearchStep"]
