"""Content Search Hub: merges raw CMS search hits into display results."""

__version__ = "0.1.0"
