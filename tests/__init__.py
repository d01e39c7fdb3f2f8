"""Tests package for Content Search Hub."""
