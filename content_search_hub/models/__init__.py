"""Data models and interface protocols."""
