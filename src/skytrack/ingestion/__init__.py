"""Ingestion layer.

This package contains the snapshot providers and the helpers that turn
raw state vectors into normalized aircraft.
"""

__all__: list[str] = []
