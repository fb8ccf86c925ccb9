"""
Gear Search - catalog search engine for the gear rental marketplace.

Combines a structured query against the catalog database with an in-memory
fuzzy text index over a cached catalog snapshot.
"""

__version__ = "0.1.0"
