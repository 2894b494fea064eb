"""News Curator: multi-source news ingestion and source-diverse curation."""

__version__ = "0.1.0"
