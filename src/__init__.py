"""folio: markdown blog ingestion for server-rendered sites."""

__version__ = "0.1.0"
