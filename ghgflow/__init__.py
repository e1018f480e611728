"""GHGFlow: greenhouse-gas emissions spreadsheet ingestion."""

__version__ = "0.1.0"
