"""DocuPicks: daily curated documentaries."""

__version__ = "1.0.0"
