"""
Movie Models

Candidate items come from the TMDB discover endpoint and live only for one
pipeline run. Validated items carry the OMDb record plus TMDB streaming
providers and are what the cache and the API return.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator


RATING_UNAVAILABLE = "N/A"
PLACEHOLDER_POSTER = "/placeholder.jpg"


def normalize_title(title: Optional[str]) -> str:
    """Lower-case, trim and collapse whitespace for title comparisons."""
    return " ".join((title or "").lower().split())


def parse_year(value: Optional[str]) -> Optional[int]:
    """
    Extract the leading four-digit year from a date or OMDb year string.

    Handles "2019-05-01", "2019", and series ranges like "2019–2021".
    """
    if not value:
        return None
    head = str(value).strip()[:4]
    return int(head) if len(head) == 4 and head.isdigit() else None


def parse_rating(value: Optional[str]) -> Optional[float]:
    """Parse an IMDb rating string; "N/A", blanks and junk give None."""
    if value is None or value == RATING_UNAVAILABLE:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class StreamingProvider(BaseModel):
    """Flat-rate streaming provider for one region."""
    id: int
    name: str
    logo_path: Optional[str] = None

    @classmethod
    def from_tmdb(cls, raw: dict) -> "StreamingProvider":
        return cls(
            id=raw["provider_id"],
            name=raw["provider_name"],
            logo_path=raw.get("logo_path"),
        )


class CandidateItem(BaseModel):
    """Documentary candidate from TMDB discover."""
    tmdb_id: int = Field(..., alias="id", description="TMDB movie ID")
    title: str
    release_date: Optional[str] = None
    overview: str = ""
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("overview", mode="before")
    @classmethod
    def _null_overview(cls, value):
        return value or ""

    @property
    def release_year(self) -> Optional[int]:
        return parse_year(self.release_date)

    @property
    def normalized_title(self) -> str:
        return normalize_title(self.title)


class ValidatedItem(BaseModel):
    """
    Documentary confirmed by OMDb and enriched with streaming providers.

    Serialized with OMDb-style aliases (``Title``, ``imdbRating``,
    ``WatchProviders``) so cached payloads keep the shape the front-end reads.
    """
    title: str = Field(..., alias="Title")
    year: str = Field(default="", alias="Year")
    normalized_year: Optional[int] = Field(None, alias="normalizedYear")
    rated: str = Field(default="", alias="Rated")
    released: str = Field(default="", alias="Released")
    runtime: str = Field(default="", alias="Runtime")
    genre: str = Field(default="", alias="Genre")
    director: str = Field(default="", alias="Director")
    writer: str = Field(default="", alias="Writer")
    actors: str = Field(default="", alias="Actors")
    plot: str = Field(default="", alias="Plot")
    language: str = Field(default="", alias="Language")
    country: str = Field(default="", alias="Country")
    awards: str = Field(default="", alias="Awards")
    poster: str = Field(default="", alias="Poster")
    imdb_rating: str = Field(default="", alias="imdbRating")
    imdb_votes: str = Field(default="", alias="imdbVotes")
    imdb_id: str = Field(default="", alias="imdbID")
    synopsis: str = Field(default="", alias="overview", description="TMDB overview")
    tmdb_id: Optional[int] = Field(None, alias="tmdbId")
    watch_providers: List[StreamingProvider] = Field(
        default_factory=list, alias="WatchProviders"
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def numeric_rating(self) -> Optional[float]:
        return parse_rating(self.imdb_rating)

    @property
    def dedup_key(self) -> str:
        """IMDb ID when known, otherwise the normalized title."""
        return self.imdb_id.lower() if self.imdb_id else f"title:{normalize_title(self.title)}"

    @classmethod
    def from_omdb(
        cls,
        record: dict,
        candidate: Optional[CandidateItem] = None,
        providers: Optional[List[StreamingProvider]] = None,
    ) -> "ValidatedItem":
        """
        Build from an OMDb response, optionally merged with TMDB data.

        OMDb uses "N/A" for missing strings; the poster gets a placeholder
        and other fields pass through unchanged.
        """
        data = {k: v for k, v in record.items() if isinstance(v, str)}
        if data.get("Poster", RATING_UNAVAILABLE) == RATING_UNAVAILABLE:
            data["Poster"] = PLACEHOLDER_POSTER

        item = cls.model_validate(data)
        item.normalized_year = parse_year(item.year)
        if candidate is not None:
            item.tmdb_id = candidate.tmdb_id
            item.synopsis = candidate.overview
            if item.normalized_year is None:
                item.normalized_year = candidate.release_year
        item.watch_providers = list(providers or [])
        return item

    @classmethod
    def title_only(cls, title: str) -> "ValidatedItem":
        """Placeholder entry used when nothing but the curated title is known."""
        return cls(Title=title)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)
