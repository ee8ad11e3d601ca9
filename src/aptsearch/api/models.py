"""Pydantic models for search API requests and responses.

The backend answers the search endpoint with a ``{results, totalCount}``
object and the suggestions endpoint with a bare JSON array of strings.
Missing fields are tolerated and defaulted rather than treated as errors.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class SearchResult(BaseModel):
    """A single search hit."""

    title: str = Field(default="", description="Title of the result page")
    url: str = Field(default="", description="URL of the result page")
    snippet: str = Field(
        default="",
        description="Text snippet, may contain pre-rendered inline markup",
    )
    score: float = Field(default=0.0, description="Relevance score assigned by the backend")

    @field_validator("title", "url", "snippet", "score", mode="before")
    @classmethod
    def default_nulls(cls, v: Any, info: ValidationInfo) -> Any:
        """Treat an explicit null like an absent field."""
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"{self.title}\n{self.url}\n{self.snippet[:100]}..."


class SearchResponse(BaseModel):
    """Body of a successful search call."""

    model_config = ConfigDict(populate_by_name=True)

    results: list[SearchResult] = Field(default_factory=list)
    total_count: int = Field(default=0, alias="totalCount", ge=0)

    @field_validator("results", mode="before")
    @classmethod
    def default_results(cls, v: Any) -> Any:
        """Treat an explicit null like an absent field."""
        return [] if v is None else v

    @field_validator("total_count", mode="before")
    @classmethod
    def default_total(cls, v: Any) -> Any:
        """Treat an explicit null like an absent field."""
        return 0 if v is None else v


class SearchRequest(BaseModel):
    """Query parameters of a search call.

    Mirrors the backend's own validation so that a request it would reject
    with 400 is never sent.
    """

    query: str = Field(..., min_length=1, description="Search text")
    page: int = Field(default=0, ge=0, description="Zero-based page index")
    size: int = Field(default=10, ge=1, le=100, description="Results per page")

    @field_validator("query")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Blank queries are rejected by the backend."""
        if not v.strip():
            raise ValueError("query must not be blank")
        return v

    def to_params(self) -> dict[str, str | int]:
        """Convert to URL query parameters."""
        return {"query": self.query, "page": self.page, "size": self.size}
