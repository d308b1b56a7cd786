# ABOUTME: Provisional records produced by the DOM extractor before resolution.
# ABOUTME: Includes company cards, person candidates and the diagnostic trace.

from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ConnectionCandidate(BaseModel):
    """A person surfaced by a company card, possibly still unresolved.

    Connection-summary links ("3 connections work here") become candidates
    with needs_resolution set; the link text is their temporary name.
    """

    name: Annotated[str, Field(description="Display name or summary link text")]
    profile_url: Annotated[str | None, Field(description="Personal profile URL")] = None
    profile_image_url: Annotated[str | None, Field(description="Profile photo URL")] = None
    headline: Annotated[str | None, Field(description="Headline or context text")] = None
    search_url: Annotated[
        str | None, Field(description="Person-search page behind a summary link")
    ] = None
    needs_resolution: Annotated[
        bool, Field(description="True for summary links that must be followed")
    ] = False


class CompanyCard(BaseModel):
    """One company found on the company search results page."""

    name: str
    linkedin_url: Annotated[str, Field(description="Canonical company or school URL")]
    logo_url: str | None = None
    description: Annotated[str | None, Field(max_length=203)] = None
    connection_info: Annotated[
        str | None, Field(description="Caption such as '3 connections work here'")
    ] = None
    connections: Annotated[
        list[ConnectionCandidate],
        Field(default_factory=list, description="Summary links or directly named people"),
    ]
    link_strategy: Annotated[
        str | None, Field(description="Which name/URL technique matched this card")
    ] = None


class DirectConnection(BaseModel):
    """A first-degree connection listed on the connections page."""

    name: str
    profile_url: str
    headline: str | None = None


class CurrentCompany(BaseModel):
    """The employer shown in a profile's current experience block."""

    name: str
    linkedin_url: str | None = None


class ExtractionDiagnostics(BaseModel):
    """What the extractor tried, for debugging upstream markup changes."""

    strategy: Annotated[
        str | None, Field(description="Container pattern that matched, None if none did")
    ] = None
    pattern_counts: Annotated[
        dict[str, int], Field(default_factory=dict, description="Matches per attempted pattern")
    ]
    page_title: str | None = None
    markup_sample: Annotated[str, Field(description="Leading slice of the body markup")] = ""
    skipped_cards: Annotated[int, Field(ge=0, description="Cards dropped or failed")] = 0


class ExtractionResult(BaseModel, Generic[T]):
    """Entities extracted from one document plus the diagnostic trace."""

    items: list[T] = Field(default_factory=list)
    diagnostics: ExtractionDiagnostics = Field(default_factory=ExtractionDiagnostics)
