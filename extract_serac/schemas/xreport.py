"""
Pydantic schemas for Camptocamp x-report payloads.

Only the fields the exporter reads are declared; unknown keys are ignored.
Every optional attribute defaults to None or an empty list so that missing
values render as empty cells instead of failing validation.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class XReportLocale(BaseModel):
    """One language version of a report's free-text fields."""
    lang: str
    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    place: Optional[str] = None
    route_study: Optional[str] = None
    conditions: Optional[str] = None
    training: Optional[str] = None
    motivations: Optional[str] = None
    group_management: Optional[str] = None
    risk: Optional[str] = None
    time_management: Optional[str] = None
    safety: Optional[str] = None
    reduce_impact: Optional[str] = None
    increase_impact: Optional[str] = None
    modifications: Optional[str] = None
    other_comments: Optional[str] = None


class Geometry(BaseModel):
    """Versioned geometry; `geom` is a serialized GeoJSON geometry."""
    version: Optional[int] = None
    geom: Optional[str] = None


class AreaLocale(BaseModel):
    lang: str
    title: Optional[str] = None


class Area(BaseModel):
    document_id: Optional[int] = None
    locales: list[AreaLocale] = Field(default_factory=list)


class Author(BaseModel):
    name: Optional[str] = None
    user_id: Optional[int] = None


class Association(BaseModel):
    type: Optional[str] = None
    document_id: int


class Associations(BaseModel):
    """Associated documents grouped by kind."""
    users: list[Association] = Field(default_factory=list)
    routes: list[Association] = Field(default_factory=list)
    outings: list[Association] = Field(default_factory=list)
    articles: list[Association] = Field(default_factory=list)
    images: list[Association] = Field(default_factory=list)
    waypoints: list[Association] = Field(default_factory=list)


class XReport(BaseModel):
    """Full x-report detail as returned by GET /xreports/{id}."""
    model_config = ConfigDict(extra="ignore")

    document_id: int
    available_langs: list[str] = Field(default_factory=list)
    locales: list[XReportLocale] = Field(default_factory=list)
    areas: list[Area] = Field(default_factory=list)
    associations: Associations = Field(default_factory=Associations)
    author: Optional[Author] = None
    geometry: Optional[Geometry] = None

    date: Optional[str] = None
    elevation: Optional[Number] = None
    nb_participants: Optional[Number] = None
    nb_impacted: Optional[Number] = None
    age: Optional[Number] = None

    # Coded single-value fields
    event_activity: Optional[str] = None
    quality: Optional[str] = None
    rescue: Optional[str] = None
    severity: Optional[str] = None
    avalanche_level: Optional[str] = None
    avalanche_slope: Optional[str] = None
    gender: Optional[str] = None
    author_status: Optional[str] = None
    autonomy: Optional[str] = None
    activity_rate: Optional[str] = None
    nb_outings: Optional[str] = None
    previous_injuries: Optional[str] = None
    qualification: Optional[str] = None
    supervision: Optional[str] = None

    # Legacy API sent a list of activities and a list of event types
    activities: list[str] = Field(default_factory=list)
    event_type: Optional[Union[str, list[str]]] = None

    @field_validator("rescue", mode="before")
    @classmethod
    def boolean_to_token(cls, value):
        """The API sends rescue as a JSON boolean; translate it as a token."""
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

    @field_validator("available_langs", "locales", "areas", "activities", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return value if value is not None else []

    @field_validator("associations", mode="before")
    @classmethod
    def none_to_associations(cls, value):
        return value if value is not None else {}


class XReportSummary(BaseModel):
    """Listing entry; only the identifier is needed to fetch the detail."""
    document_id: int


class XReportListing(BaseModel):
    """One page of GET /xreports."""
    total: int = 0
    documents: list[XReportSummary] = Field(default_factory=list)
