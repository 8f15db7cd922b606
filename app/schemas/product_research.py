"""
Pydantic schemas for product research records, search results and exports.
"""

from datetime import datetime
from typing import List, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


ExportFormat = Literal["json", "csv", "pdf"]

# Fields that may be omitted from an update but never set to null.
NON_NULLABLE_UPDATE_FIELDS = ("product_name", "advantages", "disadvantages", "sources")


def _require_text(value: str) -> str:
    if value is None or not value.strip():
        raise ValueError("Product name is required")
    return value


def _require_urls(values: Optional[List[str]]) -> Optional[List[str]]:
    if values is None:
        return values
    for url in values:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Source must be an http(s) URL: {url!r}")
    return values


class ProductResearchCreate(BaseModel):
    """Fields accepted when saving a research record."""

    product_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    advantages: List[str] = Field(default_factory=list)
    disadvantages: List[str] = Field(default_factory=list)
    market_analysis: Optional[str] = None
    sources: List[str] = Field(default_factory=list)

    @field_validator("product_name")
    @classmethod
    def validate_product_name(cls, v):
        return _require_text(v)


class ProductResearchUpdate(BaseModel):
    """
    Partial update. Only fields present in the payload are applied
    (see model_fields_set); an explicit null clears description or
    market_analysis.
    """

    product_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    advantages: Optional[List[str]] = None
    disadvantages: Optional[List[str]] = None
    market_analysis: Optional[str] = None
    sources: Optional[List[str]] = None

    @model_validator(mode="after")
    def reject_null_for_required_fields(self):
        for name in NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        if "product_name" in self.model_fields_set:
            _require_text(self.product_name)
        return self

    def changes(self) -> dict:
        """Only the explicitly supplied fields, nulls included."""
        return self.model_dump(exclude_unset=True)


class ProductResearchCreateRequest(ProductResearchCreate):
    """Create payload as received over HTTP; sources must be URLs."""

    @field_validator("sources")
    @classmethod
    def validate_sources(cls, v):
        return _require_urls(v)


class ProductResearchUpdateRequest(ProductResearchUpdate):
    """Update payload as received over HTTP; sources must be URLs."""

    @field_validator("sources")
    @classmethod
    def validate_sources(cls, v):
        return _require_urls(v)


class ProductResearchRead(BaseModel):
    id: int
    product_name: str
    description: Optional[str] = None
    advantages: List[str]
    disadvantages: List[str]
    market_analysis: Optional[str] = None
    sources: List[str]
    research_date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductSearchRequest(BaseModel):
    product_name: str = Field(..., min_length=1)

    @field_validator("product_name")
    @classmethod
    def validate_product_name(cls, v):
        return _require_text(v)


class ResearchAnalysis(BaseModel):
    """Transient search result; never persisted as-is."""

    product_name: str
    advantages: List[str]
    disadvantages: List[str]
    market_analysis: Optional[str] = None
    sources: List[str]
    confidence_score: float = Field(..., ge=0.0, le=1.0)

    def to_create(self, description: Optional[str] = None) -> ProductResearchCreate:
        """Turn the analysis into a save request."""
        return ProductResearchCreate(
            product_name=self.product_name,
            description=description,
            advantages=list(self.advantages),
            disadvantages=list(self.disadvantages),
            market_analysis=self.market_analysis,
            sources=list(self.sources),
        )


class ExportRequest(BaseModel):
    format: ExportFormat


class ExportResult(BaseModel):
    filename: str
    content: str
    mime_type: str


class DeleteResult(BaseModel):
    deleted: bool
