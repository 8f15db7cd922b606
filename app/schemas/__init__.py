"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.product_research import (
    DeleteResult,
    ExportFormat,
    ExportRequest,
    ExportResult,
    ProductResearchCreate,
    ProductResearchCreateRequest,
    ProductResearchRead,
    ProductResearchUpdate,
    ProductResearchUpdateRequest,
    ProductSearchRequest,
    ResearchAnalysis,
)

__all__ = [
    "DeleteResult",
    "ExportFormat",
    "ExportRequest",
    "ExportResult",
    "ProductResearchCreate",
    "ProductResearchCreateRequest",
    "ProductResearchRead",
    "ProductResearchUpdate",
    "ProductResearchUpdateRequest",
    "ProductSearchRequest",
    "ResearchAnalysis",
]
