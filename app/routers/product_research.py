"""
Product research router - search, CRUD and export endpoints.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_research_service
from app.errors import raise_app_error, research_not_found
from app.schemas.product_research import (
    DeleteResult,
    ExportRequest,
    ExportResult,
    ProductResearchCreateRequest,
    ProductResearchRead,
    ProductResearchUpdateRequest,
    ProductSearchRequest,
    ResearchAnalysis,
)
from app.services.product_research_service import ProductResearchService
from app.services.research_export_service import UnsupportedExportFormatError

router = APIRouter(prefix="/research", tags=["research"])


async def _export_or_raise(
    service: ProductResearchService,
    research_id: int,
    fmt: str,
) -> ExportResult:
    try:
        result = await service.export_research(research_id, fmt)
    except UnsupportedExportFormatError as exc:
        raise_app_error(
            status.HTTP_400_BAD_REQUEST,
            "UNSUPPORTED_EXPORT_FORMAT",
            str(exc),
            {"format": exc.format, "supported": ["json", "csv", "pdf"]},
        )
    if result is None:
        research_not_found(research_id)
    return result


@router.post("/search", response_model=ResearchAnalysis)
async def search_product(
    data: ProductSearchRequest,
    service: ProductResearchService = Depends(get_research_service),
):
    """Analyze a product name against the curated catalog."""
    return await service.search_product(data.product_name)


@router.get("", response_model=List[ProductResearchRead])
async def list_research(
    service: ProductResearchService = Depends(get_research_service),
):
    """List saved research, most recently created first."""
    return await service.list_research()


@router.get("/{research_id}", response_model=ProductResearchRead)
async def get_research(
    research_id: int,
    service: ProductResearchService = Depends(get_research_service),
):
    """Get a saved research record by ID."""
    research = await service.get_research(research_id)
    if not research:
        research_not_found(research_id)
    return research


@router.post("", response_model=ProductResearchRead, status_code=status.HTTP_201_CREATED)
async def save_research(
    data: ProductResearchCreateRequest,
    db: AsyncSession = Depends(get_db),
    service: ProductResearchService = Depends(get_research_service),
):
    """Save a research record."""
    research = await service.save_research(data)
    await db.commit()
    return research


@router.patch("/{research_id}", response_model=ProductResearchRead)
@router.put("/{research_id}", response_model=ProductResearchRead)
async def update_research(
    research_id: int,
    data: ProductResearchUpdateRequest,
    db: AsyncSession = Depends(get_db),
    service: ProductResearchService = Depends(get_research_service),
):
    """
    Update a research record.

    Only fields present in the body change; send null to clear
    description or market_analysis.
    """
    research = await service.update_research(research_id, data)
    if not research:
        research_not_found(research_id)
    await db.commit()
    return research


@router.delete("/{research_id}", response_model=DeleteResult)
async def delete_research(
    research_id: int,
    db: AsyncSession = Depends(get_db),
    service: ProductResearchService = Depends(get_research_service),
):
    """Delete a research record. deleted is false when it did not exist."""
    deleted = await service.delete_research(research_id)
    await db.commit()
    return DeleteResult(deleted=deleted)


@router.post("/{research_id}/export", response_model=ExportResult)
async def export_research(
    research_id: int,
    data: ExportRequest,
    service: ProductResearchService = Depends(get_research_service),
):
    """Render a record as json, csv or pdf (plain-text report)."""
    return await _export_or_raise(service, research_id, data.format)


@router.get("/{research_id}/export/{fmt}")
async def download_research(
    research_id: int,
    fmt: str,
    service: ProductResearchService = Depends(get_research_service),
):
    """Same as the export endpoint, returned as a file attachment."""
    result = await _export_or_raise(service, research_id, fmt)
    return StreamingResponse(
        iter([result.content]),
        media_type=result.mime_type,
        headers={"Content-Disposition": f"attachment; filename={result.filename}"},
    )
