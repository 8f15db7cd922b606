"""
FastAPI dependencies shared by the routers.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.services.analysis_catalog import AnalysisCatalog, DEFAULT_CATALOG_ENTRIES
from app.services.product_research_service import ProductResearchService


def get_analysis_catalog() -> AnalysisCatalog:
    """Catalog built from the curated entries; override in tests to swap them."""
    return AnalysisCatalog(DEFAULT_CATALOG_ENTRIES)


def get_research_service(
    db: AsyncSession = Depends(get_db),
    catalog: AnalysisCatalog = Depends(get_analysis_catalog),
) -> ProductResearchService:
    return ProductResearchService(db, catalog=catalog)
