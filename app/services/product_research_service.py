"""
Product research business logic service.

Search runs against the analysis catalog; everything else goes through the
repository. Not-found comes back as None (False for delete) so callers can
tell it apart from an empty result; storage errors propagate.
"""

import asyncio
import logging
import random
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.models.product_research import ProductResearch
from app.repositories.product_research_repository import ProductResearchRepository
from app.schemas.product_research import (
    ExportResult,
    ProductResearchCreate,
    ProductResearchUpdate,
    ResearchAnalysis,
)
from app.services.analysis_catalog import AnalysisCatalog
from app.services.research_export_service import (
    EXPORT_FORMATS,
    UnsupportedExportFormatError,
    render_research_export,
)

logger = logging.getLogger(__name__)

# The simulated lookup never waits a full second.
MAX_SEARCH_LATENCY_MS = 999


def configured_search_latency() -> Tuple[int, int]:
    low = max(0, min(settings.SEARCH_LATENCY_MIN_MS, MAX_SEARCH_LATENCY_MS))
    high = max(low, min(settings.SEARCH_LATENCY_MAX_MS, MAX_SEARCH_LATENCY_MS))
    return low, high


class ProductResearchService:
    """Service for product research business logic."""
    
    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[AnalysisCatalog] = None,
        search_latency_ms: Optional[Tuple[int, int]] = None,
    ):
        self.repository = ProductResearchRepository(db)
        self.catalog = catalog or AnalysisCatalog()
        self.search_latency_ms = search_latency_ms or configured_search_latency()
    
    async def _simulate_lookup_delay(self) -> None:
        low, high = self.search_latency_ms
        if high <= 0:
            return
        await asyncio.sleep(random.uniform(low, high) / 1000.0)
    
    async def search_product(self, product_name: str) -> ResearchAnalysis:
        """Analyze a product name. Blank names are rejected by the request schema."""
        await self._simulate_lookup_delay()
        analysis = self.catalog.analyze(product_name)
        logger.debug(
            "Analyzed %r (catalog=%s, confidence=%.2f)",
            product_name,
            product_name in self.catalog,
            analysis.confidence_score,
        )
        return analysis
    
    async def list_research(self) -> List[ProductResearch]:
        """All saved research, newest first."""
        return await self.repository.list()
    
    async def get_research(self, research_id: int) -> Optional[ProductResearch]:
        return await self.repository.get_by_id(research_id)
    
    async def save_research(self, data: ProductResearchCreate) -> ProductResearch:
        """Persist a research record."""
        try:
            research = await self.repository.create(data)
        except SQLAlchemyError:
            logger.exception("Saving research for %r failed", data.product_name)
            raise
        logger.info("Saved research %s for %r", research.id, research.product_name)
        return research
    
    async def update_research(
        self,
        research_id: int,
        data: ProductResearchUpdate,
    ) -> Optional[ProductResearch]:
        """Partial update; None when the record does not exist."""
        try:
            research = await self.repository.update(research_id, data)
        except SQLAlchemyError:
            logger.exception("Updating research %s failed", research_id)
            raise
        if research is None:
            logger.info("Update skipped, research %s not found", research_id)
            return None
        logger.info("Updated research %s fields=%s", research_id, sorted(data.changes()))
        return research
    
    async def delete_research(self, research_id: int) -> bool:
        try:
            deleted = await self.repository.delete(research_id)
        except SQLAlchemyError:
            logger.exception("Deleting research %s failed", research_id)
            raise
        logger.info("Delete research %s -> %s", research_id, deleted)
        return deleted
    
    async def export_research(
        self,
        research_id: int,
        fmt: str,
        now: Optional[datetime] = None,
    ) -> Optional[ExportResult]:
        """
        Render a saved record; None when it does not exist.

        The format is checked before the lookup so an unsupported format is
        reported even for unknown ids.
        """
        if fmt not in EXPORT_FORMATS:
            raise UnsupportedExportFormatError(fmt)
        
        research = await self.repository.get_by_id(research_id)
        if research is None:
            return None
        
        result = render_research_export(research, fmt, now=now)
        logger.info("Exported research %s as %s (%s)", research_id, fmt, result.filename)
        return result
