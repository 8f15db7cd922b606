"""
Repository for ProductResearch database operations.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.product_research import ProductResearch
from app.schemas.product_research import ProductResearchCreate, ProductResearchUpdate
from app.utils.time import utc_now, utc_now_after


class ProductResearchRepository:
    """Repository for ProductResearch operations."""
    
    def __init__(self, db: AsyncSession):
        self.db = db
    
    async def get_by_id(self, research_id: int) -> Optional[ProductResearch]:
        """Get a research record by ID."""
        return await self.db.get(ProductResearch, research_id)
    
    async def list(self) -> List[ProductResearch]:
        """All records, newest first."""
        query = select(ProductResearch).order_by(
            ProductResearch.created_at.desc(),
            ProductResearch.id.desc(),
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())
    
    async def create(self, data: ProductResearchCreate) -> ProductResearch:
        """Insert a record; research_date, created_at and updated_at share one timestamp."""
        now = utc_now()
        research = ProductResearch(
            product_name=data.product_name,
            description=data.description,
            advantages=list(data.advantages or []),
            disadvantages=list(data.disadvantages or []),
            market_analysis=data.market_analysis,
            sources=list(data.sources or []),
            research_date=now,
            created_at=now,
            updated_at=now,
        )
        self.db.add(research)
        await self.db.flush()
        await self.db.refresh(research)
        return research
    
    async def update(self, research_id: int, data: ProductResearchUpdate) -> Optional[ProductResearch]:
        """Apply the fields present in `data` and bump updated_at."""
        research = await self.get_by_id(research_id)
        if not research:
            return None
        
        for field, value in data.changes().items():
            # Lists are copied so the JSON column sees a new value.
            setattr(research, field, list(value) if isinstance(value, list) else value)
        
        research.updated_at = utc_now_after(research.updated_at)
        await self.db.flush()
        await self.db.refresh(research)
        return research
    
    async def delete(self, research_id: int) -> bool:
        """Hard delete. False when there was nothing to remove."""
        research = await self.get_by_id(research_id)
        if not research:
            return False
        
        await self.db.delete(research)
        await self.db.flush()
        return True
