"""Round trip through the configured DATABASE_URL (RUN_DB_TESTS=1)."""

import pytest

from app.db.session import session_scope
from app.repositories.product_research_repository import ProductResearchRepository
from app.schemas.product_research import ProductResearchCreate, ProductResearchUpdate

pytestmark = [pytest.mark.asyncio, pytest.mark.db]


async def test_create_update_delete_against_configured_database():
    async with session_scope() as db:
        repo = ProductResearchRepository(db)
        record = await repo.create(ProductResearchCreate(product_name="Postgres Probe", advantages=["a"]))
        created_at = record.created_at
        first_stamp = record.updated_at

        updated = await repo.update(record.id, ProductResearchUpdate(description="checked"))

        assert updated.created_at == created_at
        assert updated.updated_at > first_stamp
        assert updated.advantages == ["a"]
        assert await repo.delete(record.id) is True
        assert await repo.delete(record.id) is False
