"""ProductResearchService: search latency, save-from-search, export lookups and storage failures."""

import json
import logging
import time
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.core.config import settings
from app.db import session as session_module
from app.db.session import get_db, session_scope
from app.schemas.product_research import ProductResearchCreate, ProductResearchUpdate
from app.services.product_research_service import (
    MAX_SEARCH_LATENCY_MS,
    ProductResearchService,
    configured_search_latency,
)
from app.services.research_export_service import UnsupportedExportFormatError

pytestmark = pytest.mark.asyncio


@pytest.fixture
def service(db_session):
    return ProductResearchService(db_session, search_latency_ms=(0, 0))


async def test_search_known_product(service):
    analysis = await service.search_product("  React  ")

    assert analysis.product_name == "  React  "
    assert analysis.confidence_score == pytest.approx(0.92)


async def test_search_unknown_product(service):
    analysis = await service.search_product("SomeUnknownLibrary")

    assert len(analysis.sources) == 3
    assert analysis.confidence_score < 0.8


async def test_search_delay_is_bounded_and_does_not_change_output(db_session):
    slow = ProductResearchService(db_session, search_latency_ms=(20, 60))
    fast = ProductResearchService(db_session, search_latency_ms=(0, 0))

    started = time.monotonic()
    delayed = await slow.search_product("vue")
    elapsed = time.monotonic() - started

    assert 0.015 <= elapsed < 1.0
    assert delayed == await fast.search_product("vue")


async def test_configured_latency_never_reaches_one_second(monkeypatch):
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MIN_MS", 500)
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MAX_MS", 5000)

    assert configured_search_latency() == (500, MAX_SEARCH_LATENCY_MS)
    assert MAX_SEARCH_LATENCY_MS < 1000


async def test_configured_latency_keeps_min_below_max(monkeypatch):
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MIN_MS", 300)
    monkeypatch.setattr(settings, "SEARCH_LATENCY_MAX_MS", 100)

    assert configured_search_latency() == (300, 300)


async def test_analysis_can_be_saved(service):
    analysis = await service.search_product("angular")
    record = await service.save_research(analysis.to_create(description="Frontend framework"))

    assert record.product_name == "angular"
    assert record.description == "Frontend framework"
    assert record.advantages == analysis.advantages
    assert record.sources == analysis.sources
    assert (await service.list_research())[0].id == record.id


async def test_update_and_delete_report_missing_records(service):
    assert await service.update_research(404, ProductResearchUpdate(product_name="x")) is None
    assert await service.delete_research(404) is False
    assert await service.get_research(404) is None


async def test_export_missing_record_returns_none(service):
    assert await service.export_research(404, "json") is None


async def test_export_rejects_unknown_format_before_lookup(service):
    with pytest.raises(UnsupportedExportFormatError):
        await service.export_research(404, "docx")


async def test_export_existing_record(service):
    record = await service.save_research(ProductResearchCreate(product_name="Gadget 3000"))
    now = datetime(2025, 6, 1, tzinfo=timezone.utc)

    result = await service.export_research(record.id, "json", now=now)

    assert result.filename == "Gadget_3000_research_2025-06-01.json"
    assert json.loads(result.content)["id"] == record.id


def _break_flush(session, monkeypatch):
    async def flush(*args, **kwargs):
        raise OperationalError("flush", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "flush", flush)


async def _stored_records(session_maker):
    async with session_maker() as session:
        return await ProductResearchService(session, search_latency_ms=(0, 0)).list_research()


async def test_failed_save_is_logged_reraised_and_rolled_back(session_maker, monkeypatch, caplog):
    monkeypatch.setattr(session_module, "async_session_maker", session_maker)

    with caplog.at_level(logging.ERROR, logger="app.services.product_research_service"):
        with pytest.raises(OperationalError):
            async with session_scope() as session:
                _break_flush(session, monkeypatch)
                await ProductResearchService(session, search_latency_ms=(0, 0)).save_research(
                    ProductResearchCreate(product_name="Widget")
                )

    failure = next(r for r in caplog.records if "Saving research for 'Widget' failed" in r.getMessage())
    assert failure.exc_info is not None
    assert await _stored_records(session_maker) == []


async def test_failed_update_leaves_stored_record_unchanged(session_maker, monkeypatch, caplog):
    async with session_maker() as session:
        record = await ProductResearchService(session).save_research(
            ProductResearchCreate(product_name="Widget", description="original")
        )
        await session.commit()

    with caplog.at_level(logging.ERROR, logger="app.services.product_research_service"):
        async with session_maker() as session:
            _break_flush(session, monkeypatch)
            with pytest.raises(OperationalError):
                await ProductResearchService(session).update_research(
                    record.id, ProductResearchUpdate(description="changed")
                )
            await session.rollback()

    assert any(f"Updating research {record.id} failed" in r.getMessage() for r in caplog.records)
    stored = await _stored_records(session_maker)
    assert [(r.id, r.description) for r in stored] == [(record.id, "original")]


async def test_failed_delete_through_request_session_keeps_record(session_maker, monkeypatch, caplog):
    monkeypatch.setattr(session_module, "async_session_maker", session_maker)
    async with session_maker() as session:
        record = await ProductResearchService(session).save_research(ProductResearchCreate(product_name="Widget"))
        await session.commit()

    request_session = get_db()
    session = await request_session.__anext__()
    _break_flush(session, monkeypatch)
    with caplog.at_level(logging.ERROR, logger="app.services.product_research_service"):
        with pytest.raises(OperationalError) as exc_info:
            await ProductResearchService(session).delete_research(record.id)
    # The request dependency sees the error, rolls back and re-raises it.
    with pytest.raises(OperationalError):
        await request_session.athrow(exc_info.value)

    assert any(f"Deleting research {record.id} failed" in r.getMessage() for r in caplog.records)
    assert [r.id for r in await _stored_records(session_maker)] == [record.id]
