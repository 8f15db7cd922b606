"""
Export rendering for saved product research.

Turns one record into a downloadable JSON document, a two-column CSV or a
plain-text report. Rendering is a pure function of the record and the clock
reading passed in; looking the record up is the caller's job.
"""

import json
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.schemas.product_research import ExportResult, ProductResearchRead
from app.utils.time import ensure_utc, utc_now


class UnsupportedExportFormatError(ValueError):
    """Raised for any format other than json, csv or pdf."""

    def __init__(self, fmt: Any):
        self.format = fmt
        super().__init__(f"Unsupported export format: {fmt}")


_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9]")

REPORT_TITLE = "PRODUCT RESEARCH REPORT"
REPORT_TITLE_RULE = "=" * 24


def sanitize_filename_part(product_name: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("_", product_name)


def build_export_filename(product_name: str, extension: str, now: datetime) -> str:
    stamp = ensure_utc(now).strftime("%Y-%m-%d")
    return f"{sanitize_filename_part(product_name)}_research_{stamp}.{extension}"


def _iso(value: Optional[datetime]) -> Optional[str]:
    value = ensure_utc(value)
    return value.isoformat() if value is not None else None


def escape_csv_value(value: Optional[str]) -> str:
    """Double embedded quotes, turn LF into a space and drop CR."""
    if not isinstance(value, str):
        return ""
    return value.replace('"', '""').replace("\n", " ").replace("\r", "")


def render_json(record: ProductResearchRead, now: datetime) -> str:
    payload = {
        "id": record.id,
        "product_name": record.product_name,
        "description": record.description,
        "advantages": list(record.advantages),
        "disadvantages": list(record.disadvantages),
        "market_analysis": record.market_analysis,
        "sources": list(record.sources),
        "research_date": _iso(record.research_date),
        "created_at": _iso(record.created_at),
        "updated_at": _iso(record.updated_at),
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_csv(record: ProductResearchRead, now: datetime) -> str:
    rows: List[Tuple[str, Optional[str]]] = [
        ("Product Name", record.product_name),
        ("Description", record.description or ""),
        ("Market Analysis", record.market_analysis or ""),
        ("Research Date", _iso(record.research_date) or ""),
        ("Created At", _iso(record.created_at) or ""),
        ("Updated At", _iso(record.updated_at) or ""),
    ]
    for label, values in (
        ("Advantage", record.advantages),
        ("Disadvantage", record.disadvantages),
        ("Source", record.sources),
    ):
        rows.extend((f"{label} {index}", value) for index, value in enumerate(values, start=1))

    lines = ["Field,Value"]
    lines.extend(f'{label},"{escape_csv_value(value)}"' for label, value in rows)
    return "\n".join(lines)


def _section(lines: List[str], heading: str, body: List[str]) -> None:
    lines.append(heading)
    lines.append("-" * len(heading))
    lines.extend(body)
    lines.append("")


def _numbered(items: List[str]) -> List[str]:
    return [f"{index}. {item}" for index, item in enumerate(items, start=1)]


def render_report(record: ProductResearchRead, now: datetime) -> str:
    """Plain-text report; sections with nothing to show are left out entirely."""
    research_date = ensure_utc(record.research_date)
    lines = [
        REPORT_TITLE,
        REPORT_TITLE_RULE,
        "",
        f"Product Name: {record.product_name}",
        f"Research Date: {research_date.strftime('%Y-%m-%d') if research_date else 'N/A'}",
        "",
    ]

    if record.description:
        _section(lines, "DESCRIPTION", [record.description])
    if record.advantages:
        _section(lines, "ADVANTAGES", _numbered(record.advantages))
    if record.disadvantages:
        _section(lines, "DISADVANTAGES", _numbered(record.disadvantages))
    if record.market_analysis:
        _section(lines, "MARKET ANALYSIS", [record.market_analysis])
    if record.sources:
        _section(lines, "SOURCES", _numbered(record.sources))

    lines.append(f"Generated on: {ensure_utc(now).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    return "\n".join(lines)


# format -> (extension, mime type, renderer)
# The "pdf" format is a text report; the application/pdf label is kept for
# existing clients that key off it.
EXPORT_FORMATS: Dict[str, Tuple[str, str, Callable[[ProductResearchRead, datetime], str]]] = {
    "json": ("json", "application/json", render_json),
    "csv": ("csv", "text/csv", render_csv),
    "pdf": ("pdf", "application/pdf", render_report),
}


def render_research_export(record: Any, fmt: str, now: Optional[datetime] = None) -> ExportResult:
    """
    Render a record (ORM row or ProductResearchRead) in the requested format.

    Raises UnsupportedExportFormatError before any rendering work when the
    format is unknown.
    """
    try:
        extension, mime_type, renderer = EXPORT_FORMATS[fmt]
    except (KeyError, TypeError):
        raise UnsupportedExportFormatError(fmt) from None

    now = now or utc_now()
    data = ProductResearchRead.model_validate(record)
    return ExportResult(
        filename=build_export_filename(data.product_name, extension, now),
        content=renderer(data, now),
        mime_type=mime_type,
    )
