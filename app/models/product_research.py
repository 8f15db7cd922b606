"""
ProductResearch model.

One saved market analysis for a product, as produced by search and then
edited by the user.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ProductResearch(Base):
    """
    product_research table.

    advantages, disadvantages and sources are JSON arrays and are never NULL;
    an empty list stands for "nothing recorded".
    """

    __tablename__ = "product_research"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    product_name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    advantages: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    disadvantages: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    market_analysis: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    sources: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    # Timestamps are assigned by the repository from one clock reading so
    # created_at == updated_at on insert and updated_at only moves forward.
    research_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ProductResearch id={self.id} product_name={self.product_name!r}>"
