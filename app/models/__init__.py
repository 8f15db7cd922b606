"""
Models package.

Import all models here so they are registered with SQLAlchemy.
"""

from app.models.product_research import ProductResearch

__all__ = [
    "ProductResearch",
]
