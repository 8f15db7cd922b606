"""create_product_research

Revision ID: 3c9e1f0a7b21
Revises:
Create Date: 2026-10-19

Saved product research records with JSON list columns.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9e1f0a7b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'product_research',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('product_name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('advantages', sa.JSON(), nullable=False),
        sa.Column('disadvantages', sa.JSON(), nullable=False),
        sa.Column('market_analysis', sa.Text(), nullable=True),
        sa.Column('sources', sa.JSON(), nullable=False),
        sa.Column('research_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_product_research_created_at', 'product_research', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_product_research_created_at', table_name='product_research')
    op.drop_table('product_research')
