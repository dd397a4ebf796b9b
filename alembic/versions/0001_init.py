"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "filters",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
        sa.Column("criteria", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_filters_user_id", "filters", ["user_id"])
    op.create_index("ix_filters_category", "filters", ["category"])

    op.create_table(
        "keywords",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("keyword", sa.String(length=200), nullable=False),
        sa.Column("category", sa.String(length=120), nullable=False),
    )
    op.create_index("ix_keywords_user_id", "keywords", ["user_id"])
    op.create_index("ix_keywords_category", "keywords", ["category"])

    categories = op.create_table(
        "keyword_categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("code", sa.String(length=120), nullable=False, unique=True),
        sa.Column("label", sa.String(length=200), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.bulk_insert(
        categories,
        [
            {"code": "opportunity_keywords", "label": "Opportunity keywords", "sort_order": 10},
            {"code": "target_personas", "label": "Target personas", "sort_order": 20},
            {"code": "authority_title_filters", "label": "Authority title filters", "sort_order": 30},
            {"code": "authority_department_filters", "label": "Authority department filters", "sort_order": 40},
        ],
    )

def downgrade():
    op.drop_table("keyword_categories")
    op.drop_index("ix_keywords_category", table_name="keywords")
    op.drop_index("ix_keywords_user_id", table_name="keywords")
    op.drop_table("keywords")
    op.drop_index("ix_filters_category", table_name="filters")
    op.drop_index("ix_filters_user_id", table_name="filters")
    op.drop_table("filters")
