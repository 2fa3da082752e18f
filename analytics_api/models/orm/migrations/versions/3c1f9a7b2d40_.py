"""Initial tables for datasets, data, shares, thresholds, dataloads and
activities.

Revision ID: 3c1f9a7b2d40
Revises:
Create Date: 2026-10-19 09:12:44.108214
"""
import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "3c1f9a7b2d40"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column(
            "created_on", sa.DateTime(), server_default=sa.text("now()"), nullable=True
        ),
        sa.Column(
            "updated_on", sa.DateTime(), server_default=sa.text("now()"), nullable=True
        ),
    ]


def _dataset_fk():
    return sa.ForeignKeyConstraint(
        ["dataset_id"],
        ["datasets.id"],
        onupdate="CASCADE",
        ondelete="CASCADE",
    )


def upgrade():
    op.create_table(
        "datasets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("owner_id", sa.String(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("dimension1", sa.String(), nullable=True),
        sa.Column("dimension2", sa.String(), nullable=True),
        sa.Column("value", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_datasets_owner_id", "datasets", ["owner_id"])

    op.create_table(
        "data",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dataset_id", sa.Integer(), nullable=False),
        sa.Column("dimension1", sa.String(), nullable=False),
        sa.Column("dimension2", sa.String(), nullable=False),
        sa.Column("value", sa.String(), nullable=True),
        *_timestamps(),
        _dataset_fk(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "dataset_id", "dimension1", "dimension2", name="data_dimensions_uc"
        ),
    )

    op.create_table(
        "shares",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dataset_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.Integer(), nullable=False),
        sa.Column("target", sa.String(), nullable=True),
        sa.Column("token", sa.String(length=32), nullable=True),
        sa.Column("password", sa.String(), nullable=True),
        sa.Column("initiator_id", sa.String(), nullable=True),
        *_timestamps(),
        _dataset_fk(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token"),
    )
    op.create_index("shares_dataset_id_idx", "shares", ["dataset_id"])
    op.create_index("shares_type_target_idx", "shares", ["type", "target"])

    op.create_table(
        "thresholds",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dataset_id", sa.Integer(), nullable=False),
        sa.Column("dimension1", sa.String(), nullable=False),
        sa.Column("option", sa.String(), nullable=False),
        sa.Column("value", sa.String(), nullable=False),
        sa.Column("severity", sa.Integer(), nullable=False),
        *_timestamps(),
        _dataset_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_thresholds_dataset_id", "thresholds", ["dataset_id"])

    op.create_table(
        "dataloads",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dataset_id", sa.Integer(), nullable=False),
        sa.Column("datasource_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("schedule", sa.String(), nullable=False),
        sa.Column(
            "option", postgresql.JSONB(astext_type=sa.Text()), nullable=False
        ),
        *_timestamps(),
        _dataset_fk(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_dataloads_dataset_id", "dataloads", ["dataset_id"])
    op.create_index("ix_dataloads_schedule", "dataloads", ["schedule"])

    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("dataset_id", sa.Integer(), nullable=False),
        sa.Column("object_type", sa.String(), nullable=False),
        sa.Column("subject", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_activities_dataset_id", "activities", ["dataset_id"])


def downgrade():
    op.drop_table("activities")
    op.drop_table("dataloads")
    op.drop_table("thresholds")
    op.drop_table("shares")
    op.drop_table("data")
    op.drop_table("datasets")
