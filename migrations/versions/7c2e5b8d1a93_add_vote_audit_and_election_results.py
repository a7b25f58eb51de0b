"""add vote audit log and election results

Revision ID: 7c2e5b8d1a93
Revises: 3f1a9c2e7b40
Create Date: 2026-09-21 18:44:05.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7c2e5b8d1a93"
down_revision = "3f1a9c2e7b40"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "vote_audit_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("vote_id", sa.Integer(), nullable=False),
        sa.Column("action", sa.String(length=20), nullable=False),
        sa.Column("performed_by", sa.Integer(), nullable=True),
        sa.Column("ip_address", sa.String(length=64), nullable=True),
        sa.Column("user_agent", sa.String(length=255), nullable=True),
        sa.Column("details", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["vote_id"], ["votes.id"]),
        sa.ForeignKeyConstraint(["performed_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_table(
        "election_results",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("election_id", sa.Integer(), nullable=False),
        sa.Column("post", sa.String(length=50), nullable=False),
        sa.Column("total_votes", sa.Integer(), nullable=False),
        sa.Column("total_registered_voters", sa.Integer(), nullable=False),
        sa.Column("turnout_percentage", sa.Float(), nullable=False),
        sa.Column("winner_candidate_id", sa.Integer(), nullable=True),
        sa.Column("results_data", sa.JSON(), nullable=False),
        sa.Column("compiled_by", sa.Integer(), nullable=True),
        sa.Column("compiled_at", sa.DateTime(), nullable=False),
        sa.Column("is_final", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["election_id"], ["elections.id"]),
        sa.ForeignKeyConstraint(["winner_candidate_id"], ["candidates.id"]),
        sa.ForeignKeyConstraint(["compiled_by"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("election_id", "post", name="uq_election_results_post"),
    )


def downgrade():
    op.drop_table("election_results")
    op.drop_table("vote_audit_logs")
