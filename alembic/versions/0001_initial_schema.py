"""users, agents and agent_ownerships

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("wallet_address", sa.String(42), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("wallet_address", name="users_wallet_address_unique"),
    )
    op.create_table(
        "agents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("external_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("model", sa.String(100), nullable=False),
        sa.Column("capabilities", sa.JSON(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("is_for_sale", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("creator_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("external_id", name="agents_external_id_unique"),
    )
    op.create_index("idx_agents_creator", "agents", ["creator_id"])
    op.create_index("idx_agents_for_sale", "agents", ["is_for_sale"])
    op.create_table(
        "agent_ownerships",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("agent_id", sa.String(36), sa.ForeignKey("agents.id"), nullable=False),
        sa.Column("user_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("purchased_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("agent_id", "user_id", name="uq_ownership_agent_user"),
    )
    op.create_index("idx_ownership_user", "agent_ownerships", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_ownership_user", table_name="agent_ownerships")
    op.drop_table("agent_ownerships")
    op.drop_index("idx_agents_for_sale", table_name="agents")
    op.drop_index("idx_agents_creator", table_name="agents")
    op.drop_table("agents")
    op.drop_table("users")
