"""Add users and private_messages tables

Revision ID: 20251019_add_users_and_private_messages
Revises:
Create Date: 2025-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20251019_add_users_and_private_messages"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "private_messages",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sender_id", sa.Integer, nullable=False),
        sa.Column("receiver_id", sa.Integer, nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(20), nullable=False, server_default="sent"),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_foreign_key(
        "fk_private_messages_sender_id",
        "private_messages",
        "users",
        ["sender_id"],
        ["id"],
    )
    op.create_foreign_key(
        "fk_private_messages_receiver_id",
        "private_messages",
        "users",
        ["receiver_id"],
        ["id"],
    )

    op.create_index(
        "idx_private_message_sender_receiver",
        "private_messages",
        ["sender_id", "receiver_id"],
    )
    op.create_index(
        "idx_private_message_receiver_read", "private_messages", ["receiver_id", "read"]
    )
    op.create_index("idx_private_message_created_at", "private_messages", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_private_message_created_at", table_name="private_messages")
    op.drop_index("idx_private_message_receiver_read", table_name="private_messages")
    op.drop_index("idx_private_message_sender_receiver", table_name="private_messages")

    op.drop_constraint(
        "fk_private_messages_receiver_id", "private_messages", type_="foreignkey"
    )
    op.drop_constraint("fk_private_messages_sender_id", "private_messages", type_="foreignkey")

    op.drop_table("private_messages")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
