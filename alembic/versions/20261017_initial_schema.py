"""Initial schema: users, user_settings, command_logs

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('telegram_id', sa.BigInteger(), nullable=False),
        sa.Column('username', sa.String(255), nullable=True),
        sa.Column('first_name', sa.String(255), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(255), nullable=True),
        sa.Column('language_code', sa.String(16), nullable=True),
        sa.Column('is_bot', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_premium', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_seen_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_users_telegram_id', 'users', ['telegram_id'], unique=True)
    op.create_index('ix_users_last_seen_at', 'users', ['last_seen_at'])

    op.create_table(
        'user_settings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('notifications_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('timezone', sa.String(64), nullable=False, server_default='UTC'),
        sa.Column('default_aspect_ratio', sa.String(10), nullable=False, server_default='1:1'),
        sa.Column('default_image_size', sa.String(10), nullable=False, server_default='1K'),
        sa.Column('default_model', sa.String(50), nullable=False, server_default='high-quality'),
    )

    op.create_table(
        'command_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('command', sa.String(64), nullable=False),
        sa.Column('args', sa.String(1000), nullable=True),
        sa.Column('chat_id', sa.BigInteger(), nullable=False),
        sa.Column('chat_type', sa.String(20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_command_logs_user_id', 'command_logs', ['user_id'])
    op.create_index('ix_command_logs_command', 'command_logs', ['command'])
    op.create_index('ix_command_logs_created_at', 'command_logs', ['created_at'])


def downgrade() -> None:
    op.drop_index('ix_command_logs_created_at', table_name='command_logs')
    op.drop_index('ix_command_logs_command', table_name='command_logs')
    op.drop_index('ix_command_logs_user_id', table_name='command_logs')
    op.drop_table('command_logs')
    op.drop_table('user_settings')
    op.drop_index('ix_users_last_seen_at', table_name='users')
    op.drop_index('ix_users_telegram_id', table_name='users')
    op.drop_table('users')
