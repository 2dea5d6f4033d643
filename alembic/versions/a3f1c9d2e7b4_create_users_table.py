"""create_users_table

Revision ID: a3f1c9d2e7b4
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = 'a3f1c9d2e7b4'
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False, comment='User ID (UUID)'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='User email address'),
        sa.Column('password_hash', sa.String(length=255), nullable=False, comment='Hashed password (argon2id)'),
        sa.Column('name', sa.String(length=255), nullable=False, comment='Display name'),
        sa.Column('is_verified', sa.Boolean(), server_default=sa.false(), nullable=False, comment='Whether the email address has been verified'),
        sa.Column('verification_token', sa.String(length=32), nullable=True, comment='Pending email verification code'),
        sa.Column('verification_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('reset_password_token', sa.String(length=128), nullable=True, comment='Pending password reset token'),
        sa.Column('reset_password_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True, comment='Timestamp of last successful login'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.CheckConstraint('(verification_token IS NULL) = (verification_token_expires_at IS NULL)', name='ck_users_verification_token_pair'),
        sa.CheckConstraint('(reset_password_token IS NULL) = (reset_password_token_expires_at IS NULL)', name='ck_users_reset_token_pair'),
        sa.CheckConstraint('NOT (is_verified AND verification_token IS NOT NULL)', name='ck_users_verified_has_no_pending_token'),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_email'), ['email'], unique=True)
        batch_op.create_index(batch_op.f('ix_users_verification_token'), ['verification_token'], unique=False)
        batch_op.create_index(batch_op.f('ix_users_reset_password_token'), ['reset_password_token'], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_reset_password_token'))
        batch_op.drop_index(batch_op.f('ix_users_verification_token'))
        batch_op.drop_index(batch_op.f('ix_users_email'))

    op.drop_table('users')
