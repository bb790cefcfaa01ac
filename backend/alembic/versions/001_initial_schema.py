"""Initial schema

Revision ID: 001
Revises:
Create Date: 2024-01-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users table
    op.create_table(
        'users',
        sa.Column('username', sa.String(30), primary_key=True),
        sa.Column('password_digest', sa.Text(), nullable=False),
        sa.Column('first_name', sa.String(30), nullable=False),
        sa.Column('last_name', sa.String(30), nullable=False),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default='false'),
    )

    # Collections table; deleting a user deletes their collections
    op.create_table(
        'collections',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(100), nullable=False),
        sa.Column(
            'creator_username',
            sa.String(30),
            sa.ForeignKey('users.username', ondelete='CASCADE'),
            nullable=False,
            index=True,
        ),
    )

    # Collection-Colors junction table; one row per color in a collection
    op.create_table(
        'collections_colors',
        sa.Column(
            'collection_id',
            sa.Integer(),
            sa.ForeignKey('collections.id', ondelete='CASCADE'),
            primary_key=True,
        ),
        sa.Column('color_hex', sa.String(6), primary_key=True),
        sa.Column('position', sa.BigInteger(), sa.Identity(), nullable=False, unique=True),
        sa.CheckConstraint("color_hex ~ '^[0-9a-fA-F]{6}$'", name='ck_collections_colors_hex'),
    )


def downgrade() -> None:
    op.drop_table('collections_colors')
    op.drop_table('collections')
    op.drop_table('users')
