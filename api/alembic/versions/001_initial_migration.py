"""Initial migration: create user, word_set, card and progress tables

Revision ID: initial
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create user table
    op.create_table(
        'user',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='student'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('coins', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('correct', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('time_ms', sa.BigInteger(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    # Create word_set table
    op.create_table(
        'word_set',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('book', sa.String(), nullable=False),
        sa.Column('unit', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create card table
    op.create_table(
        'card',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('set_id', sa.String(), nullable=False),
        sa.Column('term', sa.String(), nullable=False),
        sa.Column('definition', sa.String(), nullable=False),
        sa.Column('example', sa.String(), nullable=True),
        sa.Column('language', sa.String(length=5), nullable=False, server_default='EN'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['set_id'], ['word_set.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_card_set_id'), 'card', ['set_id'], unique=False)

    # Create progress table (per-user Leitner state)
    op.create_table(
        'progress',
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('card_id', sa.String(), nullable=False),
        sa.Column('box', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('next_review', sa.BigInteger(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['card_id'], ['card.id'], ),
        sa.PrimaryKeyConstraint('user_id', 'card_id')
    )


def downgrade() -> None:
    op.drop_table('progress')
    op.drop_index(op.f('ix_card_set_id'), table_name='card')
    op.drop_table('card')
    op.drop_table('word_set')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
