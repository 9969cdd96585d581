"""Add quiz_answer table

Revision ID: 002_quiz_answer
Revises: initial
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_quiz_answer'
down_revision = 'initial'
branch_labels = None
depends_on = None


def upgrade() -> None:
    # One row per answered quiz question (user, card, quiz seed)
    op.create_table(
        'quiz_answer',
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('card_id', sa.String(), nullable=False),
        sa.Column('seed', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('correct', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('answered_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ),
        sa.ForeignKeyConstraint(['card_id'], ['card.id'], ),
        sa.PrimaryKeyConstraint('user_id', 'card_id', 'seed')
    )


def downgrade() -> None:
    op.drop_table('quiz_answer')
