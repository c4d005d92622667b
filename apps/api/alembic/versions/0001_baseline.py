"""Baseline migration - users, forms, questions, and responses

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates every table for the form builder, including the
(form_id, limited_user_id) guard against double submissions.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create form builder tables."""

    # ==========================================================================
    # Users
    # ==========================================================================
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('token_version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    # ==========================================================================
    # Forms
    # ==========================================================================
    op.create_table(
        'forms',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('limit_one_response', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            'creator_id', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )
    op.create_index('idx_forms_creator', 'forms', ['creator_id'])

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(
            'form_id', sa.Integer(),
            sa.ForeignKey('forms.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('choice_type', sa.String(30), nullable=False),
        sa.Column('choices', sa.JSON(), nullable=True),
        sa.Column('is_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_questions_form', 'questions', ['form_id'])

    op.create_table(
        'allowed_domains',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(
            'form_id', sa.Integer(),
            sa.ForeignKey('forms.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_allowed_domains_form', 'allowed_domains', ['form_id'])

    # ==========================================================================
    # Responses
    # ==========================================================================
    op.create_table(
        'responses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(
            'form_id', sa.Integer(),
            sa.ForeignKey('forms.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'user_id', sa.Integer(),
            sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False,
        ),
        # Equals user_id on one-response forms, NULL otherwise
        sa.Column('limited_user_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('form_id', 'limited_user_id', name='uq_responses_form_limited_user'),
    )
    op.create_index('idx_responses_form', 'responses', ['form_id'])
    op.create_index('idx_responses_form_user', 'responses', ['form_id', 'user_id'])

    op.create_table(
        'answers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(
            'response_id', sa.Integer(),
            sa.ForeignKey('responses.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column(
            'question_id', sa.Integer(),
            sa.ForeignKey('questions.id', ondelete='CASCADE'), nullable=False,
        ),
        sa.Column('value', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_answers_response', 'answers', ['response_id'])
    op.create_index('idx_answers_question', 'answers', ['question_id'])


def downgrade() -> None:
    """Drop form builder tables."""
    op.drop_table('answers')
    op.drop_table('responses')
    op.drop_table('allowed_domains')
    op.drop_table('questions')
    op.drop_table('forms')
    op.drop_table('users')
