"""initial_schema

Revision ID: 5f2a9c41d7b3
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '5f2a9c41d7b3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all application tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('email_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('verification_code', sa.String(6), nullable=True),
        sa.Column('verification_code_expires', sa.DateTime, nullable=True),
        sa.Column('resume_id', sa.String(36), nullable=True),
        sa.Column('resume_file_name', sa.String(255), nullable=True),
        sa.Column('resume_upload_date', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'documents',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('filename', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(127), nullable=False),
        sa.Column('size', sa.Integer, nullable=False),
        sa.Column('owner_id', sa.String(36), nullable=False, index=True),
        sa.Column('chunk_size', sa.Integer, nullable=False),
        sa.Column('uploaded_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'document_chunks',
        sa.Column('document_id', sa.String(36), sa.ForeignKey('documents.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('n', sa.Integer, primary_key=True),
        sa.Column('data', sa.LargeBinary, nullable=False),
    )

    op.create_table(
        'resume_analyses',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False, index=True),
        sa.Column('document_id', sa.String(36), sa.ForeignKey('documents.id', ondelete='CASCADE'),
                  nullable=False, index=True),
        sa.Column('skills', sa.JSON, nullable=False),
        sa.Column('summary', sa.Text, nullable=False),
        sa.Column('job_keywords', sa.JSON, nullable=False),
        sa.Column('analyzed_at', sa.DateTime, nullable=False),
        sa.UniqueConstraint('user_id', 'document_id', name='uq_resume_analyses_user_document'),
    )

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('dedup_key', sa.String(255), nullable=False, index=True),
        sa.Column('apply_link', sa.Text, nullable=False, server_default=''),
        sa.Column('city', sa.String(255), nullable=False, server_default=''),
        sa.Column('state', sa.String(255), nullable=False, server_default=''),
        sa.Column('country', sa.String(255), nullable=False, server_default=''),
        sa.Column('company_name_normalized', sa.String(255), nullable=False),
        sa.Column('employment_type', sa.String(50), nullable=False, index=True),
        sa.Column('work_arrangement', sa.String(50), nullable=False, index=True),
        sa.Column('job_title', sa.String(255), nullable=False),
        sa.Column('job_description', sa.Text, nullable=False, server_default=''),
        sa.Column('job_location', sa.String(255), nullable=False, server_default=''),
        sa.Column('sources', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False, index=True),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )

    op.create_table(
        'filtered_jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('date', sa.String(10), nullable=False, index=True),
        sa.Column('platform', sa.String(20), nullable=False, index=True),
        sa.Column('job_posting_id', sa.String(255), nullable=False),
        sa.Column('company_name_normalized', sa.String(255), nullable=False),
        sa.Column('city', sa.String(255), nullable=False, server_default=''),
        sa.Column('state', sa.String(255), nullable=False, server_default=''),
        sa.Column('country', sa.String(255), nullable=False, server_default=''),
        sa.Column('employment_type', sa.String(50), nullable=False, server_default=''),
        sa.Column('work_arrangement', sa.String(50), nullable=False, server_default=''),
        sa.Column('job_title', sa.String(255), nullable=False),
        sa.Column('job_description', sa.Text, nullable=False, server_default=''),
        sa.Column('job_location', sa.String(255), nullable=False, server_default=''),
        sa.Column('apply_link', sa.Text, nullable=False, server_default=''),
        sa.Column('analysis_passed', sa.Boolean, nullable=False, server_default=sa.false(), index=True),
        sa.Column('match_score', sa.Float, nullable=False, server_default='0.0'),
        sa.Column('match_reason', sa.Text, nullable=False, server_default=''),
        sa.Column('matching_skills', sa.JSON, nullable=False),
        sa.Column('missing_skills', sa.JSON, nullable=False),
        sa.Column('exclusion_stage', sa.String(20), nullable=True),
        sa.Column('exclusion_reason', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=True),
        sa.Column('updated_at', sa.DateTime, nullable=False, index=True),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('filtered_jobs')
    op.drop_table('jobs')
    op.drop_table('resume_analyses')
    op.drop_table('document_chunks')
    op.drop_table('documents')
    op.drop_table('users')
