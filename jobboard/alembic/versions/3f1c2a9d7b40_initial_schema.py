"""initial_schema

Revision ID: 3f1c2a9d7b40
Revises:
Create Date: 2026-10-18 09:12:41.331207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, jobs and job_applications."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('user_type', sa.String(20), nullable=False),
        sa.Column('profile_headline', sa.String(255), nullable=False),
        sa.Column('address', sa.Text, nullable=False),
        sa.Column('resume_url', sa.Text, nullable=True),
        sa.Column('resume_path', sa.Text, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'jobs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text, nullable=False),
        sa.Column('company_name', sa.String(255), nullable=False),
        sa.Column('posted_by_email', sa.String(255), nullable=False),
        sa.Column('posted_on', sa.DateTime, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=False),
    )
    op.create_index('ix_jobs_posted_by_email', 'jobs', ['posted_by_email'])
    op.create_index('ix_jobs_posted_on', 'jobs', ['posted_on'])

    op.create_table(
        'job_applications',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('job_id', sa.String(36), sa.ForeignKey('jobs.id'), nullable=False),
        sa.Column('applicant_email', sa.String(255), sa.ForeignKey('users.email'), nullable=False),
        sa.Column('applied_at', sa.DateTime, nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.UniqueConstraint('job_id', 'applicant_email', name='uq_job_applications_job_applicant'),
    )


def downgrade() -> None:
    """Drop all application tables."""
    op.drop_table('job_applications')
    op.drop_index('ix_jobs_posted_on', table_name='jobs')
    op.drop_index('ix_jobs_posted_by_email', table_name='jobs')
    op.drop_table('jobs')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
