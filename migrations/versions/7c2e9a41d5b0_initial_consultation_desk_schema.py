"""Initial consultation desk schema

Revision ID: 7c2e9a41d5b0
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '7c2e9a41d5b0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('last_login_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )

    op.create_table('consultations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('consultation_id', sa.String(length=64), nullable=False),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('company', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('industry', sa.String(length=100), nullable=False),
        sa.Column('company_size', sa.String(length=50), nullable=False),
        sa.Column('timezone', sa.String(length=100), nullable=False),
        sa.Column('preferred_date', sa.Date(), nullable=False),
        sa.Column('preferred_time', sa.String(length=20), nullable=False),
        sa.Column('secondary_date', sa.Date(), nullable=True),
        sa.Column('secondary_time', sa.String(length=20), nullable=True),
        sa.Column('urgency', sa.String(length=20), nullable=False),
        sa.Column('current_challenges', sa.Text(), nullable=False),
        sa.Column('ai_experience', sa.Text(), nullable=True),
        sa.Column('specific_interests', sa.JSON(), nullable=False),
        sa.Column('hear_about_us', sa.String(length=255), nullable=True),
        sa.Column('additional_notes', sa.Text(), nullable=True),
        sa.Column('estimated_value', sa.Integer(), nullable=False),
        sa.Column('priority_score', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('admin_notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('consultations', schema=None) as batch_op:
        batch_op.create_index('ix_consultations_consultation_id', ['consultation_id'], unique=True)
        batch_op.create_index('ix_consultations_email', ['email'], unique=False)
        batch_op.create_index('ix_consultations_status', ['status'], unique=False)
        batch_op.create_index('ix_consultations_created_at', ['created_at'], unique=False)

    op.create_table('activities',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=50), nullable=False),
        sa.Column('color', sa.String(length=20), nullable=False),
        sa.Column('actionable', sa.Boolean(), nullable=False),
        sa.Column('follow_up', sa.Boolean(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('consultation_id', sa.String(length=64), nullable=True),
        sa.Column('value', sa.Integer(), nullable=True),
        sa.Column('actor_user_id', sa.String(length=36), nullable=True),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['actor_user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('activities', schema=None) as batch_op:
        batch_op.create_index('ix_activities_type', ['type'], unique=False)
        batch_op.create_index('ix_activities_timestamp', ['timestamp'], unique=False)

    op.create_table('admin_settings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('profile', sa.JSON(), nullable=False),
        sa.Column('notifications', sa.JSON(), nullable=False),
        sa.Column('business', sa.JSON(), nullable=False),
        sa.Column('integrations', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('seo_settings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('site_title', sa.String(length=255), nullable=True),
        sa.Column('site_description', sa.Text(), nullable=True),
        sa.Column('keywords', sa.Text(), nullable=True),
        sa.Column('canonical_url', sa.String(length=500), nullable=True),
        sa.Column('og_title', sa.String(length=255), nullable=True),
        sa.Column('og_description', sa.Text(), nullable=True),
        sa.Column('og_image', sa.String(length=500), nullable=True),
        sa.Column('og_type', sa.String(length=50), nullable=True),
        sa.Column('twitter_card', sa.String(length=50), nullable=True),
        sa.Column('twitter_site', sa.String(length=100), nullable=True),
        sa.Column('twitter_creator', sa.String(length=100), nullable=True),
        sa.Column('robots_txt', sa.Text(), nullable=True),
        sa.Column('schema_markup', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('analytics_settings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('google_analytics_id', sa.String(length=50), nullable=True),
        sa.Column('facebook_pixel_id', sa.String(length=50), nullable=True),
        sa.Column('linkedin_pixel_id', sa.String(length=50), nullable=True),
        sa.Column('microsoft_clarity_id', sa.String(length=50), nullable=True),
        sa.Column('cdp_tracking_code', sa.Text(), nullable=True),
        sa.Column('custom_scripts', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('0')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('email_templates',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table('email_logs',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('recipient', sa.String(length=500), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('template_type', sa.String(length=50), nullable=True),
        sa.Column('consultation_id', sa.String(length=64), nullable=True),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade():
    op.drop_table('email_logs')
    op.drop_table('email_templates')
    op.drop_table('analytics_settings')
    op.drop_table('seo_settings')
    op.drop_table('admin_settings')
    with op.batch_alter_table('activities', schema=None) as batch_op:
        batch_op.drop_index('ix_activities_timestamp')
        batch_op.drop_index('ix_activities_type')
    op.drop_table('activities')
    with op.batch_alter_table('consultations', schema=None) as batch_op:
        batch_op.drop_index('ix_consultations_created_at')
        batch_op.drop_index('ix_consultations_status')
        batch_op.drop_index('ix_consultations_email')
        batch_op.drop_index('ix_consultations_consultation_id')
    op.drop_table('consultations')
    op.drop_table('users')
