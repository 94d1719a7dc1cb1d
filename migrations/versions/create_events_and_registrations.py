"""create events and registrations tables

Revision ID: 3f1c2a7d9b40
Revises: 
Create Date: 2026-10-15 09:12:41.518204

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f1c2a7d9b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('events',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('description', sa.Text(), nullable=True),
    sa.Column('location', sa.String(length=255), nullable=True),
    sa.Column('starts_at', sa.TIMESTAMP(timezone=True), nullable=True),
    sa.Column('capacity', sa.Integer(), nullable=False),
    sa.Column('needs_waiver', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('waiver', sa.Text(), nullable=True),
    sa.Column('creator_id', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_events_creator_id', 'events', ['creator_id'])

    op.create_table('registrations',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('event_id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('phone', sa.String(length=50), nullable=True),
    sa.Column('participants', sa.Integer(), nullable=False, server_default='1'),
    sa.Column('attendees', sa.Text(), nullable=False, server_default='[]'),
    sa.Column('waiver_signed', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('waiver_signed_at', sa.TIMESTAMP(timezone=True), nullable=True),
    sa.Column('checked_in', sa.Boolean(), nullable=False, server_default='false'),
    sa.Column('checked_in_at', sa.TIMESTAMP(timezone=True), nullable=True),
    sa.Column('qr_code', sa.String(length=255), nullable=False),
    sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
    sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('qr_code')
    )
    op.create_index('ix_registrations_event_id', 'registrations', ['event_id'])


def downgrade():
    op.drop_index('ix_registrations_event_id', table_name='registrations')
    op.drop_table('registrations')
    op.drop_index('ix_events_creator_id', table_name='events')
    op.drop_table('events')
