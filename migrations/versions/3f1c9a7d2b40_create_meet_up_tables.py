"""create meet up tables

Revision ID: 3f1c9a7d2b40
Revises: 
Create Date: 2026-09-14 19:02:41.118532

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c9a7d2b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('users',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('nickname', sa.String(length=100), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('is_admin', sa.Boolean(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('email')
    )
    op.create_table('meet_ups',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('state', sa.Integer(), nullable=False),
    sa.Column('location_type', sa.String(length=20), nullable=False),
    sa.Column('location_address', sa.String(length=255), nullable=True),
    sa.Column('video_conference_link', sa.String(length=500), nullable=True),
    sa.Column('calendar_link', sa.String(length=500), nullable=True),
    sa.Column('date', sa.DateTime(), nullable=False),
    sa.Column('paper_id', sa.Integer(), nullable=True),
    sa.Column('link', sa.String(length=500), nullable=True),
    sa.Column('active_slot', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('active_slot')
    )
    op.create_index(op.f('ix_meet_ups_state'), 'meet_ups', ['state'], unique=False)
    op.create_table('papers',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('meet_up_id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('title', sa.String(length=200), nullable=False),
    sa.Column('description', sa.Text(), nullable=False),
    sa.Column('speaker', sa.String(length=200), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['meet_up_id'], ['meet_ups.id'], ),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_papers_meet_up_id'), 'papers', ['meet_up_id'], unique=False)
    op.create_table('votes',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('user_id', sa.Integer(), nullable=False),
    sa.Column('paper_id', sa.Integer(), nullable=False),
    sa.Column('meet_up_id', sa.Integer(), nullable=False),
    sa.Column('vote', sa.Float(precision=53), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['meet_up_id'], ['meet_ups.id'], ),
    sa.ForeignKeyConstraint(['paper_id'], ['papers.id'], ),
    sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('user_id', 'paper_id', 'meet_up_id', name='uq_votes_user_paper_meet_up')
    )
    op.create_index(op.f('ix_votes_meet_up_id'), 'votes', ['meet_up_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_votes_meet_up_id'), table_name='votes')
    op.drop_table('votes')
    op.drop_index(op.f('ix_papers_meet_up_id'), table_name='papers')
    op.drop_table('papers')
    op.drop_index(op.f('ix_meet_ups_state'), table_name='meet_ups')
    op.drop_table('meet_ups')
    op.drop_table('users')
