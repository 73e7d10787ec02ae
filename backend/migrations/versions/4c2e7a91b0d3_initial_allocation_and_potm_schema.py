"""initial schema: users, players, allocations, matches, potm_votes

Revision ID: 4c2e7a91b0d3
Revises:
Create Date: 2026-10-16 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4c2e7a91b0d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # init_db() may already have created the tables on first start
    existing_tables = set(insp.get_table_names())

    if 'users' not in existing_tables:
        op.create_table(
            'users',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('email', sa.String(length=255), nullable=True),
        )
        op.create_index('ix_users_email', 'users', ['email'], unique=True)

    if 'players' not in existing_tables:
        op.create_table(
            'players',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('name', sa.String(length=128), nullable=False),
            sa.Column('club', sa.String(length=128), nullable=True),
            sa.Column('photo_url', sa.String(length=512), nullable=True),
            sa.Column('total_points', sa.Integer(), nullable=False, server_default='0'),
        )

    if 'allocations' not in existing_tables:
        op.create_table(
            'allocations',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id'), nullable=False),
            sa.Column('points_allocated', sa.Integer(), nullable=False),
            sa.UniqueConstraint('user_id', 'player_id', name='uq_allocations_user_player'),
            sa.CheckConstraint('points_allocated >= 0', name='ck_allocations_points_nonnegative'),
        )

    if 'matches' not in existing_tables:
        op.create_table(
            'matches',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('date', sa.String(length=32), nullable=False),
            sa.Column('opponent', sa.String(length=128), nullable=False),
            sa.Column('home_away', sa.String(length=4), nullable=True, server_default='HOME'),
            sa.Column('status', sa.String(length=16), nullable=True, server_default='final'),
            sa.CheckConstraint("home_away in ('HOME','AWAY')", name='ck_matches_home_away'),
        )

    if 'potm_votes' not in existing_tables:
        op.create_table(
            'potm_votes',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('match_id', sa.Integer(), sa.ForeignKey('matches.id'), nullable=False),
            sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id'), nullable=False),
            sa.Column('user_email', sa.String(length=255), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.UniqueConstraint('match_id', 'user_email', name='uq_potm_votes_match_email'),
        )


def downgrade():
    op.drop_table('potm_votes')
    op.drop_table('matches')
    op.drop_table('allocations')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_table('players')
