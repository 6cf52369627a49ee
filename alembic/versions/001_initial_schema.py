"""Initial schema: games, picks, profiles, awards, fantasy stats.

Revision ID: 001_initial
Revises:
Create Date: 2025-09-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Games table
    op.create_table(
        'games',
        sa.Column('game_id', sa.String(36), primary_key=True),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('season', sa.Integer(), nullable=False),
        sa.Column('season_type', sa.String(20), nullable=False, server_default='regular'),
        sa.Column('home_team', sa.String(10), nullable=False),
        sa.Column('away_team', sa.String(10), nullable=False),
        sa.Column('game_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('home_score', sa.Integer(), nullable=True),
        sa.Column('away_score', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='scheduled'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
    )
    op.create_index('idx_games_period', 'games', ['season', 'season_type', 'week'])

    # Profiles table
    op.create_table(
        'profiles',
        sa.Column('user_id', sa.String(36), primary_key=True),
        sa.Column('username', sa.String(50), nullable=False, unique=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Picks table
    op.create_table(
        'picks',
        sa.Column('pick_id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('game_id', sa.String(36), sa.ForeignKey('games.game_id', ondelete='CASCADE'), nullable=False),
        sa.Column('picked_team', sa.String(10), nullable=False),
        sa.Column('is_lock', sa.Boolean(), nullable=False, server_default=sa.false()),
        # Rarity flags
        sa.Column('solo_pick', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('solo_lock', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('super_bonus', sa.Boolean(), nullable=False, server_default=sa.false()),
        # Computed points
        sa.Column('bonus_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pick_points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint('user_id', 'game_id', name='uq_picks_user_game'),
    )
    op.create_index('idx_picks_game', 'picks', ['game_id'])
    op.create_index('idx_picks_user', 'picks', ['user_id'])

    # Awards table
    op.create_table(
        'awards',
        sa.Column('award_id', sa.String(36), primary_key=True),
        sa.Column('user_id', sa.String(36), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('season', sa.Integer(), nullable=False),
        sa.Column('season_type', sa.String(20), nullable=False),
        sa.Column('award_type', sa.String(30), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('record', sa.String(20), nullable=False, server_default='0-0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint(
            'user_id', 'week', 'season', 'season_type', 'award_type',
            name='uq_awards_user_period_type',
        ),
    )
    op.create_index('idx_awards_period', 'awards', ['season', 'season_type', 'week'])
    op.create_index('idx_awards_user', 'awards', ['user_id'])

    # Award periods table (one row per processed week)
    op.create_table(
        'award_periods',
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('season', sa.Integer(), nullable=False),
        sa.Column('season_type', sa.String(20), nullable=False),
        sa.Column('awards_created', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('users_ranked', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('processed_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('week', 'season', 'season_type', name='pk_award_periods'),
    )

    # Fantasy player stats table
    op.create_table(
        'fantasy_player_stats',
        sa.Column('stat_id', sa.String(36), primary_key=True),
        sa.Column('player_id', sa.String(50), nullable=False),
        sa.Column('week', sa.Integer(), nullable=False),
        sa.Column('season', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.String(36), nullable=True),
        # Passing
        sa.Column('passing_yards', sa.Integer(), server_default='0'),
        sa.Column('passing_tds', sa.Integer(), server_default='0'),
        sa.Column('interceptions', sa.Integer(), server_default='0'),
        # Rushing
        sa.Column('rushing_yards', sa.Integer(), server_default='0'),
        sa.Column('rushing_tds', sa.Integer(), server_default='0'),
        # Receiving
        sa.Column('receptions', sa.Integer(), server_default='0'),
        sa.Column('receiving_yards', sa.Integer(), server_default='0'),
        sa.Column('receiving_tds', sa.Integer(), server_default='0'),
        # Misc
        sa.Column('fumbles_lost', sa.Integer(), server_default='0'),
        sa.Column('two_point_conversions', sa.Integer(), server_default='0'),
        # Defense / special teams
        sa.Column('dst_points_allowed', sa.Integer(), nullable=True),
        sa.Column('dst_sacks', sa.Integer(), server_default='0'),
        sa.Column('dst_interceptions', sa.Integer(), server_default='0'),
        sa.Column('dst_fumble_recoveries', sa.Integer(), server_default='0'),
        sa.Column('dst_safeties', sa.Integer(), server_default='0'),
        sa.Column('dst_tds', sa.Integer(), server_default='0'),
        sa.Column('dst_blocked_kicks', sa.Integer(), server_default='0'),
        # Kicking
        sa.Column('fg_made_0_39', sa.Integer(), server_default='0'),
        sa.Column('fg_made_40_49', sa.Integer(), server_default='0'),
        sa.Column('fg_made_50_plus', sa.Integer(), server_default='0'),
        sa.Column('fg_missed', sa.Integer(), server_default='0'),
        sa.Column('xp_made', sa.Integer(), server_default='0'),
        sa.Column('xp_missed', sa.Integer(), server_default='0'),
        # Computed points per format
        sa.Column('points_ppr', sa.Numeric(6, 2), server_default='0'),
        sa.Column('points_half_ppr', sa.Numeric(6, 2), server_default='0'),
        sa.Column('points_standard', sa.Numeric(6, 2), server_default='0'),
        sa.Column('last_updated', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('player_id', 'week', 'season', name='uq_fantasy_stats_player_week'),
    )
    op.create_index('idx_fantasy_stats_week', 'fantasy_player_stats', ['season', 'week'])


def downgrade() -> None:
    op.drop_table('fantasy_player_stats')
    op.drop_table('award_periods')
    op.drop_table('awards')
    op.drop_table('picks')
    op.drop_table('profiles')
    op.drop_table('games')
