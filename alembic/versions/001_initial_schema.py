"""Initial league schema: users, teams, players, games and box score lines

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(10), nullable=False, server_default='player'),
        sa.Column('team_id', sa.Integer(), nullable=True),
        sa.Column('player_profile_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_team_id', 'users', ['team_id'])

    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False, unique=True),
        sa.Column('coach_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('founded_year', sa.Integer(), nullable=True),
        sa.Column('home_venue', sa.String(100), nullable=True),
        sa.Column('primary_color', sa.String(20), server_default='#000000'),
        sa.Column('secondary_color', sa.String(20), server_default='#FFFFFF'),
        sa.Column('logo', sa.String(255), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('wins', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('losses', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('win_percentage', sa.Float(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_teams_id', 'teams', ['id'])
    op.create_index('ix_teams_coach_id', 'teams', ['coach_id'])
    op.create_index('ix_teams_is_active', 'teams', ['is_active'])

    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('team_id', sa.Integer(), sa.ForeignKey('teams.id'), nullable=True),
        sa.Column('position', sa.String(2), nullable=False),
        sa.Column('jersey_number', sa.Integer(), nullable=False),
        sa.Column('height', sa.String(10), nullable=False),
        sa.Column('weight', sa.Integer(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('points_per_game', sa.Float(), nullable=False, server_default='0'),
        sa.Column('rebounds_per_game', sa.Float(), nullable=False, server_default='0'),
        sa.Column('assists_per_game', sa.Float(), nullable=False, server_default='0'),
        sa.Column('steals_per_game', sa.Float(), nullable=False, server_default='0'),
        sa.Column('blocks_per_game', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.UniqueConstraint('team_id', 'jersey_number', name='uq_player_team_jersey'),
    )
    op.create_index('ix_players_id', 'players', ['id'])
    op.create_index('ix_players_user_id', 'players', ['user_id'], unique=True)
    op.create_index('ix_players_team_id', 'players', ['team_id'])
    op.create_index('ix_players_is_active', 'players', ['is_active'])

    op.create_table(
        'games',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('home_team_id', sa.Integer(), sa.ForeignKey('teams.id'), nullable=False),
        sa.Column('away_team_id', sa.Integer(), sa.ForeignKey('teams.id'), nullable=False),
        sa.Column('home_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('away_score', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('game_date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='scheduled'),
        sa.Column('quarter', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('time_remaining', sa.String(10), nullable=False, server_default='12:00'),
        sa.Column('venue', sa.String(100), nullable=True),
        sa.Column('attendance', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_games_id', 'games', ['id'])
    op.create_index('ix_games_home_team_id', 'games', ['home_team_id'])
    op.create_index('ix_games_away_team_id', 'games', ['away_team_id'])
    op.create_index('ix_games_game_date', 'games', ['game_date'])

    op.create_table(
        'game_stats',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('game_id', sa.Integer(), sa.ForeignKey('games.id', ondelete='CASCADE'), nullable=False),
        sa.Column('player_id', sa.Integer(), sa.ForeignKey('players.id'), nullable=True),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rebounds', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('assists', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('steals', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('blocks', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('minutes_played', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_game_stats_id', 'game_stats', ['id'])
    op.create_index('ix_game_stats_game_id', 'game_stats', ['game_id'])
    op.create_index('ix_game_stats_player_id', 'game_stats', ['player_id'])


def downgrade() -> None:
    op.drop_table('game_stats')
    op.drop_table('games')
    op.drop_table('players')
    op.drop_table('teams')
    op.drop_table('users')
