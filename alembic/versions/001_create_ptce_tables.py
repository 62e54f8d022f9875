"""Create saved_models and ptce_evaluations tables

Revision ID: 001
Revises:
Create Date: 2025-03-02 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

MODEL_PERFORMANCE_VIEW = """
CREATE VIEW vw_model_performance AS
SELECT
  model_id,
  COUNT(*) AS total_matches,
  SUM(CASE WHEN won = 1 THEN 1 ELSE 0 END) AS wins,
  SUM(CASE WHEN won = 1 THEN 0 ELSE 1 END) AS losses,
  ROUND(AVG(score), 2) AS avg_score,
  ROUND(AVG(confidence), 3) AS avg_confidence
FROM (
  SELECT model1_id AS model_id, model1_score AS score,
         CASE WHEN model1_id = winner_id THEN 1 ELSE 0 END AS won, confidence
  FROM ptce_evaluations
  UNION ALL
  SELECT model2_id AS model_id, model2_score AS score,
         CASE WHEN model2_id = winner_id THEN 1 ELSE 0 END AS won, confidence
  FROM ptce_evaluations
) AS model_matches
GROUP BY model_id
"""


def upgrade() -> None:
    """Create stored model and match evaluation tables."""

    op.create_table(
        'saved_models',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('prompt', sa.Text(), nullable=False, server_default=''),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('model_3d_url', sa.Text(), nullable=True),
        sa.Column('video_url', sa.Text(), nullable=True),
        sa.Column('texture_urls', sa.Text(), nullable=True),
        sa.Column('attack_power', sa.Float(), nullable=False),
        sa.Column('defense', sa.Float(), nullable=False),
        sa.Column('speed_agility', sa.Float(), nullable=False),
        sa.Column('strategy', sa.Float(), nullable=False),
        sa.Column('endurance', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_saved_models'),
    )
    op.create_index('ix_saved_models_name', 'saved_models', ['name'])
    op.create_index('ix_saved_models_created_at', 'saved_models', ['created_at'])

    op.create_table(
        'ptce_evaluations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('match_id', sa.String(length=50), nullable=False),
        sa.Column('model1_id', sa.String(length=50), nullable=False),
        sa.Column('model2_id', sa.String(length=50), nullable=False),
        sa.Column('winner_id', sa.String(length=50), nullable=False),
        sa.Column('model1_score', sa.Float(), nullable=False),
        sa.Column('model2_score', sa.Float(), nullable=False),
        sa.Column('confidence', sa.Float(), nullable=False),
        sa.Column('reasoning', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id', name='pk_ptce_evaluations'),
    )
    op.create_index('ix_ptce_evaluations_match_id', 'ptce_evaluations', ['match_id'])
    op.create_index('ix_ptce_evaluations_model1_id', 'ptce_evaluations', ['model1_id'])
    op.create_index('ix_ptce_evaluations_model2_id', 'ptce_evaluations', ['model2_id'])
    op.create_index('ix_ptce_evaluations_winner_id', 'ptce_evaluations', ['winner_id'])

    op.execute(MODEL_PERFORMANCE_VIEW)


def downgrade() -> None:
    """Drop the view and both tables."""

    op.execute("DROP VIEW IF EXISTS vw_model_performance")
    op.drop_table('ptce_evaluations')
    op.drop_table('saved_models')
