"""member card image columns

Revision ID: c20261018091000
Revises: c20261018090000
Create Date: 2026-10-18 09:10:00

"""
from alembic import op
import sqlalchemy as sa


revision = 'c20261018091000'
down_revision = 'c20261018090000'
branch_labels = None
depends_on = None

CARD_IMAGE_COLUMNS = ('left_flag_url', 'center_logo_url', 'right_flag_url')


def upgrade():
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    cols = {c['name'] for c in inspector.get_columns('members')}
    for name in CARD_IMAGE_COLUMNS:
        if name not in cols:
            op.add_column('members', sa.Column(name, sa.Text()))


def downgrade():
    pass
