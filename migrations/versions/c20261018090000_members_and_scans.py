"""members and scans

Revision ID: c20261018090000
Revises:
Create Date: 2026-10-18 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c20261018090000'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Databases from the first deployment already carry these tables
    bind = op.get_bind()
    inspector = sa.inspect(bind)
    existing = set(inspector.get_table_names())

    if 'members' not in existing:
        op.create_table(
            'members',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('id_number', sa.String(length=32), unique=True),
            sa.Column('full_name', sa.Text(), nullable=False),
            sa.Column('rank', sa.Text(), nullable=False),
            sa.Column('responsibility', sa.Text(), nullable=False),
            sa.Column('phone_number', sa.Text(), nullable=False),
            sa.Column('photo_url', sa.Text()),
            sa.Column('created_at', sa.DateTime(), server_default=sa.func.current_timestamp()),
            sqlite_autoincrement=True,
        )

    if 'scans' not in existing:
        op.create_table(
            'scans',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('member_id', sa.Integer(), sa.ForeignKey('members.id')),
            sa.Column('scan_time', sa.DateTime(), server_default=sa.func.current_timestamp()),
            sa.Column('scanner_info', sa.Text()),
            sqlite_autoincrement=True,
        )


def downgrade():
    # Additive-only schema: records are never dropped
    pass
