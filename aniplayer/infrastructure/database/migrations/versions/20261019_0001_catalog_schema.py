"""catalog schema baseline

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from __future__ import annotations

from alembic import op

from aniplayer.infrastructure.database.models import Base


# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None

_TABLES = ("libraries", "series", "episodes")


def upgrade() -> None:
    bind = op.get_bind()
    tables = [Base.metadata.tables[name] for name in _TABLES]
    Base.metadata.create_all(bind, tables=tables)


def downgrade() -> None:
    bind = op.get_bind()
    tables = [Base.metadata.tables[name] for name in reversed(_TABLES)]
    Base.metadata.drop_all(bind, tables=tables)
