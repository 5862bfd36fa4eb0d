"""add role_type to role_user

Revision ID: 8b5e0d61c2f9
Revises: 3f1c9a2b7d40
Create Date: 2026-10-12 09:45:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8b5e0d61c2f9"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column("role_user", sa.Column("role_type", sqlmodel.sql.sqltypes.AutoString(), nullable=True))


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_column("role_user", "role_type")
