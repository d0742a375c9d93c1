"""
Idempotent schema helpers for Alembic revisions.

Databases bootstrapped with ``create_all`` already carry the tables and columns
that later revisions add, so changes check the live schema first.
"""

import logging

import sqlalchemy as sa
from alembic import op

logger = logging.getLogger(__name__)


def table_exists(table_name: str) -> bool:
    return sa.inspect(op.get_bind()).has_table(table_name)


def column_exists(table_name: str, column_name: str) -> bool:
    inspector = sa.inspect(op.get_bind())
    if not inspector.has_table(table_name):
        return False
    return any(column["name"] == column_name for column in inspector.get_columns(table_name))


def add_column_if_not_exists(table_name: str, column: sa.Column) -> bool:
    """
    Add ``column`` to ``table_name`` unless it is already there.

    Returns:
        True when the column was added
    """
    if column_exists(table_name, column.name):
        logger.info(f"Column {table_name}.{column.name} already exists, skipping")
        return False
    op.add_column(table_name, column)
    return True


def drop_column_if_exists(table_name: str, column_name: str) -> bool:
    if not column_exists(table_name, column_name):
        logger.info(f"Column {table_name}.{column_name} does not exist, skipping")
        return False
    with op.batch_alter_table(table_name) as batch:
        batch.drop_column(column_name)
    return True
