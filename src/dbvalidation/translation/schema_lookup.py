"""
Index name -> column list lookup.

MySQL reports a duplicate key by index name ("... for key 'users_email_unique'"), so
the only way to know which fields are involved is to ask the schema. The duplicate-key
hook depends on the SchemaLookup protocol; SqlAlchemySchemaLookup implements it with
SQLAlchemy Core for MySQL/MariaDB (INFORMATION_SCHEMA) and SQLite (PRAGMA index_info).

A failed lookup is never masked: it raises SchemaLookupError and the whole
translation of that error fails.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions.base import SchemaLookupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexInfo:
    """
    - columns: comma-joined column names in index order (e.g. "first,last")
    - table_name: table owning the index
    - comment: index comment, used as a human-authored message when non-empty
    """

    columns: str
    table_name: str | None = None
    comment: str | None = None


class SchemaLookup(Protocol):
    def lookup_index(self, index_name: str) -> IndexInfo: ...


_MYSQL_INDEX_QUERY = text(
    """
    SELECT GROUP_CONCAT(S.COLUMN_NAME ORDER BY S.SEQ_IN_INDEX) AS col_names,
           MAX(S.TABLE_NAME) AS table_name,
           MAX(S.INDEX_COMMENT) AS index_comment
    FROM INFORMATION_SCHEMA.STATISTICS S
    WHERE S.TABLE_SCHEMA = DATABASE()
      AND S.INDEX_NAME = :index_name
      AND (:table_name IS NULL OR S.TABLE_NAME = :table_name)
    """
)

_SQLITE_INDEX_TABLE_QUERY = text(
    "SELECT tbl_name FROM sqlite_master WHERE type = 'index' AND name = :index_name"
)


def split_qualified_index(index_name: str) -> tuple[str | None, str]:
    """
    MySQL 8.0.19+ reports keys as 'table.index'; older servers send the bare index name.
    """
    table, sep, index = index_name.rpartition(".")
    if sep and table and index:
        return table, index
    return None, index_name


class SqlAlchemySchemaLookup:
    """Resolve index names through a SQLAlchemy Engine (one short-lived connection per lookup)."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def lookup_index(self, index_name: str) -> IndexInfo:
        table_name, bare_name = split_qualified_index(index_name)
        # every table's primary key is named PRIMARY; without a table the query would
        # join the key columns of all tables in the schema
        if table_name is None and bare_name.upper() == "PRIMARY":
            raise SchemaLookupError("Cannot resolve an unqualified PRIMARY key", index_name=index_name)
        dialect = self.engine.dialect.name
        if dialect not in ("mysql", "mariadb", "sqlite"):
            raise SchemaLookupError(f"Index lookup is not implemented for dialect {dialect!r}", index_name=index_name)

        try:
            with self.engine.connect() as conn:
                if dialect == "sqlite":
                    info = self._lookup_sqlite(conn, bare_name)
                else:
                    info = self._lookup_mysql(conn, bare_name, table_name)
        except SQLAlchemyError as exc:
            logger.warning(
                "schema_lookup.failed",
                extra={"index_name": index_name, "dialect": dialect, "error": type(exc).__name__},
            )
            raise SchemaLookupError(f"Could not look up index {index_name!r}", index_name=index_name) from exc

        if info is None:
            logger.warning("schema_lookup.not_found", extra={"index_name": index_name, "dialect": dialect})
            raise SchemaLookupError(f"Index {index_name!r} not found", index_name=index_name)

        logger.debug(
            "schema_lookup.resolved",
            extra={"index_name": index_name, "columns": info.columns, "table_name": info.table_name},
        )
        return info

    def _lookup_mysql(self, conn: Connection, index_name: str, table_name: str | None) -> IndexInfo | None:
        row = conn.execute(_MYSQL_INDEX_QUERY, {"index_name": index_name, "table_name": table_name}).first()
        # aggregate query: always one row, col_names is NULL when nothing matched
        if row is None or row.col_names is None:
            return None
        return IndexInfo(columns=row.col_names, table_name=row.table_name, comment=row.index_comment or None)

    def _lookup_sqlite(self, conn: Connection, index_name: str) -> IndexInfo | None:
        table_name = conn.execute(_SQLITE_INDEX_TABLE_QUERY, {"index_name": index_name}).scalar()
        if table_name is None:
            return None
        # PRAGMA arguments cannot be bound; quote the identifier instead
        quoted = '"' + index_name.replace('"', '""') + '"'
        rows = conn.execute(text(f"PRAGMA index_info({quoted})")).all()
        columns = [name for _seqno, _cid, name in sorted(rows, key=lambda r: r[0])]
        if not columns:
            return None
        return IndexInfo(columns=",".join(columns), table_name=table_name, comment=None)


__all__ = ["IndexInfo", "SchemaLookup", "SqlAlchemySchemaLookup", "split_qualified_index"]
