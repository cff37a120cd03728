"""
Catalog snapshot reader: DB2 column metadata rows into canonical table descriptors.

The live connection is injected: anything with a ``query(sql, params)`` method
returning a list of row mappings works, which is how tests feed fixed catalogs.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

from erd_compose_core.lib.descriptors import ColumnDescriptor, TableDescriptor, canonical_name
from erd_compose_core.lib.errors import CatalogQueryFailure, InputReadFailure

CATALOG_QUERY = """
    SELECT col.TBNAME, col.NAME, col.IDENTITY, col.COLTYPE, col.LENGTH, col.NULLS, col.DEFAULT, fk.CONSTNAME
    FROM SYSIBM.SYSCOLUMNS AS col
    LEFT OUTER JOIN (
        SELECT kcu.TABSCHEMA, kcu.TABNAME, kcu.COLNAME, kcu.CONSTNAME
        FROM SYSCAT.KEYCOLUSE AS kcu
        JOIN SYSCAT.REFERENCES AS ref
          ON ref.CONSTNAME = kcu.CONSTNAME
         AND ref.TABSCHEMA = kcu.TABSCHEMA
         AND ref.TABNAME = kcu.TABNAME
    ) AS fk
      ON fk.TABSCHEMA = col.TBCREATOR
     AND fk.TABNAME = col.TBNAME
     AND fk.COLNAME = col.NAME
    WHERE col.TBCREATOR = ?
    ORDER BY col.TBNAME
"""

CATALOG_COLUMNS = ("TBNAME", "NAME", "IDENTITY", "COLTYPE", "LENGTH", "NULLS", "DEFAULT", "CONSTNAME")


class CatalogConnection(Protocol):
    """Anything that can run the introspection query."""

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        ...


class DbApiCatalog:
    """Adapts a DB-API 2.0 connection (e.g. ibm_db_dbi) to CatalogConnection."""

    def __init__(self, connection):
        self.connection = connection

    def query(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        cur = self.connection.cursor()
        try:
            cur.execute(sql, tuple(params))
            labels = [d[0].upper() for d in cur.description]
            return [dict(zip(labels, row)) for row in cur.fetchall()]
        finally:
            cur.close()

    def close(self):
        self.connection.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def db2_connection_string(database: str, hostname: str, port: Union[str, int], uid: str, pwd: str) -> str:
    return f"DATABASE={database};HOSTNAME={hostname};PORT={port};PROTOCOL=TCPIP;UID={uid};PWD={pwd};"


def connect_db2(dsn: str) -> DbApiCatalog:
    """Open a DB2 connection string through ibm_db_dbi."""
    try:
        import ibm_db_dbi
    except ImportError as e:
        raise CatalogQueryFailure("DB2 driver not installed: pip install erd-compose[db2]") from e

    try:
        connection = ibm_db_dbi.connect(dsn, "", "")
    except Exception as e:
        raise CatalogQueryFailure(f"Could not connect to DB2: {e}") from e
    return DbApiCatalog(connection)


def fetch_catalog_rows(catalog: CatalogConnection, schema: str) -> List[Dict[str, Any]]:
    """Run the introspection query for one schema; any failure aborts the comparison."""
    logging.debug(f"Querying catalog for schema {schema}")
    try:
        rows = catalog.query(CATALOG_QUERY, (schema,))
    except Exception as e:
        raise CatalogQueryFailure(f"Catalog query for schema '{schema}' failed: {e}") from e
    logging.info(f"Catalog returned {len(rows)} column rows for schema {schema}")
    return rows


def load_catalog_rows(source: str) -> List[Dict[str, Any]]:
    """Read a catalog snapshot saved as a JSON list of rows."""
    if not os.path.isfile(source):
        raise InputReadFailure(f"Catalog snapshot '{source}' couldn't be read.")
    try:
        with open(source, "r", encoding="utf-8") as f:
            rows = json.load(f)
    except (OSError, ValueError) as e:
        raise InputReadFailure(f"Catalog snapshot '{source}' couldn't be read: {e}") from e
    if not isinstance(rows, list):
        raise InputReadFailure(f"Catalog snapshot '{source}' must be a list of rows")
    return rows


def _value(row: Mapping[str, Any], key: str) -> Any:
    if key in row:
        return row[key]
    return row.get(key.lower())


def _catalog_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Pick the introspection columns out of a row keyed in either case."""
    return {key: _value(row, key) for key in CATALOG_COLUMNS}


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


def read_catalog(rows: Iterable[Mapping[str, Any]]) -> Dict[str, TableDescriptor]:
    """
    Group catalog rows into tables keyed by canonical table name.

    Tables keep the order rows arrive in. Rows repeated for the same column
    collapse into one descriptor that keeps the first constraint name seen.
    """
    tables: Dict[str, TableDescriptor] = {}

    for raw in rows:
        row = _catalog_row(raw)
        table_name = _text(row["TBNAME"])
        key = canonical_name(table_name)
        table = tables.get(key)
        if table is None:
            table = TableDescriptor(name=table_name)
            tables[key] = table

        column_name = _text(row["NAME"])
        constraint = _text(row["CONSTNAME"]) or None
        existing = table.column(column_name)
        if existing is not None:
            if existing.constraint_name is None:
                existing.constraint_name = constraint
            continue

        length = row["LENGTH"]
        table.add_column(ColumnDescriptor(
            name=column_name,
            data_type=_text(row["COLTYPE"]) or "",
            not_null=_text(row["NULLS"]) == "N",
            default=row["DEFAULT"],
            length=str(length) if length is not None else None,
            constraint_name=constraint,
            is_identity=_text(row["IDENTITY"]) == "Y",
        ))

    logging.info(f"Loaded {len(tables)} tables from the catalog")
    return tables


__all__ = [
    "CATALOG_QUERY",
    "CATALOG_COLUMNS",
    "CatalogConnection",
    "DbApiCatalog",
    "db2_connection_string",
    "connect_db2",
    "fetch_catalog_rows",
    "load_catalog_rows",
    "read_catalog",
]
