"""
Model normalizer: turns an ERD editor design document into canonical table descriptors.
"""

import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Union
from erd_compose_core.lib.descriptors import (
    ColumnDescriptor,
    TableDescriptor,
    RelationshipEntry,
    RelationshipKind,
    index_tables,
)
from erd_compose_core.lib.errors import InputReadFailure, ReferentialIntegrityViolation


def load_design(source: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
    """Load a design document from a file path, a raw JSON string, or an already parsed mapping."""
    if isinstance(source, Mapping):
        document = dict(source)
    elif isinstance(source, str) and os.path.isfile(source):
        try:
            with open(source, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise InputReadFailure(f"The file '{source}' couldn't be read: {e}") from e
    elif isinstance(source, str) and source.lstrip().startswith("{"):
        try:
            document = json.loads(source)
        except ValueError as e:
            raise InputReadFailure(f"Design document is not valid JSON: {e}") from e
    else:
        raise InputReadFailure(f"The file '{source}' couldn't be read.")

    tables = (document.get("table") or {}).get("tables") if isinstance(document, dict) else None
    if not isinstance(tables, list):
        raise InputReadFailure("Design document has no 'table.tables' list")
    return document


def _tables(document: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return (document.get("table") or {}).get("tables") or []


def _relationships(document: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return (document.get("relationship") or {}).get("relationships") or []


def _option(column: Mapping[str, Any], key: str) -> bool:
    return bool((column.get("option") or {}).get(key, False))


def _is_foreign_key(column: Mapping[str, Any]) -> bool:
    return bool((column.get("ui") or {}).get("fk", False))


def build_relationship_index(document: Mapping[str, Any]) -> Dict[str, RelationshipEntry]:
    """
    Index relationships by the id of the foreign-key column on the right table.

    Raises ReferentialIntegrityViolation when a relationship names a table id
    that is not in the document.
    """
    table_names = {table.get("id"): table.get("name") for table in _tables(document)}
    index: Dict[str, RelationshipEntry] = {}

    for relationship in _relationships(document):
        start = relationship.get("start") or {}
        end = relationship.get("end") or {}
        start_id = start.get("tableId")
        end_id = end.get("tableId")

        for table_id in (start_id, end_id):
            if table_id not in table_names:
                raise ReferentialIntegrityViolation(
                    f"Relationship {relationship.get('id', '')!r} references unknown table id {table_id!r}"
                )

        start_columns = start.get("columnIds") or []
        for position, column_id in enumerate(end.get("columnIds") or []):
            index[column_id] = RelationshipEntry(
                left_table=table_names[start_id],
                left_table_id=start_id,
                right_table=table_names[end_id],
                kind=RelationshipKind.from_editor(relationship.get("relationshipType")),
                left_column_id=start_columns[position] if position < len(start_columns) else None,
            )

    logging.debug(f"Relationship index: {len(index)} foreign-key columns")
    return index


def _referenced_column(raw_table: Mapping[str, Any], entry: RelationshipEntry) -> str:
    columns = raw_table.get("columns") or []
    if entry.left_column_id:
        for column in columns:
            if column.get("id") == entry.left_column_id:
                return column.get("name")

    primary = [column.get("name") for column in columns if _option(column, "primaryKey")]
    if not primary:
        raise ReferentialIntegrityViolation(
            f"Table '{entry.left_table}' is referenced by '{entry.right_table}' but has no primary key"
        )
    # A single-column reference to a composite key points at its last column
    return primary[-1]


def normalize_model(document: Mapping[str, Any], relationships: Optional[Dict[str, RelationshipEntry]] = None) -> Dict[str, TableDescriptor]:
    """
    Build the canonical model tables, keyed by canonical table name.

    Foreign-key columns get their reference resolved through the relationship
    index and are never primary keys. A foreign-key column without a
    relationship aborts with ReferentialIntegrityViolation.
    """
    if relationships is None:
        relationships = build_relationship_index(document)
    raw_by_id = {table.get("id"): table for table in _tables(document)}

    tables = []
    for raw_table in _tables(document):
        table = TableDescriptor(name=raw_table.get("name"), table_id=raw_table.get("id"))

        for column in raw_table.get("columns") or []:
            if not _is_foreign_key(column):
                table.add_column(ColumnDescriptor(
                    name=column.get("name"),
                    data_type=column.get("dataType") or "",
                    not_null=_option(column, "notNull"),
                    default=column.get("default"),
                    is_primary_key=_option(column, "primaryKey"),
                    column_id=column.get("id"),
                ))
                continue

            entry = relationships.get(column.get("id"))
            if entry is None:
                raise ReferentialIntegrityViolation(
                    f"Foreign key column '{raw_table.get('name')}.{column.get('name')}' has no relationship"
                )
            table.add_column(ColumnDescriptor(
                name=column.get("name"),
                data_type=column.get("dataType") or "",
                not_null=_option(column, "notNull"),
                default=column.get("default"),
                is_primary_key=False,
                reference_table=entry.left_table,
                reference_column=_referenced_column(raw_by_id[entry.left_table_id], entry),
                column_id=column.get("id"),
            ))

        tables.append(table)

    logging.info(f"Loaded {len(tables)} tables from the design document")
    return index_tables(tables)


__all__ = [
    "load_design",
    "build_relationship_index",
    "normalize_model",
]
