"""
Diff engine: compares canonical model tables with the catalog snapshot.
Generates the ordered change operations that bring the catalog in line with the model.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Union
from erd_compose_core.lib.descriptors import (
    ColumnDescriptor,
    TableDescriptor,
    ChangeList,
    ChangeOperation,
    CreateTable,
    AddColumn,
    AlterColumnType,
    AlterColumnNullability,
    AlterColumnDefault,
    DropPrimaryKey,
    SetPrimaryKey,
    AddForeignKey,
    DropColumn,
    DropTable,
    canonical_name,
    index_tables,
)
from erd_compose_core.lib.errors import ReferentialIntegrityViolation
from erd_compose_core.lib.type_map import to_physical, types_differ

TableSet = Union[Mapping[str, TableDescriptor], Iterable[TableDescriptor]]


def _index(tables: TableSet) -> Dict[str, TableDescriptor]:
    # Re-key by canonical name whatever the caller keyed by
    if isinstance(tables, Mapping):
        tables = tables.values()
    return index_tables(list(tables))


def diff_schemas(model_tables: TableSet, catalog_tables: TableSet, schema: Optional[str] = None) -> ChangeList:
    """
    Generate the change operations needed to turn the catalog into the model.

    Returns a ChangeList in emission order: table creations, column additions
    and alterations (each with its chained assertions), column drops, foreign
    keys, table drops.
    """
    model = _index(model_tables)
    catalog = _index(catalog_tables)

    create_ops: List[ChangeOperation] = []
    add_ops: List[ChangeOperation] = []
    drop_column_ops: List[ChangeOperation] = []
    foreign_ops: List[ChangeOperation] = []
    drop_table_ops: List[ChangeOperation] = []

    for key, table in model.items():
        db_table = catalog.get(key)

        if db_table is None:
            logging.debug(f"Table {table.name} missing from catalog, creating it")
            create_ops.append(CreateTable(table=table.name, schema=schema, columns=list(table.columns)))
            for column in table.columns:
                if column.is_foreign_key:
                    foreign_ops.append(_foreign_key(table, column, model, schema))
            continue

        for column in table.columns:
            db_column = db_table.column(column.name)

            if db_column is None:
                logging.debug(f"Column {table.name}.{column.name} missing from catalog, adding it")
                add_ops.append(_add_column(table, column, schema))
                if column.is_foreign_key:
                    foreign_ops.append(_foreign_key(table, column, model, schema))
                continue

            add_ops.extend(_alter_column(table, column, db_column, schema))

            # Relationship added on a column that already exists
            if column.is_foreign_key and db_column.constraint_name is None:
                foreign_ops.append(_foreign_key(table, column, model, schema))

        for db_column in db_table.columns:
            if not table.has_column(db_column.name):
                logging.debug(f"Column {db_table.name}.{db_column.name} not in model, dropping it")
                # Last found is dropped first
                drop_column_ops.insert(0, DropColumn(table=table.name, schema=schema, column_name=db_column.name))

    for key, db_table in catalog.items():
        if key not in model:
            logging.debug(f"Table {db_table.name} not in model, dropping it")
            drop_table_ops.append(DropTable(table=db_table.name, schema=schema))

    result = ChangeList(create_ops + add_ops + drop_column_ops + foreign_ops + drop_table_ops)
    logging.info(f"Generated {len(result)} change operations ({len(result.flatten())} statements)")
    return result


def _add_column(table: TableDescriptor, column: ColumnDescriptor, schema: Optional[str]) -> AddColumn:
    """ADD COLUMN with its follow-up assertions chained in emission order."""
    op = AddColumn(table=table.name, schema=schema, column=column)

    if column.not_null:
        op.chained.append(AlterColumnNullability(
            table=table.name, schema=schema, column_name=column.name, not_null=True
        ))
    if column.default is not None:
        op.chained.append(AlterColumnDefault(
            table=table.name, schema=schema, column_name=column.name, default=column.default
        ))
    if column.is_primary_key:
        # Key is rebuilt over every primary-key column of the model table
        op.chained.append(DropPrimaryKey(table=table.name, schema=schema))
        op.chained.append(SetPrimaryKey(
            table=table.name, schema=schema, columns=[col.name for col in table.primary_key_columns]
        ))
    return op


def _alter_column(table: TableDescriptor, column: ColumnDescriptor, db_column: ColumnDescriptor, schema: Optional[str]) -> List[ChangeOperation]:
    """Type, nullability and default are compared independently."""
    commands: List[ChangeOperation] = []

    if types_differ(column.data_type, db_column.data_type, db_column.length):
        logging.debug(
            f"Type change on {table.name}.{column.name}: "
            f"{db_column.data_type}({db_column.length}) -> {to_physical(column.data_type)}"
        )
        commands.append(AlterColumnType(
            table=table.name, schema=schema, column_name=column.name, data_type=to_physical(column.data_type)
        ))

    if column.not_null != db_column.not_null:
        commands.append(AlterColumnNullability(
            table=table.name, schema=schema, column_name=column.name, not_null=column.not_null
        ))

    # Both defaults are already normalized: no default is None on either side
    if column.default != db_column.default:
        commands.append(AlterColumnDefault(
            table=table.name, schema=schema, column_name=column.name, default=column.default
        ))

    return commands


def _foreign_key(table: TableDescriptor, column: ColumnDescriptor, model: Dict[str, TableDescriptor], schema: Optional[str]) -> AddForeignKey:
    referenced = model.get(canonical_name(column.reference_table))
    if referenced is None:
        raise ReferentialIntegrityViolation(
            f"Foreign key {table.name}.{column.name} references unknown table '{column.reference_table}'"
        )

    reference_column = column.reference_column
    if reference_column is None:
        primary = referenced.primary_key_columns
        if not primary:
            raise ReferentialIntegrityViolation(
                f"Foreign key {table.name}.{column.name} references '{referenced.name}' which has no primary key"
            )
        reference_column = primary[-1].name

    return AddForeignKey(
        table=table.name,
        schema=schema,
        column_name=column.name,
        reference_table=referenced.name,
        reference_column=reference_column,
    )


__all__ = [
    "diff_schemas",
]
