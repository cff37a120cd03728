"""
Renders change operations as DB2 statements, grouped under banner sections.
"""

from typing import Dict, Iterable, List
from erd_compose_core.lib.descriptors import (
    CATEGORY_ORDER,
    ChangeCategory,
    ChangeKind,
    ChangeOperation,
    ColumnDescriptor,
)
from erd_compose_core.lib.type_map import to_physical

BANNER_WIDTH = 74
INDENT = "   "

# Dash runs are fixed per section, not centred
_BANNER_LEAD = {
    ChangeCategory.CREATE_TABLE: 31,
    ChangeCategory.ADD_COLUMN: 32,
    ChangeCategory.DROP_COLUMN: 31,
    ChangeCategory.FOREIGN_KEY: 31,
    ChangeCategory.DROP_TABLE: 31,
}


def banner(category: ChangeCategory) -> str:
    return ("-" * _BANNER_LEAD[category] + category.value).ljust(BANNER_WIDTH, "-")


def column_sql(column: ColumnDescriptor) -> str:
    """Column definition as used by CREATE TABLE and ADD COLUMN."""
    sql = f"{column.name} {to_physical(column.data_type)}"
    if column.not_null:
        sql += " NOT NULL"
    if column.default is not None:
        sql += f" DEFAULT {column.default}"
    if column.is_primary_key:
        sql += " GENERATED BY DEFAULT AS IDENTITY"
    return sql


def _alter(op: ChangeOperation) -> str:
    return f"ALTER TABLE {op.qualified_name}"


def render_operation(op: ChangeOperation) -> str:
    """Statement text for a single operation, chained operations excluded."""
    if op.kind == ChangeKind.CREATE_TABLE:
        lines = [f"{INDENT}{column_sql(col)}" for col in op.columns]
        if op.primary_key:
            lines.append(f"{INDENT}PRIMARY KEY({', '.join(op.primary_key)})")
        body = ",\n".join(lines)
        return f"CREATE TABLE {op.qualified_name}(\n{body}\n);"

    if op.kind == ChangeKind.ADD_COLUMN:
        return f"{_alter(op)} ADD COLUMN {column_sql(op.column)};"

    if op.kind == ChangeKind.ALTER_COLUMN_TYPE:
        return f"{_alter(op)} ALTER COLUMN {op.column_name} SET DATA TYPE {op.data_type};"

    if op.kind == ChangeKind.ALTER_COLUMN_NULLABILITY:
        if op.not_null:
            return f"{_alter(op)} ALTER COLUMN {op.column_name} SET NOT NULL;"
        return f"{_alter(op)} ALTER COLUMN {op.column_name} DROP NOT NULL;"

    if op.kind == ChangeKind.ALTER_COLUMN_DEFAULT:
        default = op.default if op.default is not None else "null"
        return f"{_alter(op)} ALTER COLUMN {op.column_name} SET DEFAULT {default};"

    if op.kind == ChangeKind.DROP_PRIMARY_KEY:
        return f"{_alter(op)} DROP PRIMARY KEY;"

    if op.kind == ChangeKind.SET_PRIMARY_KEY:
        return f"{_alter(op)} ADD PRIMARY KEY ({', '.join(op.columns)});"

    if op.kind == ChangeKind.ADD_FOREIGN_KEY:
        return (
            f"{_alter(op)}\n"
            f"{INDENT}ADD FOREIGN KEY ({op.column_name})\n"
            f"{INDENT * 2}REFERENCES {op.qualified_reference} ({op.reference_column})\n"
            f"{INDENT * 3}ON UPDATE RESTRICT\n"
            f"{INDENT * 3}ON DELETE CASCADE;"
        )

    if op.kind == ChangeKind.DROP_COLUMN:
        return f"{_alter(op)} DROP COLUMN {op.column_name};"

    if op.kind == ChangeKind.DROP_TABLE:
        return f"DROP TABLE {op.qualified_name};"

    raise ValueError(f"Cannot render operation of kind {op.kind.value}")


def render_statements(operations: Iterable[ChangeOperation]) -> List[str]:
    """Statements in order, each operation followed by its chained operations."""
    statements = []
    for op in operations:
        statements.extend(render_operation(item) for item in op.flatten())
    return statements


def emit(operations: Iterable[ChangeOperation]) -> str:
    """
    Full script: one banner-delimited section per non-empty category, in the fixed category order.

    Returns an empty string when there are no operations.
    """
    grouped: Dict[ChangeCategory, List[ChangeOperation]] = {category: [] for category in CATEGORY_ORDER}
    for op in operations:
        grouped[op.category].append(op)

    sections = []
    for category in CATEGORY_ORDER:
        statements = render_statements(grouped[category])
        if not statements:
            continue
        separator = "\n\n" if category in (ChangeCategory.CREATE_TABLE, ChangeCategory.FOREIGN_KEY) else "\n"
        sections.append(f"{banner(category)}\n{separator.join(statements)}\n{banner(category)}\n")

    return "\n".join(sections)


__all__ = [
    "BANNER_WIDTH",
    "banner",
    "column_sql",
    "render_operation",
    "render_statements",
    "emit",
]
