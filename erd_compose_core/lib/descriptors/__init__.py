from erd_compose_core.lib.descriptors.objects import (
    canonical_name,
    normalize_default,
    RelationshipKind,
    ColumnDescriptor,
    TableDescriptor,
    RelationshipEntry,
    index_tables,
)
from erd_compose_core.lib.descriptors.operations import (
    ChangeKind,
    ChangeCategory,
    CATEGORY_ORDER,
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
)
from erd_compose_core.lib.descriptors.list import ChangeList

__all__ = [
    "canonical_name",
    "normalize_default",
    "RelationshipKind",
    "ColumnDescriptor",
    "TableDescriptor",
    "RelationshipEntry",
    "index_tables",
    "ChangeKind",
    "ChangeCategory",
    "CATEGORY_ORDER",
    "ChangeOperation",
    "CreateTable",
    "AddColumn",
    "AlterColumnType",
    "AlterColumnNullability",
    "AlterColumnDefault",
    "DropPrimaryKey",
    "SetPrimaryKey",
    "AddForeignKey",
    "DropColumn",
    "DropTable",
    "ChangeList",
]
