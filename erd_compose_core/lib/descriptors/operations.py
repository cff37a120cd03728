from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum
from erd_compose_core.lib.descriptors.objects import ColumnDescriptor


class ChangeKind(Enum):
    """Enumeration of the schema changes the diff engine can decide on."""
    CREATE_TABLE = "create_table"
    ADD_COLUMN = "add_column"
    ALTER_COLUMN_TYPE = "alter_column_type"
    ALTER_COLUMN_NULLABILITY = "alter_column_nullability"
    ALTER_COLUMN_DEFAULT = "alter_column_default"
    DROP_PRIMARY_KEY = "drop_primary_key"
    SET_PRIMARY_KEY = "set_primary_key"
    ADD_FOREIGN_KEY = "add_foreign_key"
    DROP_COLUMN = "drop_column"
    DROP_TABLE = "drop_table"
    UNKNOWN = "unknown"


class ChangeCategory(Enum):
    """Output sections. Declaration order is emission order."""
    CREATE_TABLE = "CREATE TABLE"
    ADD_COLUMN = "ADD COLUMN"
    DROP_COLUMN = "DROP COLUMN"
    FOREIGN_KEY = "FOREIGN KEY"
    DROP_TABLE = "DROP TABLE"


CATEGORY_ORDER: List[ChangeCategory] = list(ChangeCategory)

_KIND_CATEGORY = {
    ChangeKind.CREATE_TABLE: ChangeCategory.CREATE_TABLE,
    ChangeKind.ADD_COLUMN: ChangeCategory.ADD_COLUMN,
    ChangeKind.ALTER_COLUMN_TYPE: ChangeCategory.ADD_COLUMN,
    ChangeKind.ALTER_COLUMN_NULLABILITY: ChangeCategory.ADD_COLUMN,
    ChangeKind.ALTER_COLUMN_DEFAULT: ChangeCategory.ADD_COLUMN,
    ChangeKind.DROP_PRIMARY_KEY: ChangeCategory.ADD_COLUMN,
    ChangeKind.SET_PRIMARY_KEY: ChangeCategory.ADD_COLUMN,
    ChangeKind.ADD_FOREIGN_KEY: ChangeCategory.FOREIGN_KEY,
    ChangeKind.DROP_COLUMN: ChangeCategory.DROP_COLUMN,
    ChangeKind.DROP_TABLE: ChangeCategory.DROP_TABLE,
}


@dataclass
class ChangeOperation:
    """
    One schema modification decided by the diff engine.

    Attributes:
        table: Table the change applies to, as named by the side that triggered it
        schema: Schema used to qualify the rendered statement
        kind: Which change this is
        chained: Follow-up operations that must be emitted right after this one
    """
    table: str
    schema: Optional[str] = None
    kind: ChangeKind = ChangeKind.UNKNOWN
    chained: List["ChangeOperation"] = field(default_factory=list)

    @property
    def category(self) -> ChangeCategory:
        return _KIND_CATEGORY.get(self.kind, ChangeCategory.ADD_COLUMN)

    @property
    def qualified_name(self) -> str:
        """Get the fully qualified table name (schema.table)."""
        if self.schema and self.table:
            return f"{self.schema}.{self.table}"
        return self.table or ""

    def flatten(self) -> List["ChangeOperation"]:
        """This operation followed by its chained operations, depth first."""
        ops = [self]
        for op in self.chained:
            ops.extend(op.flatten())
        return ops

    @property
    def command(self) -> str:
        # Import here to avoid circular dependency
        from erd_compose_core.lib.emitter import render_operation
        return render_operation(self)

    def _details(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "kind": self.kind.value,
            "category": self.category.value,
            "table": self.table,
            "schema": self.schema,
        }
        data.update(self._details())
        if self.chained:
            data["chained"] = [op.to_dict() for op in self.chained]
        return data

    def __str__(self) -> str:
        return f"ChangeOperation({self.kind.value}: {self.qualified_name})"


@dataclass
class CreateTable(ChangeOperation):
    columns: List[ColumnDescriptor] = field(default_factory=list)

    def __post_init__(self):
        self.kind = ChangeKind.CREATE_TABLE

    @property
    def primary_key(self) -> List[str]:
        return [col.name for col in self.columns if col.is_primary_key]

    def _details(self) -> Dict[str, Any]:
        return {
            "columns": [col.to_dict() for col in self.columns],
            "primary_key": self.primary_key,
        }


@dataclass
class AddColumn(ChangeOperation):
    column: Optional[ColumnDescriptor] = None

    def __post_init__(self):
        self.kind = ChangeKind.ADD_COLUMN

    def _details(self) -> Dict[str, Any]:
        return {"column": self.column.to_dict() if self.column else None}


@dataclass
class AlterColumnType(ChangeOperation):
    column_name: str = ""
    data_type: str = ""

    def __post_init__(self):
        self.kind = ChangeKind.ALTER_COLUMN_TYPE

    def _details(self) -> Dict[str, Any]:
        return {"column": self.column_name, "data_type": self.data_type}


@dataclass
class AlterColumnNullability(ChangeOperation):
    column_name: str = ""
    not_null: bool = False

    def __post_init__(self):
        self.kind = ChangeKind.ALTER_COLUMN_NULLABILITY

    def _details(self) -> Dict[str, Any]:
        return {"column": self.column_name, "not_null": self.not_null}


@dataclass
class AlterColumnDefault(ChangeOperation):
    """Set a default; a None default clears it."""
    column_name: str = ""
    default: Optional[str] = None

    def __post_init__(self):
        self.kind = ChangeKind.ALTER_COLUMN_DEFAULT

    def _details(self) -> Dict[str, Any]:
        return {"column": self.column_name, "default": self.default}


@dataclass
class DropPrimaryKey(ChangeOperation):

    def __post_init__(self):
        self.kind = ChangeKind.DROP_PRIMARY_KEY


@dataclass
class SetPrimaryKey(ChangeOperation):
    columns: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.kind = ChangeKind.SET_PRIMARY_KEY

    def _details(self) -> Dict[str, Any]:
        return {"columns": list(self.columns)}


@dataclass
class AddForeignKey(ChangeOperation):
    column_name: str = ""
    reference_table: str = ""
    reference_column: str = ""

    def __post_init__(self):
        self.kind = ChangeKind.ADD_FOREIGN_KEY

    @property
    def qualified_reference(self) -> str:
        if self.schema:
            return f"{self.schema}.{self.reference_table}"
        return self.reference_table

    def _details(self) -> Dict[str, Any]:
        return {
            "column": self.column_name,
            "reference_table": self.reference_table,
            "reference_column": self.reference_column,
        }


@dataclass
class DropColumn(ChangeOperation):
    column_name: str = ""

    def __post_init__(self):
        self.kind = ChangeKind.DROP_COLUMN

    def _details(self) -> Dict[str, Any]:
        return {"column": self.column_name}


@dataclass
class DropTable(ChangeOperation):

    def __post_init__(self):
        self.kind = ChangeKind.DROP_TABLE


__all__ = [
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
]
