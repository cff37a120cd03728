from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any
from enum import Enum
from erd_compose_core.lib.errors import InputReadFailure


def canonical_name(name: Optional[str]) -> str:
    """Key used for every table and column name comparison.

    Catalog identifiers are stored uppercase while the design document keeps
    mixed case, so both sides go through this function before any lookup.
    """
    return (name or "").strip().upper()


def normalize_default(value: Optional[Any]) -> Optional[str]:
    """Collapse the "no default" states ('' and None) into None."""
    if value is None:
        return None
    value = str(value)
    if value.strip() == "":
        return None
    return value


class RelationshipKind(Enum):
    """Cardinality of a relationship between two tables."""
    ONE_TO_MANY = "OneToMany"
    ONE_TO_ONE = "OneToOne"

    @classmethod
    def from_editor(cls, relationship_type: Optional[str]) -> "RelationshipKind":
        # OneN, ZeroN, ZeroOneN are "many" on the right side
        if relationship_type and relationship_type.endswith("N"):
            return cls.ONE_TO_MANY
        return cls.ONE_TO_ONE


@dataclass
class ColumnDescriptor:
    """
    Canonical, comparable form of a column, built from either side of the diff.

    Attributes:
        name: Column name as written by its source (comparison goes through canonical_name)
        data_type: Logical type on the model side, physical base type on the catalog side
        not_null: Whether the column rejects NULL
        default: Default expression, None when there is no default
        is_primary_key: Model side only
        reference_table: Model side, name of the table a foreign key points at
        reference_column: Model side, column of reference_table the foreign key points at
        length: Catalog side, declared length of the physical type
        constraint_name: Catalog side, foreign key constraint already on the column
        is_identity: Catalog side, whether the column is an identity column
        column_id: Model side, identity of the column in the design document
    """
    name: str
    data_type: str
    not_null: bool = False
    default: Optional[str] = None
    is_primary_key: bool = False
    reference_table: Optional[str] = None
    reference_column: Optional[str] = None
    length: Optional[str] = None
    constraint_name: Optional[str] = None
    is_identity: bool = False
    column_id: Optional[str] = None

    def __post_init__(self):
        self.default = normalize_default(self.default)

    @property
    def key(self) -> str:
        return canonical_name(self.name)

    @property
    def is_foreign_key(self) -> bool:
        return self.reference_table is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "data_type": self.data_type,
            "not_null": self.not_null,
            "default": self.default,
            "is_primary_key": self.is_primary_key,
            "reference_table": self.reference_table,
            "reference_column": self.reference_column,
            "length": self.length,
            "constraint_name": self.constraint_name,
            "is_identity": self.is_identity,
        }


@dataclass
class TableDescriptor:
    """
    A table and its columns in declaration (or catalog) order.

    Columns are indexed by canonical name; grow the table with add_column
    so the index stays in step with the list.
    """
    name: str
    columns: List[ColumnDescriptor] = field(default_factory=list)
    table_id: Optional[str] = None
    _by_key: Dict[str, ColumnDescriptor] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._reindex()

    def _reindex(self):
        self._by_key = {}
        for col in self.columns:
            self._by_key.setdefault(col.key, col)

    @property
    def key(self) -> str:
        return canonical_name(self.name)

    def add_column(self, column: ColumnDescriptor):
        self.columns.append(column)
        self._by_key.setdefault(column.key, column)

    def column(self, name: str) -> Optional[ColumnDescriptor]:
        """Case-insensitive column lookup. The first column wins on a repeated name."""
        return self._by_key.get(canonical_name(name))

    def has_column(self, name: str) -> bool:
        return self.column(name) is not None

    @property
    def primary_key_columns(self) -> List[ColumnDescriptor]:
        return [col for col in self.columns if col.is_primary_key]

    def __str__(self) -> str:
        return f"TableDescriptor({self.name}: {len(self.columns)} columns)"


@dataclass
class RelationshipEntry:
    """Where a foreign-key column points, keyed in the index by the column id."""
    left_table: str
    left_table_id: str
    right_table: str
    kind: RelationshipKind = RelationshipKind.ONE_TO_ONE
    left_column_id: Optional[str] = None


def index_tables(tables: List[TableDescriptor]) -> Dict[str, TableDescriptor]:
    """
    Key tables by canonical name, keeping the order they were given in.

    Two tables whose names differ only by case raise InputReadFailure.
    """
    indexed: Dict[str, TableDescriptor] = {}
    for table in tables:
        if table.key in indexed:
            raise InputReadFailure(
                f"Tables '{indexed[table.key].name}' and '{table.name}' have the same name"
            )
        indexed[table.key] = table
    return indexed


__all__ = [
    "canonical_name",
    "normalize_default",
    "RelationshipKind",
    "ColumnDescriptor",
    "TableDescriptor",
    "RelationshipEntry",
    "index_tables",
]
