"""
Core library functionality for reconciling ERD design documents with a DB2 catalog.
"""

from erd_compose_core.lib.descriptors import (
    ColumnDescriptor,
    TableDescriptor,
    RelationshipEntry,
    RelationshipKind,
    ChangeKind,
    ChangeCategory,
    ChangeOperation,
    ChangeList,
)
from erd_compose_core.lib.type_map import to_physical, types_differ
from erd_compose_core.lib.model import load_design, normalize_model, build_relationship_index
from erd_compose_core.lib.catalog import read_catalog, fetch_catalog_rows, DbApiCatalog, connect_db2
from erd_compose_core.lib.diff import diff_schemas
from erd_compose_core.lib.emitter import emit
from erd_compose_core.lib.compare import compare_sources, load_model, load_catalog
from erd_compose_core.lib.deploy import diff_script, deploy
from erd_compose_core.lib.errors import (
    ErdComposeError,
    InputReadFailure,
    CatalogQueryFailure,
    ReferentialIntegrityViolation,
)

__all__ = [
    # Descriptors
    "ColumnDescriptor",
    "TableDescriptor",
    "RelationshipEntry",
    "RelationshipKind",
    "ChangeKind",
    "ChangeCategory",
    "ChangeOperation",
    "ChangeList",

    # Normalizers
    "to_physical",
    "types_differ",
    "load_design",
    "normalize_model",
    "build_relationship_index",
    "read_catalog",
    "fetch_catalog_rows",
    "DbApiCatalog",
    "connect_db2",

    # Diff and output
    "diff_schemas",
    "emit",
    "compare_sources",
    "load_model",
    "load_catalog",
    "diff_script",
    "deploy",

    # Errors
    "ErdComposeError",
    "InputReadFailure",
    "CatalogQueryFailure",
    "ReferentialIntegrityViolation",
]
