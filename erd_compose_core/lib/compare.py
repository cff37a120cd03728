from erd_compose_core.lib.catalog import connect_db2, fetch_catalog_rows, load_catalog_rows, read_catalog
from erd_compose_core.lib.descriptors import ChangeList, ChangeCategory, TableDescriptor
from erd_compose_core.lib.diff import diff_schemas
from erd_compose_core.lib.errors import InputReadFailure
from erd_compose_core.lib.model import load_design, normalize_model
import logging
import os
from typing import Any, Dict, Iterable, Mapping, Union


def load_model(source: Union[str, Mapping[str, Any]]) -> Dict[str, TableDescriptor]:
    """Load model tables from a design file path, raw JSON string, or parsed document."""
    return normalize_model(load_design(source))


def load_catalog(source: Any, schema: str) -> Dict[str, TableDescriptor]:
    """Load catalog tables from a catalog connection, a DB2 connection string, a JSON snapshot, or a list of rows."""
    if hasattr(source, "query"):
        return read_catalog(fetch_catalog_rows(source, schema))

    if isinstance(source, str):
        if os.path.isfile(source):
            return read_catalog(load_catalog_rows(source))
        if "DATABASE=" in source.upper():
            with connect_db2(source) as catalog:
                return read_catalog(fetch_catalog_rows(catalog, schema))
        raise InputReadFailure(f"Unrecognized catalog source '{source}'")

    if isinstance(source, Iterable):
        return read_catalog(list(source))

    raise InputReadFailure(f"Unrecognized catalog source of type {type(source).__name__}")


def compare_sources(
    design: Union[str, Mapping[str, Any]],
    catalog: Any,
    *,
    schema: str
) -> ChangeList:
    """
    Reconcile a design document against the catalog of one schema.

    The design is loaded and normalized before the catalog is touched, so an
    unreadable design never costs a catalog round trip.
    """
    model_tables = load_model(design)
    catalog_tables = load_catalog(catalog, schema)

    result = diff_schemas(model_tables, catalog_tables, schema=schema)

    if logging.getLogger().isEnabledFor(logging.INFO):
        grouped = result.by_category()
        for category in ChangeCategory:
            for op in grouped[category]:
                logging.info(f"[{category.value}] {op.qualified_name}")

    return result
