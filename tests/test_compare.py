import json
import pytest
from erd_compose_core.lib.compare import compare_sources, load_catalog
from erd_compose_core.lib.descriptors import ChangeKind, ChangeList
from erd_compose_core.lib.errors import CatalogQueryFailure, InputReadFailure, ReferentialIntegrityViolation
from builders import column, table, design, row, FakeCatalog


def test_compare_files(design_file, catalog_file):
    """Test comparing a design file with a matching catalog snapshot file."""
    result = compare_sources(design_file, catalog_file, schema="APP")

    assert isinstance(result, ChangeList)
    assert result == []


def test_compare_with_catalog_connection(design_document, fake_catalog):
    """Test the catalog connection is queried once with the schema."""
    fake_catalog.rows = [r for r in fake_catalog.rows if r["TBNAME"] == "PERSON"]

    result = compare_sources(design_document, fake_catalog, schema="APP")

    assert len(fake_catalog.calls) == 1
    assert fake_catalog.calls[0][1] == ("APP",)
    assert [op.kind for op in result.flatten()] == [ChangeKind.CREATE_TABLE, ChangeKind.ADD_FOREIGN_KEY]
    assert result[0].qualified_name == "APP.Orders"


def test_compare_with_row_list(design_document, matching_rows):
    """Test a raw JSON design against a list of catalog rows."""
    assert compare_sources(json.dumps(design_document), matching_rows, schema="APP") == []


def test_unreadable_design_never_queries_catalog(tmp_path, fake_catalog):
    """Test an unreadable design aborts before the catalog is queried."""
    with pytest.raises(InputReadFailure):
        compare_sources(str(tmp_path / "missing.vuerd.json"), fake_catalog, schema="APP")

    assert fake_catalog.calls == []


def test_inconsistent_design_never_queries_catalog(fake_catalog):
    """Test an inconsistent design aborts before the catalog is queried."""
    orders = table("t2", "Orders", [column("o1", "person", "INT", fk=True)])

    with pytest.raises(ReferentialIntegrityViolation):
        compare_sources(design([orders]), fake_catalog, schema="APP")

    assert fake_catalog.calls == []


def test_catalog_failure_aborts(design_document):
    """Test a failing catalog query aborts the comparison."""
    catalog = FakeCatalog(error=RuntimeError("SQL0204N"))

    with pytest.raises(CatalogQueryFailure, match="SQL0204N"):
        compare_sources(design_document, catalog, schema="APP")


def test_unrecognized_catalog_source():
    """Test catalog sources that are neither file, DSN nor rows are rejected."""
    with pytest.raises(InputReadFailure, match="Unrecognized catalog source"):
        load_catalog("not-a-file-or-dsn", "APP")

    with pytest.raises(InputReadFailure):
        load_catalog(42, "APP")


def test_load_catalog_from_rows():
    """Test a list of rows is read as a catalog."""
    tables = load_catalog([row("PERSON", "ID", "INTEGER")], "APP")
    assert list(tables) == ["PERSON"]


def test_load_catalog_from_no_rows():
    """Test an empty list of rows is an empty schema."""
    assert load_catalog([], "APP") == {}
