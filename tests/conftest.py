import json
import pytest
from builders import person_orders_design, row, FakeCatalog


@pytest.fixture
def design_document():
    return person_orders_design()


@pytest.fixture
def matching_rows():
    """Catalog rows that already match person_orders_design()."""
    return [
        row("ORDERS", "ID", "INTEGER", nulls="N", identity="Y"),
        row("ORDERS", "TOTAL", "DECIMAL", length=10, default="0"),
        row("ORDERS", "FKPERSON", "INTEGER", nulls="N", constname="FK_ORDERS_PERSON"),
        row("PERSON", "ID", "INTEGER", nulls="N", identity="Y"),
        row("PERSON", "NAME", "VARCHAR", length=255, nulls="N"),
    ]


@pytest.fixture
def fake_catalog(matching_rows):
    return FakeCatalog(matching_rows)


@pytest.fixture
def design_file(tmp_path, design_document):
    path = tmp_path / "model.vuerd.json"
    path.write_text(json.dumps(design_document), encoding="utf-8")
    return str(path)


@pytest.fixture
def catalog_file(tmp_path, matching_rows):
    path = tmp_path / "columns.json"
    path.write_text(json.dumps(matching_rows), encoding="utf-8")
    return str(path)
