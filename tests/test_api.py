import pytest
from fastapi.testclient import TestClient
from erd_compose_core.api import app
from builders import column, table, design, row


@pytest.fixture
def client():
    return TestClient(app)


def compare_body(design_document, rows, **extra):
    body = {"schema_name": "APP", "design": design_document, "catalog_rows": rows}
    body.update(extra)
    return body


def test_health(client):
    """Test the health endpoint reports status and version."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == "0.1.0"


def test_home_renders_readme(client):
    """Test the home page renders the README as HTML."""
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]


def test_unknown_endpoint(client):
    """Test unknown paths return a JSON 404 naming the path."""
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json()["path"] == "/nope"


def test_compare_sql(client, design_document, matching_rows):
    """Test compare returns the migration script as plain text."""
    rows = matching_rows + [row("LEGACY", "ID", "INTEGER")]

    response = client.post("/compare", json=compare_body(design_document, rows))

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "DROP TABLE APP.LEGACY;" in response.text


def test_compare_json(client, design_document, matching_rows):
    """Test compare returns the change list as JSON."""
    rows = [r for r in matching_rows if r["TBNAME"] == "PERSON"]

    response = client.post("/compare", json=compare_body(design_document, rows, output_format="json"))

    assert response.status_code == 200
    changes = response.json()
    assert [c["kind"] for c in changes] == ["create_table", "add_foreign_key"]
    assert changes[0]["primary_key"] == ["id"]
    assert changes[1]["reference_table"] == "Person"


def test_compare_in_sync_returns_empty_script(client, design_document, matching_rows):
    """Test compare of a schema in sync returns an empty script."""
    response = client.post("/compare", json=compare_body(design_document, matching_rows))

    assert response.status_code == 200
    assert response.text == ""


def test_bad_output_format(client, design_document, matching_rows):
    """Test an unknown output format is rejected."""
    response = client.post("/compare", json=compare_body(design_document, matching_rows, output_format="xml"))
    assert response.status_code == 400


def test_catalog_source_required(client, design_document):
    """Test a request with neither catalog rows nor a connection string is rejected."""
    response = client.post("/compare", json={"schema_name": "APP", "design": design_document})

    assert response.status_code == 400
    assert "catalog_rows or dsn" in response.json()["detail"]


def test_empty_catalog_rows_is_an_empty_schema(client, design_document):
    """Test an empty catalog snapshot creates every design table."""
    response = client.post("/compare", json=compare_body(design_document, []))

    assert response.status_code == 200
    assert "-" * 31 + "CREATE TABLE" + "-" * 31 in response.text
    assert "-" * 31 + "FOREIGN KEY" in response.text
    assert "CREATE TABLE APP.Person(" in response.text
    assert "CREATE TABLE APP.Orders(" in response.text


def test_design_without_tables(client, matching_rows):
    """Test a design without tables maps to a 400."""
    response = client.post("/compare", json=compare_body({"relationship": {}}, matching_rows))

    assert response.status_code == 400
    assert response.json()["error"] == "InputReadFailure"


def test_inconsistent_design(client, matching_rows):
    """Test a design with a dangling foreign key maps to a 422."""
    orders = table("t2", "Orders", [column("o1", "person", "INT", fk=True)])

    response = client.post("/compare", json=compare_body(design([orders]), matching_rows))

    assert response.status_code == 422
    assert response.json()["error"] == "ReferentialIntegrityViolation"


def test_invalid_catalog_row(client, design_document):
    """Test catalog rows missing required fields fail validation."""
    response = client.post("/compare", json=compare_body(design_document, [{"TBNAME": "PERSON"}]))
    assert response.status_code == 422
