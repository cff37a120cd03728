"""
Schema reconciliation endpoint.
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from erd_compose_core.api.models import CompareRequest
from erd_compose_core.lib.compare import compare_sources

router = APIRouter()

@router.post("/compare", responses={
    200: {
        "description": "Statements that bring the catalog in line with the design",
        "content": {
            "text/plain": {
                "example": """--------------------------------ADD COLUMN--------------------------------
ALTER TABLE APP.Person ALTER COLUMN name SET DATA TYPE VARCHAR(255);
ALTER TABLE APP.Person ALTER COLUMN name SET NOT NULL;
--------------------------------ADD COLUMN--------------------------------
"""
            },
            "application/json": {
                "example": [
                    {
                        "kind": "alter_column_type",
                        "category": "ADD COLUMN",
                        "table": "Person",
                        "schema": "APP",
                        "column": "name",
                        "data_type": "VARCHAR(255)"
                    }
                ]
            }
        }
    },
    422: {
        "description": "The design document is inconsistent",
        "content": {
            "application/json": {
                "example": {
                    "error": "ReferentialIntegrityViolation",
                    "detail": "Foreign key column 'Orders.fkPerson' has no relationship"
                }
            }
        }
    }
})
async def compare(request: CompareRequest):
    """
    Reconcile a design document with a catalog snapshot.

    The catalog is either posted as rows or, when rows are omitted, queried
    through the DB2 connection string in `dsn`. An empty list is an empty schema.
    """
    if request.output_format not in ["sql", "json"]:
        raise HTTPException(status_code=400, detail="output_format must be 'sql' or 'json'")
    if request.catalog_rows is None and not request.dsn:
        raise HTTPException(status_code=400, detail="Must provide either catalog_rows or dsn")

    if request.catalog_rows is not None:
        catalog = [row.model_dump() for row in request.catalog_rows]
    else:
        catalog = request.dsn

    result = compare_sources(request.design, catalog, schema=request.schema_name)

    if request.output_format == "sql":
        return PlainTextResponse(result.to_sql())
    return JSONResponse(result.to_dict_list())
