"""
Pydantic models for API requests and responses.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class CatalogRow(BaseModel):
    """One SYSIBM.SYSCOLUMNS row as returned by the introspection query."""
    TBNAME: str = Field(..., description="Table name")
    NAME: str = Field(..., description="Column name")
    IDENTITY: Optional[str] = Field("N", description="'Y' for identity columns")
    COLTYPE: str = Field(..., description="Physical type")
    LENGTH: Optional[int] = Field(None, description="Length or precision")
    NULLS: str = Field("Y", description="'Y' when the column accepts NULL")
    DEFAULT: Optional[str] = Field(None, description="Default expression")
    CONSTNAME: Optional[str] = Field(None, description="Foreign key constraint on the column")


class CompareRequest(BaseModel):
    """Request model for reconciling a design document with a catalog."""
    schema_name: str = Field(..., description="Schema the statements are qualified with")
    design: Dict[str, Any] = Field(..., description="Design document exported by the ERD editor")
    catalog_rows: Optional[List[CatalogRow]] = Field(None, description="Catalog snapshot rows, [] for an empty schema")
    dsn: Optional[str] = Field(None, description="DB2 connection string, queried when catalog_rows is omitted")
    output_format: str = Field("sql", description="Output format: sql or json")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(..., description="healthy when the service is up")
    timestamp: str = Field(..., description="Server time")
    version: str = Field(..., description="Service version")


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error kind")
    detail: str = Field(..., description="What went wrong")
