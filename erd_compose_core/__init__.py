"""
erd-compose: reconcile ERD design documents with a DB2 catalog

This package compares the tables described by an ERD editor design file with
the live structure of a DB2 schema and generates the CREATE, ALTER and DROP
statements that bring the schema in line with the design.
"""

__version__ = "0.1.0"

# Import core library functionality
from erd_compose_core.lib import (
    compare_sources,
    diff_schemas,
    emit,
    ChangeList,
    ChangeOperation,
)

# Import CLI and API interfaces
from erd_compose_core.cli import main
from erd_compose_core.api import app

__all__ = [
    # Core library exports
    "compare_sources",
    "diff_schemas",
    "emit",
    "ChangeList",
    "ChangeOperation",

    # Interface exports
    "main",
    "app"
]
