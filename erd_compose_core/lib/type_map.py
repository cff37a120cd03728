"""
Maps design-document (logical) column types to DB2 catalog (physical) types.
"""

import re
from typing import Optional, Tuple, Union

# Logical type -> physical type with its canonical length
LOGICAL_TO_PHYSICAL = {
    "VARCHAR": "VARCHAR(255)",
    "LONGTEXT": "VARCHAR(16320)",
    "TEXT": "VARCHAR(10000)",
    "MEDIUMTEXT": "VARCHAR(5000)",
    "BINARY": "BINARY(255)",
    "BLOB": "BLOB(100000000)",
    "CHAR": "CHARACTER(255)",
    "JSON": "VARCHAR(16320)",
    "LINESTRING": "VARCHAR(255)",
    "LONGBLOB": "BLOB(2147483647)",
    "TIMESTAMP": "VARCHAR(26)",
    "DATETIME": "VARCHAR(26)",
    "TIME": "VARCHAR(8)",
    "SET": "VARCHAR(255)",
    "TINYBLOB": "BLOB(100000)",
    "TINYTEXT": "VARCHAR(2500)",
    "VARBINARY": "VARBINARY(132704)",
    "GEOMETRY": "GRAPHIC(128)",
    "GEOMETRYCOLLECTION": "VARGRAPHIC(16352)",
    "INT": "INTEGER",
}

_LENGTH_SUFFIX = re.compile(r'^\s*(?P<base>[^(]*?)\s*\((?P<length>[^)]*)\)\s*$')


def to_physical(logical_type: str) -> str:
    """
    Physical type for a logical type, length included.

    Unrecognized types pass through exactly as written.
    """
    if logical_type is None:
        return ""
    return LOGICAL_TO_PHYSICAL.get(logical_type.strip().upper(), logical_type)


def physical_to_logical(physical_type: str, length: Optional[Union[str, int]] = None) -> str:
    """First logical type whose canonical physical type matches, else the physical type itself."""
    base, declared = split_type(physical_type)
    if length is None:
        length = declared
    wanted = f"{base}({length})" if length is not None else base
    for logical, physical in LOGICAL_TO_PHYSICAL.items():
        if physical == wanted:
            return logical
    return physical_type


def split_type(type_str: str) -> Tuple[str, Optional[str]]:
    """Split 'VARCHAR(255)' into ('VARCHAR', '255'); types without a suffix get None."""
    if not type_str:
        return "", None
    match = _LENGTH_SUFFIX.match(type_str)
    if not match:
        return type_str.strip(), None
    return match.group("base"), match.group("length").strip()


def _precision(length: Optional[Union[str, int]]) -> Optional[str]:
    # DECIMAL(10,2) is compared on its precision, the catalog LENGTH has no scale
    if length is None:
        return None
    return str(length).split(",")[0].strip()


def types_differ(logical_type: str, physical_type: str, physical_length: Optional[Union[str, int]] = None) -> bool:
    """
    Whether a model column type needs an ALTER to match the catalog.

    Base type names are compared case-sensitively after normalization; the
    length only counts when the model type declares one.
    """
    model_base, model_length = split_type(to_physical(logical_type))
    catalog_base, catalog_length = split_type((physical_type or "").strip())
    if physical_length is not None:
        catalog_length = physical_length

    if model_base != catalog_base:
        return True
    if model_length is not None and _precision(model_length) != _precision(catalog_length):
        return True
    return False


__all__ = [
    "LOGICAL_TO_PHYSICAL",
    "to_physical",
    "physical_to_logical",
    "split_type",
    "types_differ",
]
