"""
Tests for mapping logical design types to DB2 physical types.
"""

import pytest
from erd_compose_core.lib.type_map import (
    LOGICAL_TO_PHYSICAL,
    to_physical,
    physical_to_logical,
    split_type,
    types_differ,
)


@pytest.mark.parametrize("logical, physical", [
    ("VARCHAR", "VARCHAR(255)"),
    ("TEXT", "VARCHAR(10000)"),
    ("INT", "INTEGER"),
    ("BLOB", "BLOB(100000000)"),
    ("CHAR", "CHARACTER(255)"),
    ("GEOMETRYCOLLECTION", "VARGRAPHIC(16352)"),
])
def test_known_types_map_to_physical(logical, physical):
    """Test known logical types map to their physical type and length."""
    assert to_physical(logical) == physical


def test_lookup_ignores_case():
    """Test lower-case logical types are found in the lookup table."""
    assert to_physical("varchar") == "VARCHAR(255)"
    assert to_physical("int") == "INTEGER"


def test_unknown_types_pass_through_unchanged():
    """Test unrecognized types are returned exactly as written."""
    assert to_physical("DECIMAL(10,2)") == "DECIMAL(10,2)"
    assert to_physical("VARCHAR(100)") == "VARCHAR(100)"
    assert to_physical("bigint") == "bigint"


def test_every_mapping_has_a_base_type():
    """Test every physical type in the table splits into a base type."""
    for logical, physical in LOGICAL_TO_PHYSICAL.items():
        base, _ = split_type(physical)
        assert base, logical


def test_split_type():
    """Test type strings split into base type and length suffix."""
    assert split_type("VARCHAR(255)") == ("VARCHAR", "255")
    assert split_type("DECIMAL(10, 2)") == ("DECIMAL", "10, 2")
    assert split_type("INTEGER") == ("INTEGER", None)
    assert split_type("") == ("", None)


def test_physical_to_logical():
    """Test the reverse lookup returns the first matching logical type."""
    assert physical_to_logical("VARCHAR", 255) == "VARCHAR"
    assert physical_to_logical("INTEGER") == "INT"
    assert physical_to_logical("BLOB(2147483647)") == "LONGBLOB"
    assert physical_to_logical("SMALLINT") == "SMALLINT"


def test_varchar_length_mismatch_differs():
    """Test VARCHAR against a catalog length of 100 needs an alter."""
    assert types_differ("VARCHAR", "VARCHAR", "100") is True


def test_varchar_canonical_length_matches():
    """Test VARCHAR against a catalog length of 255 needs nothing."""
    assert types_differ("VARCHAR", "VARCHAR", "255") is False
    assert types_differ("VARCHAR", "VARCHAR", 255) is False


def test_length_ignored_when_model_declares_none():
    """Test the catalog length is ignored when the model type has none."""
    assert types_differ("INT", "INTEGER", "4") is False


def test_base_type_mismatch_differs():
    """Test different base types need an alter."""
    assert types_differ("INT", "BIGINT") is True
    assert types_differ("TEXT", "CLOB", "10000") is True


def test_base_type_comparison_is_case_sensitive():
    """Test base type names are compared as stored."""
    assert types_differ("bigint", "BIGINT") is True


def test_decimal_compares_precision_only():
    """Test DECIMAL(p,s) is compared on its precision."""
    assert types_differ("DECIMAL(10,2)", "DECIMAL", 10) is False
    assert types_differ("DECIMAL(12,2)", "DECIMAL", 10) is True


def test_catalog_type_is_trimmed():
    """Test padding on the catalog type is ignored."""
    assert types_differ("VARCHAR", "VARCHAR  ", "255") is False
