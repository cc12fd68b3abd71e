"""
CIM Type Mapper Unit Tests.

Tests for CIM primitive to Dgraph type mapping functionality.
"""

import pytest

from formats.xmi.cim_models import CIMProperty, PropertyResolution
from formats.xmi.xmi_type_mapper import (
    CIMTypeMapper,
    CIM_TYPE_MAPPINGS,
    DgraphValueType,
    list_of,
)


@pytest.mark.unit
class TestCIMTypeMapper:
    """CIM type mapper unit tests."""

    @pytest.mark.parametrize("cim_type,expected", [
        ("String", "string"),
        ("Float", "float"),
        ("Simple_Float", "float"),
        ("Boolean", "bool"),
        ("Integer", "int"),
        ("DateTime", "dateTime"),
        ("Date", "dateTime"),
    ])
    def test_primitive_mappings(self, cim_type, expected):
        """Each CIM primitive maps to its Dgraph scalar."""
        result = CIMTypeMapper().map_type(cim_type)

        assert result.dgraph_type == expected
        assert result.is_list is False
        assert result.is_reference is False
        assert result.original_type == cim_type

    def test_mapping_table_complete(self):
        """The table holds exactly the seven CIM primitives."""
        assert set(CIM_TYPE_MAPPINGS) == {
            "String", "Float", "Simple_Float", "Boolean", "Integer", "DateTime", "Date",
        }

    @pytest.mark.parametrize("cim_type", ["ActivePower", "Terminal", "UnitMultiplier", "", "uid"])
    def test_other_types_are_references(self, cim_type):
        """Anything outside the table becomes a uid edge."""
        result = CIMTypeMapper().map_type(cim_type)

        assert result.dgraph_type == "uid"
        assert result.base_type == DgraphValueType.UID
        assert result.is_reference is True

    def test_matching_is_case_sensitive(self):
        """Lowercase primitive names are not primitives."""
        mapper = CIMTypeMapper()

        assert mapper.map_type("string").dgraph_type == "uid"
        assert mapper.map_type("BOOLEAN").dgraph_type == "uid"
        assert mapper.is_primitive("String") is True
        assert mapper.is_primitive("string") is False

    def test_unbounded_wraps_as_list(self):
        """An upper bound of * produces a list type."""
        mapper = CIMTypeMapper()

        assert mapper.map_type("Integer", upper="*").dgraph_type == "[int]"
        assert mapper.map_type("Terminal", upper="*").dgraph_type == "[uid]"
        assert mapper.map_type("Terminal", upper="*").is_list is True

    @pytest.mark.parametrize("upper", ["1", "0", "", "2", "n"])
    def test_bounded_not_wrapped(self, upper):
        """Any other upper bound keeps the scalar type."""
        assert CIMTypeMapper().map_type("String", upper=upper).dgraph_type == "string"

    def test_list_of(self):
        """list_of wraps in square brackets."""
        assert list_of("uid") == "[uid]"

    def test_map_property_resolved(self):
        """Resolved properties map by their resolved type name."""
        prop = CIMProperty(
            name="Switch.ratedCurrent",
            type="Float",
            resolution=PropertyResolution.CLASS,
        )
        assert CIMTypeMapper().map_property(prop).dgraph_type == "float"

    @pytest.mark.parametrize("upper,expected", [("*", "[float]"), ("1", "float"), ("", "float")])
    def test_map_property_cardinality(self, upper, expected):
        """Only an upper bound of * makes a resolved property a list."""
        prop = CIMProperty(
            name="Switch.ratedCurrent",
            type="Float",
            upper=upper,
            resolution=PropertyResolution.CLASS,
        )
        assert CIMTypeMapper().map_property(prop).dgraph_type == expected

    def test_map_property_unresolved(self):
        """Unresolved properties are always uid edges."""
        prop = CIMProperty(
            name="X.y",
            object="String",
            type="String",
            upper="*",
            resolution=PropertyResolution.UNRESOLVED,
        )
        assert CIMTypeMapper().map_property(prop).dgraph_type == "[uid]"

    def test_custom_mappings(self):
        """Custom tables replace the default one."""
        mapper = CIMTypeMapper(mappings={"Decimal": "float"})

        assert mapper.map_type("Decimal").dgraph_type == "float"
        assert mapper.map_type("String").dgraph_type == "uid"

    def test_get_all_mappings_is_copy(self):
        """Returned mappings do not alias the mapper's table."""
        mapper = CIMTypeMapper()
        mappings = mapper.get_all_mappings()
        mappings["String"] = "int"

        assert mapper.map_type("String").dgraph_type == "string"
