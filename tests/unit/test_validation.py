"""Unit tests for decorator parameter validation."""

import pytest

from spytial.decorators import (
    check_params,
    get_constraint_params,
    get_directive_params,
    get_param_schema,
    validate_params,
)
from spytial.decorators.validation import ParamSchema, ParamSet
from spytial.errors import DecoratorValidationError


class TestParamSchemas:
    """Test the declared parameter sets."""

    def test_constraint_kinds(self):
        assert set(get_constraint_params()) == {"orientation", "cyclic", "group"}

    def test_directive_kinds(self):
        assert set(get_directive_params()) == {
            "atomColor", "size", "icon", "edgeColor", "projection",
            "attribute", "hideField", "hideAtom", "inferredEdge", "flag",
        }

    def test_group_has_two_shapes(self):
        schema = get_param_schema("group")
        assert schema.is_multiple
        assert schema.sets[0].required == ("field", "groupOn", "addToGroup")
        assert schema.sets[0].optional == ("selector",)
        assert schema.sets[1].required == ("selector", "name")

    def test_unknown_kind(self):
        assert get_param_schema("wiggle") is None


class TestValidateParams:
    """Test validation results and messages."""

    def test_missing_parameter(self):
        """Test orientation with only a selector reports directions missing."""
        result = validate_params("orientation", ["selector"], get_param_schema("orientation"))
        assert not result.valid
        assert result.missing == ["directions"]
        assert result.message == "Missing required parameters for 'orientation': [directions]"

    def test_unknown_parameter(self):
        result = validate_params("hideAtom", ["selector", "color"], get_param_schema("hideAtom"))
        assert result.unknown == ["color"]
        assert "Valid parameters: [selector]" in result.message

    def test_optional_parameter_accepted(self):
        result = validate_params("edgeColor", ["field", "value", "selector"], get_param_schema("edgeColor"))
        assert result.valid

    def test_field_based_group_matches(self):
        result = validate_params("group", ["field", "groupOn", "addToGroup"], get_param_schema("group"))
        assert result.valid

    def test_selector_based_group_matches(self):
        assert validate_params("group", ["selector", "name"], get_param_schema("group")).valid

    def test_no_group_shape_matches(self):
        """Test failure reports every parameter set tried."""
        result = validate_params("group", ["field"], get_param_schema("group"))
        assert not result.valid
        assert len(result.tried) == 2
        assert result.message.startswith("No valid parameter set found for 'group'")
        assert "Set 1: required: [field, groupOn, addToGroup], optional: [selector]" in result.message
        assert " OR Set 2: required: [selector, name]" in result.message
        assert result.message.endswith("Provided: [field]")

    def test_custom_schema(self):
        schema = ParamSchema.multiple(ParamSet(("a",)), ParamSet(("b",), ("c",)))
        assert validate_params("custom", ["b", "c"], schema).valid


class TestCheckParams:
    """Test the raising variant."""

    def test_raises_with_details(self):
        with pytest.raises(DecoratorValidationError) as exc_info:
            check_params("size", ["selector", "height"])
        error = exc_info.value
        assert error.annotation_type == "size"
        assert error.missing == ["width"]
        assert error.to_dict()["provided"] == ["selector", "height"]

    def test_unknown_kind_raises(self):
        with pytest.raises(DecoratorValidationError, match="Unknown decorator kind"):
            check_params("wiggle", [])

    def test_valid_passes(self):
        check_params("flag", ["name"])
