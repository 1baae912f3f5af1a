from decimal import Decimal

import pytest
from sqlalchemy import Boolean, Integer, Numeric, String

from record_access.applications.query.parameter_binder import ParameterBinder, escape_like
from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.parameter import INT32_MAX, INT32_MIN, ParameterSpec, ParamType

NAME = ParameterSpec(type=ParamType.STRING, max_length=8)
COUNT = ParameterSpec(type=ParamType.INTEGER)
PRICE = ParameterSpec(type=ParamType.DECIMAL, precision=6, scale=2)
FLAG = ParameterSpec(type=ParamType.BOOLEAN)


class TestParameterBinder:
    @pytest.fixture
    def binder(self):
        return ParameterBinder({"name": NAME, "count": COUNT, "price": PRICE, "flag": FLAG})

    def test_bind_produces_typed_bind_parameter(self, binder):
        """Values become bind parameters carrying the declared SQL type"""
        param = binder.bind("name", "widget")

        assert param.value == "widget"
        assert isinstance(param.type, String)
        assert param.type.length == 8

    def test_bind_types_per_declaration(self, binder):
        assert isinstance(binder.bind("count", 3).type, Integer)
        assert isinstance(binder.bind("price", Decimal("1.50")).type, Numeric)
        assert isinstance(binder.bind("flag", True).type, Boolean)

    def test_undeclared_parameter_is_rejected(self, binder):
        """A value with no declared type is never silently coerced"""
        with pytest.raises(InvalidParameterError, match="no declared type"):
            binder.bind("unknown", "value")

    def test_explicit_spec_overrides_registry(self):
        binder = ParameterBinder()

        param = binder.bind("anything", 7, COUNT)

        assert param.value == 7

    @pytest.mark.parametrize(
        "name, value",
        [
            ("name", 42),
            ("count", "42"),
            ("count", True),
            ("count", 4.2),
            ("price", "9.99"),
            ("price", True),
            ("flag", 1),
            ("flag", "true"),
        ],
    )
    def test_type_mismatch_is_rejected(self, binder, name, value):
        with pytest.raises(InvalidParameterError) as exc_info:
            binder.bind(name, value)

        assert exc_info.value.parameter == name

    def test_none_is_rejected(self, binder):
        with pytest.raises(InvalidParameterError, match="required"):
            binder.bind("name", None)

    def test_string_longer_than_width_is_rejected(self, binder):
        with pytest.raises(InvalidParameterError, match="longer than 8"):
            binder.bind("name", "x" * 9)

    def test_error_message_does_not_echo_value(self, binder):
        secret = "s3cr3t-value-too-long"

        with pytest.raises(InvalidParameterError) as exc_info:
            binder.bind("name", secret)

        assert secret not in str(exc_info.value)

    def test_float_decimal_is_converted_exactly(self, binder):
        param = binder.bind("price", 9.99)

        assert param.value == Decimal("9.99")

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), Decimal("123456.00")])
    def test_decimal_out_of_range_or_not_finite(self, binder, value):
        with pytest.raises(InvalidParameterError):
            binder.bind("price", value)

    def test_metacharacters_are_kept_as_data(self, binder):
        """Quotes and SQL keywords stay inside the bound value"""
        param = binder.bind("name", "x' OR 1")

        assert param.value == "x' OR 1"

    def test_bind_contains_escapes_wildcards(self, binder):
        param = binder.bind_contains("name", "50%_off")

        assert param.value == "%50\\%\\_off%"

    def test_bind_contains_requires_string_field(self, binder):
        with pytest.raises(InvalidParameterError, match="substring"):
            binder.bind_contains("count", "1")

    @pytest.mark.parametrize("value", [2**63, -(2**63) - 1])
    def test_integer_outside_64_bits_is_rejected(self, binder, value):
        with pytest.raises(InvalidParameterError, match="outside"):
            binder.bind("count", value)

    def test_integer_range_follows_declaration(self):
        binder = ParameterBinder({"id": ParameterSpec(type=ParamType.INTEGER, min_value=INT32_MIN, max_value=INT32_MAX)})

        assert binder.bind("id", INT32_MAX).value == INT32_MAX
        with pytest.raises(InvalidParameterError):
            binder.bind("id", INT32_MAX + 1)
        with pytest.raises(InvalidParameterError):
            binder.bind("id", INT32_MIN - 1)


def test_escape_like_escapes_escape_character_first():
    assert escape_like("a\\b%c_d") == "a\\\\b\\%c\\_d"
