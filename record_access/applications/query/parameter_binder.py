import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from sqlalchemy import Boolean, Integer, Numeric, String, bindparam
from sqlalchemy.sql.elements import BindParameter
from sqlalchemy.types import TypeEngine

from record_access.domain.exceptions import InvalidParameterError
from record_access.domain.models.parameter import ParameterSpec, ParamType

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


class ParameterBinder:
    """Turns untrusted values into typed bind parameters.

    This is the only path by which caller input reaches a statement. Values are
    checked against their declared ``ParameterSpec`` and handed to the driver as
    bind parameters; they never become part of the statement text. Error
    messages name the parameter but never repeat the value.
    """

    def __init__(self, parameters: Optional[Mapping[str, ParameterSpec]] = None):
        self._parameters = dict(parameters or {})

    def spec_for(self, name: str, spec: Optional[ParameterSpec] = None) -> ParameterSpec:
        resolved = spec or self._parameters.get(name)
        if resolved is None:
            raise InvalidParameterError(name, "no declared type")
        return resolved

    def bind(self, name: str, value: Any, spec: Optional[ParameterSpec] = None) -> BindParameter:
        resolved = self.spec_for(name, spec)
        checked = self._check(name, value, resolved)
        return bindparam(name, checked, type_=self._sql_type(resolved), unique=True)

    def bind_contains(self, name: str, value: Any, spec: Optional[ParameterSpec] = None) -> BindParameter:
        """Bind ``value`` as a ``%term%`` LIKE pattern matched literally.

        Use with ``escape=LIKE_ESCAPE`` on the comparison.
        """
        resolved = self.spec_for(name, spec)
        if resolved.type is not ParamType.STRING:
            raise InvalidParameterError(name, "substring match requires a string field")
        term = self._check(name, value, resolved)
        return bindparam(name, f"%{escape_like(term)}%", type_=String(), unique=True)

    def _check(self, name: str, value: Any, spec: ParameterSpec) -> Any:
        if value is None:
            raise InvalidParameterError(name, "value is required")

        if spec.type is ParamType.STRING:
            if not isinstance(value, str):
                raise InvalidParameterError(name, "expected a string")
            if spec.max_length is not None and len(value) > spec.max_length:
                raise InvalidParameterError(name, f"longer than {spec.max_length} characters")
            return value

        if spec.type is ParamType.INTEGER:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(name, "expected an integer")
            if not spec.in_range(value):
                raise InvalidParameterError(name, f"outside {spec.min_value}..{spec.max_value}")
            return value

        if spec.type is ParamType.DECIMAL:
            return self._check_decimal(name, value, spec)

        if spec.type is ParamType.BOOLEAN:
            if not isinstance(value, bool):
                raise InvalidParameterError(name, "expected a boolean")
            return value

        raise InvalidParameterError(name, f"unsupported type {spec.type}")

    def _check_decimal(self, name: str, value: Any, spec: ParameterSpec) -> Decimal:
        if isinstance(value, bool) or not isinstance(value, (Decimal, int, float)):
            raise InvalidParameterError(name, "expected a decimal number")
        if isinstance(value, float):
            if not math.isfinite(value):
                raise InvalidParameterError(name, "expected a finite number")
            value = Decimal(str(value))
        decimal_value = Decimal(value)
        if not decimal_value.is_finite():
            raise InvalidParameterError(name, "expected a finite number")
        try:
            quantized = decimal_value.quantize(Decimal(1).scaleb(-spec.scale))
        except InvalidOperation as e:
            raise InvalidParameterError(name, "out of range") from e
        if len(quantized.as_tuple().digits) > spec.precision:
            raise InvalidParameterError(name, f"more than {spec.precision} digits")
        return decimal_value

    @staticmethod
    def _sql_type(spec: ParameterSpec) -> TypeEngine:
        if spec.type is ParamType.STRING:
            return String(spec.max_length)
        if spec.type is ParamType.INTEGER:
            return Integer()
        if spec.type is ParamType.DECIMAL:
            return Numeric(spec.precision, spec.scale)
        return Boolean()
