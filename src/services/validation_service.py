import math
from typing import Any, Dict, Mapping, Union

from src.models.token import INPUT_FIELDS, NUMERIC_FIELDS, TEXT_FIELDS
from src.utils.exceptions import TokenRegistryErrorCodes, ValidationError


class ValidationService:
    @staticmethod
    def validate_text(field: str, value: Any) -> str:
        """Validate a required text field (present, string, non-blank)"""
        if value is None:
            raise ValidationError(TokenRegistryErrorCodes.MISSING_FIELD, f"'{field}' is required", field)
        if not isinstance(value, str):
            raise ValidationError(TokenRegistryErrorCodes.INVALID_PAYLOAD, f"'{field}' must be a string", field)
        if not value.strip():
            raise ValidationError(TokenRegistryErrorCodes.EMPTY_FIELD, f"'{field}' must not be empty", field)
        return value

    @staticmethod
    def validate_number(field: str, value: Any) -> Union[int, float]:
        """Validate a required numeric field.

        Numbers pass through unchanged, numeric strings are parsed the way the
        original form did (``parseFloat``). NaN, infinities, booleans and negative
        values are rejected.
        """
        if value is None:
            raise ValidationError(TokenRegistryErrorCodes.MISSING_FIELD, f"'{field}' is required", field)
        if isinstance(value, bool):
            raise ValidationError(TokenRegistryErrorCodes.INVALID_NUMBER, f"'{field}' must be a number", field)

        if isinstance(value, (int, float)):
            number = value
        elif isinstance(value, str) and value.strip():
            try:
                number = float(value.strip())
            except ValueError:
                raise ValidationError(
                    TokenRegistryErrorCodes.INVALID_NUMBER, f"'{field}' must be a number, got {value!r}", field
                )
        else:
            raise ValidationError(TokenRegistryErrorCodes.INVALID_NUMBER, f"'{field}' must be a number", field)

        if isinstance(number, float) and not math.isfinite(number):
            raise ValidationError(TokenRegistryErrorCodes.INVALID_NUMBER, f"'{field}' must be finite", field)
        if number < 0:
            raise ValidationError(TokenRegistryErrorCodes.NEGATIVE_NUMBER, f"'{field}' must be >= 0", field)
        return number

    @classmethod
    def validate_token_fields(cls, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate create input and return the cleaned fields in persisted order.

        Unknown keys, including caller-supplied ``id`` and ``timestamp``, are dropped.
        """
        if not isinstance(fields, Mapping):
            raise ValidationError(TokenRegistryErrorCodes.INVALID_PAYLOAD, "Token data must be a JSON object")

        cleaned: Dict[str, Any] = {}
        for field in INPUT_FIELDS:
            value = fields.get(field)
            if field in TEXT_FIELDS:
                cleaned[field] = cls.validate_text(field, value)
            elif field in NUMERIC_FIELDS:
                cleaned[field] = cls.validate_number(field, value)
        return cleaned
