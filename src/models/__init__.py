from .token import TokenRecord, INPUT_FIELDS, TEXT_FIELDS, NUMERIC_FIELDS, ASSIGNED_FIELDS

__all__ = [
    "TokenRecord",
    "INPUT_FIELDS",
    "TEXT_FIELDS",
    "NUMERIC_FIELDS",
    "ASSIGNED_FIELDS",
]
