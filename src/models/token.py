import math
from dataclasses import dataclass
from typing import Any, Dict, Union

Number = Union[int, float]

# Input fields in persisted order, followed by the store-assigned ones.
TEXT_FIELDS = ("owner", "tokenName", "fundingSource")
NUMERIC_FIELDS = ("balance", "fee", "liquidity", "supplyPercentAdded")
INPUT_FIELDS = ("owner", "tokenName", "balance", "fundingSource", "fee", "liquidity", "supplyPercentAdded")
ASSIGNED_FIELDS = ("id", "timestamp")


@dataclass(frozen=True)
class TokenRecord:
    """One entry in the token registry.

    Attribute names are snake_case; the wire and persisted form is camelCase
    (see ``to_dict`` / ``from_dict``). Records are never modified after creation.
    """

    id: int
    owner: str
    token_name: str
    balance: Number
    funding_source: str
    fee: Number
    liquidity: Number
    supply_percent_added: Number
    timestamp: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "owner": self.owner,
            "tokenName": self.token_name,
            "balance": self.balance,
            "fundingSource": self.funding_source,
            "fee": self.fee,
            "liquidity": self.liquidity,
            "supplyPercentAdded": self.supply_percent_added,
            "id": self.id,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenRecord":
        """Build a record from its camelCase form.

        Raises KeyError when a field is absent, TypeError when ``data`` is not a
        mapping or a value has the wrong type, and ValueError for negative or
        non-finite numbers.
        """
        if not isinstance(data, dict):
            raise TypeError(f"token record must be an object, got {type(data).__name__}")

        record_id = data["id"]
        if isinstance(record_id, bool) or not isinstance(record_id, int):
            raise TypeError(f"'id' must be an integer, got {record_id!r}")

        return cls(
            id=record_id,
            owner=_text(data, "owner"),
            token_name=_text(data, "tokenName"),
            balance=_number(data, "balance"),
            funding_source=_text(data, "fundingSource"),
            fee=_number(data, "fee"),
            liquidity=_number(data, "liquidity"),
            supply_percent_added=_number(data, "supplyPercentAdded"),
            timestamp=_text(data, "timestamp"),
        )


def _text(data: Dict[str, Any], field: str) -> str:
    value = data[field]
    if not isinstance(value, str):
        raise TypeError(f"'{field}' must be a string, got {value!r}")
    return value


def _number(data: Dict[str, Any], field: str) -> Number:
    value = data[field]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{field}' must be a number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"'{field}' must be a finite number >= 0, got {value!r}")
    return value
