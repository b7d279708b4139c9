from pydantic import BaseModel, Field
from typing import List, Optional, Union

from src.models.token import TokenRecord

Number = Union[int, float]


class TokenResponse(BaseModel):
    owner: str = Field(description="Owner of the holding")
    tokenName: str = Field(description="Token name")
    balance: Number = Field(description="Balance held")
    fundingSource: str = Field(description="Where the funds came from")
    fee: Number = Field(description="Fee (percentage)")
    liquidity: Number = Field(description="Liquidity provided")
    supplyPercentAdded: Number = Field(description="Percentage of supply added")
    id: int = Field(description="Registry-assigned id, reflects creation order")
    timestamp: str = Field(description="Creation instant (ISO 8601 string)")

    @classmethod
    def from_record(cls, record: TokenRecord) -> "TokenResponse":
        return cls(**record.to_dict())


class TokenPageResponse(BaseModel):
    items: List[TokenResponse] = Field(description="Records on the requested page")
    page: int = Field(description="Page actually served (after clamping)")
    totalPages: int = Field(description="Number of pages for the filtered records")
    pageSize: int = Field(description="Records per page")
    total: int = Field(description="Number of records matching the search term")
    first: int = Field(description="1-based position of the first record shown")
    last: int = Field(description="1-based position of the last record shown")


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None
    field: Optional[str] = None
