"""BRC-20 Schemas - Pydantic response models for the ledger query endpoints.

Invariants:
    - Amounts are decimal strings with exactly `decimals` fractional digits
    - Every paginated response shares PaginatedResponse[T]: {limit, offset, total, results}
    - NotFoundResponse is the fixed {"error": "Not Found"} body
"""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Uniform pagination envelope."""
    limit: int = Field(ge=1)
    offset: int = Field(ge=0)
    total: int = Field(ge=0)
    results: list[T]


class TokenResponse(BaseModel):
    id: str
    number: int
    block_height: int
    tx_id: str
    address: str
    ticker: str
    max_supply: str
    mint_limit: str | None
    decimals: int
    deploy_timestamp: int
    minted_supply: str
    tx_count: int
    self_mint: bool = False


class SupplyResponse(BaseModel):
    max_supply: str
    minted_supply: str
    holders: int
    mint_percentage: str


class TokenDetailsResponse(BaseModel):
    token: TokenResponse
    supply: SupplyResponse


class HolderResponse(BaseModel):
    address: str
    overall_balance: str


class BalanceResponse(BaseModel):
    ticker: str
    available_balance: str
    transferrable_balance: str
    overall_balance: str


class NotFoundResponse(BaseModel):
    error: Literal["Not Found"] = "Not Found"
