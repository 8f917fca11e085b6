from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class WatchlistStatus(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    INVALID = "invalid"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class ActionResult(BaseModel):
    success: bool
    message: str
    status: WatchlistStatus


class WatchlistAddRequest(BaseModel):
    symbol: str = Field(default="", description="Stock ticker symbol")
    company: str = Field(default="", description="Company display name")


class WatchlistEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: str = Field(alias="userId")
    symbol: str
    company: str
    added_at: datetime = Field(alias="addedAt")


class EnrichedQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    symbol: str
    company: str
    added_at: datetime = Field(alias="addedAt")
    current_price: Optional[float] = Field(default=None, alias="currentPrice")
    change_percent: Optional[float] = Field(default=None, alias="changePercent")
    formatted_price: Optional[str] = Field(default=None, alias="priceFormatted")
    formatted_change: Optional[str] = Field(default=None, alias="changeFormatted")
    formatted_market_cap: Optional[str] = Field(default=None, alias="marketCap")
    formatted_pe_ratio: Optional[str] = Field(default=None, alias="peRatio")

    @classmethod
    def bare(cls, entry: WatchlistEntry) -> "EnrichedQuote":
        return cls(symbol=entry.symbol, company=entry.company, added_at=entry.added_at)


class WatchlistSymbolsResponse(BaseModel):
    symbols: list[str] = Field(description="Symbols in the user's watchlist")
