from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Quote(BaseModel):
    """Finnhub /quote payload."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    current_price: Optional[float] = Field(default=None, alias="c")
    change: Optional[float] = Field(default=None, alias="d")
    change_percent: Optional[float] = Field(default=None, alias="dp")
    high: Optional[float] = Field(default=None, alias="h")
    low: Optional[float] = Field(default=None, alias="l")
    open: Optional[float] = Field(default=None, alias="o")
    previous_close: Optional[float] = Field(default=None, alias="pc")


class CompanyProfile(BaseModel):
    """Finnhub /stock/profile2 payload. Market cap is reported in billions here."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    ticker: Optional[str] = None
    exchange: Optional[str] = None
    currency: Optional[str] = None
    market_capitalization: Optional[float] = Field(default=None, alias="marketCapitalization")


class FinancialMetrics(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pe_excl_extra_ttm: Optional[float] = Field(default=None, alias="peExclExtraTTM")
    pe_normalized_annual: Optional[float] = Field(default=None, alias="peNormalizedAnnual")


class BasicFinancials(BaseModel):
    """Finnhub /stock/metric payload."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    symbol: Optional[str] = None
    metric: FinancialMetrics = Field(default_factory=FinancialMetrics)

    @property
    def pe_ratio(self) -> Optional[float]:
        if self.metric.pe_excl_extra_ttm is not None:
            return self.metric.pe_excl_extra_ttm
        return self.metric.pe_normalized_annual
