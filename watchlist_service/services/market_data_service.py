from typing import Any, Optional
from fastapi import Depends, Request
import httpx
from pydantic import ValidationError

from ..core import ConfigService, get_config_service
from ..core.constants import FINNHUB_BASE_URL, MARKET_DATA_TIMEOUT
from ..schemas import Quote, CompanyProfile, BasicFinancials


class MarketDataError(RuntimeError):
    pass


class MarketDataService:
    """Async client for the Finnhub quote, profile and metric endpoints."""

    def __init__(self, config_service: ConfigService, client: Optional[httpx.AsyncClient] = None):
        self.api_key = config_service.get("FINNHUB_API_KEY", None)
        self.base_url = config_service.get("FINNHUB_BASE_URL", FINNHUB_BASE_URL).rstrip("/")
        self.timeout = config_service.get_float("MARKET_DATA_TIMEOUT", MARKET_DATA_TIMEOUT)
        self.client = client

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    async def _get(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        headers = {"X-Finnhub-Token": self.api_key} if self.api_key else {}
        try:
            if self.client is not None:
                response = await self.client.get(url, params=params, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise MarketDataError(f"Market data request {path} failed for {params.get('symbol')}: {e}") from e
        except ValueError as e:
            raise MarketDataError(f"Market data response {path} is not JSON: {e}") from e

    async def get_quote(self, symbol: str) -> Quote:
        data = await self._get("/quote", {"symbol": symbol})
        return self._parse(Quote, data, symbol)

    async def get_company_profile(self, symbol: str) -> CompanyProfile:
        data = await self._get("/stock/profile2", {"symbol": symbol})
        return self._parse(CompanyProfile, data, symbol)

    async def get_basic_financials(self, symbol: str) -> BasicFinancials:
        data = await self._get("/stock/metric", {"symbol": symbol, "metric": "all"})
        return self._parse(BasicFinancials, data, symbol)

    @staticmethod
    def _parse(model, data: Any, symbol: str):
        try:
            return model.model_validate(data or {})
        except ValidationError as e:
            raise MarketDataError(f"Unexpected {model.__name__} payload for {symbol}: {e}") from e


def get_market_data_service(
    request: Request,
    config_service: ConfigService = Depends(get_config_service),
) -> MarketDataService:
    client = getattr(request.app.state, "http_client", None)
    return MarketDataService(config_service=config_service, client=client)
