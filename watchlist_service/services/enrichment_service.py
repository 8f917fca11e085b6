import asyncio
from fastapi import Depends

from ..core import logger
from ..schemas import EnrichedQuote, WatchlistEntry
from .formatters import format_change_percent, format_market_cap, format_pe_ratio, format_price
from .market_data_service import MarketDataService, get_market_data_service


class EnrichmentService:
    """Attaches live quote data to stored watchlist entries.

    Every entry is enriched concurrently and on its own: when one of the three
    upstream calls for a symbol fails, that symbol falls back to its stored
    fields while the rest of the batch is still enriched. The output keeps the
    order of the input.
    """

    def __init__(self, market_data: MarketDataService):
        self.market_data = market_data

    async def enrich(self, entries: list[WatchlistEntry]) -> list[EnrichedQuote]:
        if not entries:
            return []

        if not self.market_data.has_credentials:
            logger.warning("FINNHUB_API_KEY is not set, returning watchlist without quotes")
            return [EnrichedQuote.bare(entry) for entry in entries]

        return list(await asyncio.gather(*(self._enrich_entry(entry) for entry in entries)))

    async def _enrich_entry(self, entry: WatchlistEntry) -> EnrichedQuote:
        try:
            results = await asyncio.gather(
                self.market_data.get_quote(entry.symbol),
                self.market_data.get_company_profile(entry.symbol),
                self.market_data.get_basic_financials(entry.symbol),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            quote, profile, financials = results
            return self._merge(entry, quote, profile, financials)
        except Exception as e:
            logger.error("Failed to enrich %s: %s", entry.symbol, e)
            return EnrichedQuote.bare(entry)

    @staticmethod
    def _merge(entry, quote, profile, financials) -> EnrichedQuote:
        enriched = EnrichedQuote.bare(entry)

        if quote.current_price:
            enriched.current_price = quote.current_price
            enriched.formatted_price = format_price(quote.current_price)

        if quote.change_percent is not None:
            enriched.change_percent = quote.change_percent
            enriched.formatted_change = format_change_percent(quote.change_percent)

        if profile.market_capitalization:
            enriched.formatted_market_cap = format_market_cap(profile.market_capitalization)

        pe_ratio = financials.pe_ratio
        if pe_ratio is not None:
            enriched.formatted_pe_ratio = format_pe_ratio(pe_ratio)

        return enriched


def get_enrichment_service(
    market_data: MarketDataService = Depends(get_market_data_service),
) -> EnrichmentService:
    return EnrichmentService(market_data=market_data)
