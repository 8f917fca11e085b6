from .watchlist import (
    ActionResult,
    EnrichedQuote,
    WatchlistAddRequest,
    WatchlistEntry,
    WatchlistStatus,
    WatchlistSymbolsResponse,
)
from .market_data import Quote, CompanyProfile, FinancialMetrics, BasicFinancials
from .view import Notification, NotificationLevel, WatchlistRow, WatchlistTableView, WatchlistPage
