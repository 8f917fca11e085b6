from .identity_service import IdentityService, get_identity_service
from .watchlist_service import WatchlistService, get_watchlist_service, normalize_symbol
from .market_data_service import MarketDataService, MarketDataError, get_market_data_service
from .enrichment_service import EnrichmentService, get_enrichment_service
