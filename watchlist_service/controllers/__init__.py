from .watchlist_controller import WatchlistController
