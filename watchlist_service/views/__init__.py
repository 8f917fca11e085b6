from .watchlist_table import WatchlistTable
