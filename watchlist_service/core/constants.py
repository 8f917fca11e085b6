WATCHLIST_TABLE_HEADER = [
    "Company",
    "Symbol",
    "Price",
    "Change",
    "Market Cap",
    "P/E Ratio",
    "Alert",
    "Action",
]

FINNHUB_BASE_URL = "https://finnhub.io/api/v1"
MARKET_DATA_TIMEOUT = 10.0

EMPTY_WATCHLIST_TITLE = "Your watchlist is empty"
EMPTY_WATCHLIST_HINT = "Add stocks to your watchlist to track them here"
