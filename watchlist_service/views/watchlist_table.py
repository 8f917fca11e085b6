from typing import Optional

from ..core import logger
from ..core.constants import WATCHLIST_TABLE_HEADER, EMPTY_WATCHLIST_TITLE, EMPTY_WATCHLIST_HINT
from ..schemas import EnrichedQuote, Notification, NotificationLevel, WatchlistRow, WatchlistTableView
from ..services import WatchlistService
from ..services.watchlist_service import normalize_symbol
from ..services.formatters import change_color

NOT_AVAILABLE = "N/A"


class WatchlistTable:
    """View state of the watchlist table: the rows on screen and the row being removed.

    This is the in-process view-state model. The page endpoint only renders it;
    ``DELETE /watchlist/{symbol}`` goes to ``WatchlistService`` directly, since an
    HTTP request holds no table state between calls. Interactive front ends keep
    one instance per screen and call ``handle_remove`` on it.
    """

    def __init__(self, watchlist: list[EnrichedQuote], user_id: str, watchlist_service: WatchlistService):
        self.items = list(watchlist)
        self.user_id = user_id
        self.watchlist_service = watchlist_service
        self.removing: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return len(self.items) == 0

    async def handle_remove(self, symbol: str) -> Notification:
        if self.removing is not None:
            return Notification(level=NotificationLevel.ERROR, message=f"Already removing {self.removing}")

        symbol = normalize_symbol(symbol)
        self.removing = symbol
        try:
            result = await self.watchlist_service.remove_from_watchlist(self.user_id, symbol)
            if result.success:
                self.items = [item for item in self.items if item.symbol != symbol]
                return Notification(level=NotificationLevel.SUCCESS, message="Removed from watchlist")
            return Notification(level=NotificationLevel.ERROR, message=result.message or "Failed to remove")
        except Exception:
            logger.exception("Removing %s from the watchlist table failed", symbol)
            return Notification(level=NotificationLevel.ERROR, message="An error occurred")
        finally:
            self.removing = None

    def _row(self, item: EnrichedQuote) -> WatchlistRow:
        is_removing = self.removing == item.symbol
        return WatchlistRow(
            company=item.company,
            symbol=item.symbol,
            price=item.formatted_price or NOT_AVAILABLE,
            change=item.formatted_change or NOT_AVAILABLE,
            change_color=change_color(item.change_percent),
            market_cap=item.formatted_market_cap or NOT_AVAILABLE,
            pe_ratio=item.formatted_pe_ratio or NOT_AVAILABLE,
            alert="None",
            action_label="Removing..." if is_removing else "Remove",
            disabled=is_removing,
        )

    def render(self) -> WatchlistTableView:
        if self.is_empty:
            return WatchlistTableView(
                header=WATCHLIST_TABLE_HEADER,
                rows=[],
                empty=True,
                empty_title=EMPTY_WATCHLIST_TITLE,
                empty_hint=EMPTY_WATCHLIST_HINT,
            )
        return WatchlistTableView(
            header=WATCHLIST_TABLE_HEADER,
            rows=[self._row(item) for item in self.items],
            empty=False,
        )
