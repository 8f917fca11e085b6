"""
Tests for the watchlist table view state.
"""
import asyncio
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from watchlist_service.core.constants import WATCHLIST_TABLE_HEADER
from watchlist_service.schemas import ActionResult, EnrichedQuote, NotificationLevel, WatchlistStatus
from watchlist_service.services import WatchlistService
from watchlist_service.views import WatchlistTable

ADDED_AT = datetime(2024, 3, 1, 14, 0)


@pytest.fixture
def quotes():
    return [
        EnrichedQuote(
            symbol="AAPL",
            company="Apple Inc",
            added_at=ADDED_AT,
            current_price=123.4,
            change_percent=2.5,
            formatted_price="$123.40",
            formatted_change="+2.50%",
            formatted_market_cap="$2.50T",
            formatted_pe_ratio="28.46",
        ),
        EnrichedQuote(symbol="MSFT", company="Microsoft Corp", added_at=ADDED_AT),
    ]


@pytest.fixture
def watchlist_service():
    service = AsyncMock(spec=WatchlistService)
    service.remove_from_watchlist.return_value = ActionResult(
        success=True, message="Removed from watchlist", status=WatchlistStatus.REMOVED
    )
    return service


class TestWatchlistTable:
    """Test suite for WatchlistTable."""

    def test_render_rows(self, quotes, watchlist_service):
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        view = table.render()

        assert view.header == WATCHLIST_TABLE_HEADER
        assert view.empty is False
        aapl, msft = view.rows
        assert aapl.price == "$123.40"
        assert aapl.change == "+2.50%"
        assert aapl.change_color == "positive"
        assert aapl.market_cap == "$2.50T"
        assert aapl.pe_ratio == "28.46"
        assert aapl.alert == "None"
        assert aapl.action_label == "Remove"
        assert aapl.disabled is False

    def test_missing_values_show_not_available(self, quotes, watchlist_service):
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        msft = table.render().rows[1]

        assert msft.price == "N/A"
        assert msft.change == "N/A"
        assert msft.market_cap == "N/A"
        assert msft.pe_ratio == "N/A"
        assert msft.change_color == "neutral"

    def test_empty_state(self, watchlist_service):
        table = WatchlistTable([], "usr_abc123", watchlist_service)

        view = table.render()

        assert view.empty is True
        assert view.rows == []
        assert view.empty_title == "Your watchlist is empty"
        assert view.empty_hint == "Add stocks to your watchlist to track them here"

    async def test_remove_drops_row(self, quotes, watchlist_service):
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        notification = await table.handle_remove("AAPL")

        assert notification.level == NotificationLevel.SUCCESS
        assert notification.message == "Removed from watchlist"
        assert [item.symbol for item in table.items] == ["MSFT"]
        assert table.removing is None
        watchlist_service.remove_from_watchlist.assert_awaited_once_with("usr_abc123", "AAPL")

    async def test_remove_padded_symbol_drops_row(self, quotes, watchlist_service):
        """The row filter uses the same symbol normalization as the store."""
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        notification = await table.handle_remove(" aapl ")

        assert notification.level == NotificationLevel.SUCCESS
        assert [item.symbol for item in table.items] == ["MSFT"]
        watchlist_service.remove_from_watchlist.assert_awaited_once_with("usr_abc123", "AAPL")

    async def test_removing_last_row_shows_empty_state(self, quotes, watchlist_service):
        table = WatchlistTable(quotes[:1], "usr_abc123", watchlist_service)

        await table.handle_remove("AAPL")

        assert table.render().empty is True

    async def test_failed_remove_keeps_rows(self, quotes, watchlist_service):
        watchlist_service.remove_from_watchlist.return_value = ActionResult(
            success=False, message="Stock not found in watchlist", status=WatchlistStatus.NOT_FOUND
        )
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        notification = await table.handle_remove("AAPL")

        assert notification.level == NotificationLevel.ERROR
        assert notification.message == "Stock not found in watchlist"
        assert len(table.items) == 2
        assert table.removing is None

    async def test_failed_remove_without_message(self, quotes, watchlist_service):
        watchlist_service.remove_from_watchlist.return_value = ActionResult(
            success=False, message="", status=WatchlistStatus.FAILED
        )
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        notification = await table.handle_remove("AAPL")

        assert notification.message == "Failed to remove"

    async def test_exception_keeps_rows(self, quotes, watchlist_service):
        watchlist_service.remove_from_watchlist.side_effect = RuntimeError("network down")
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        notification = await table.handle_remove("AAPL")

        assert notification.level == NotificationLevel.ERROR
        assert notification.message == "An error occurred"
        assert len(table.items) == 2
        assert table.removing is None

    async def test_one_removal_at_a_time(self, quotes, watchlist_service):
        release = asyncio.Event()
        snapshots = []

        async def slow_remove(user_id, symbol):
            snapshots.append(table.render().rows[0])
            await release.wait()
            return ActionResult(success=True, message="Removed from watchlist", status=WatchlistStatus.REMOVED)

        watchlist_service.remove_from_watchlist.side_effect = slow_remove
        table = WatchlistTable(quotes, "usr_abc123", watchlist_service)

        first = asyncio.create_task(table.handle_remove("AAPL"))
        await asyncio.sleep(0)
        assert table.removing == "AAPL"

        second = await table.handle_remove("MSFT")
        assert second.level == NotificationLevel.ERROR

        release.set()
        assert (await first).level == NotificationLevel.SUCCESS

        assert snapshots[0].action_label == "Removing..."
        assert snapshots[0].disabled is True
        assert [item.symbol for item in table.items] == ["MSFT"]
        assert watchlist_service.remove_from_watchlist.await_count == 1
