from fastapi import Depends
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from ..core import logger
from ..database import get_db
from ..models import WatchlistItem
from ..schemas import ActionResult, WatchlistEntry, WatchlistStatus
from .identity_service import IdentityService

UNIQUE_VIOLATION_SQLSTATE = "23505"


def normalize_symbol(symbol: str | None) -> str:
    return (symbol or "").strip().upper()


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(orig).lower()


def _to_entry(item: WatchlistItem) -> WatchlistEntry:
    return WatchlistEntry(
        user_id=item.user_id,
        symbol=item.symbol,
        company=item.company,
        added_at=item.added_at,
    )


class WatchlistService:
    def __init__(self, db: AsyncSession, identity_service: IdentityService | None = None):
        self.db = db
        self.identity_service = identity_service or IdentityService(db)

    async def get_user_watchlist(self, user_id: str) -> list[WatchlistEntry]:
        """Entries of a user, most recently added first. Failures yield an empty list."""
        if not user_id:
            return []

        try:
            stmt = (
                select(WatchlistItem)
                .where(WatchlistItem.user_id == user_id)
                .order_by(WatchlistItem.added_at.desc(), WatchlistItem.id.desc())
            )
            result = await self.db.execute(stmt)
            return [_to_entry(item) for item in result.scalars().all()]
        except Exception:
            logger.exception("Failed to list watchlist for user %s", user_id)
            return []

    async def get_symbols_by_email(self, email: str) -> list[str]:
        if not email:
            return []

        user_id = await self.identity_service.resolve_user_id(email)
        if not user_id:
            return []

        try:
            result = await self.db.execute(
                select(WatchlistItem.symbol).where(WatchlistItem.user_id == user_id)
            )
            return [str(symbol) for symbol in result.scalars().all()]
        except Exception:
            logger.exception("Failed to load watchlist symbols for %s", email)
            return []

    async def add_to_watchlist(self, user_id: str, symbol: str, company: str) -> ActionResult:
        symbol = normalize_symbol(symbol)
        if not user_id or not symbol or not (company or "").strip():
            return ActionResult(success=False, message="Missing required fields", status=WatchlistStatus.INVALID)

        try:
            self.db.add(WatchlistItem(user_id=user_id, symbol=symbol, company=company))
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if _is_unique_violation(e):
                logger.info("%s already in watchlist of user %s", symbol, user_id)
                return ActionResult(
                    success=False, message="Stock already in watchlist", status=WatchlistStatus.ALREADY_EXISTS
                )
            logger.exception("Failed to add %s to watchlist of user %s", symbol, user_id)
            return ActionResult(success=False, message="Failed to add to watchlist", status=WatchlistStatus.FAILED)
        except Exception:
            await self.db.rollback()
            logger.exception("Failed to add %s to watchlist of user %s", symbol, user_id)
            return ActionResult(success=False, message="Failed to add to watchlist", status=WatchlistStatus.FAILED)

        return ActionResult(success=True, message="Added to watchlist", status=WatchlistStatus.ADDED)

    async def remove_from_watchlist(self, user_id: str, symbol: str) -> ActionResult:
        symbol = normalize_symbol(symbol)
        if not user_id or not symbol:
            return ActionResult(success=False, message="Missing required fields", status=WatchlistStatus.INVALID)

        try:
            result = await self.db.execute(
                delete(WatchlistItem).where(
                    WatchlistItem.user_id == user_id, WatchlistItem.symbol == symbol
                )
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception("Failed to remove %s from watchlist of user %s", symbol, user_id)
            return ActionResult(
                success=False, message="Failed to remove from watchlist", status=WatchlistStatus.FAILED
            )

        if result.rowcount == 0:
            return ActionResult(
                success=False, message="Stock not found in watchlist", status=WatchlistStatus.NOT_FOUND
            )

        return ActionResult(success=True, message="Removed from watchlist", status=WatchlistStatus.REMOVED)


def get_watchlist_service(db: AsyncSession = Depends(get_db)) -> WatchlistService:
    return WatchlistService(db=db)
