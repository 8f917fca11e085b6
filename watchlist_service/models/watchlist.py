from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, UniqueConstraint
from .base import Base, BaseModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WatchlistItem(BaseModel, Base):
    __table_args__ = (
        UniqueConstraint("user_id", "symbol", name="uq_watchlistitem_user_symbol"),
    )

    user_id = Column(String, index=True, nullable=False)
    symbol = Column(String, nullable=False)
    company = Column(String, nullable=False)
    added_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
