from enum import Enum
from typing import Optional
from pydantic import BaseModel


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    level: NotificationLevel
    message: str


class WatchlistRow(BaseModel):
    company: str
    symbol: str
    price: str
    change: str
    change_color: str
    market_cap: str
    pe_ratio: str
    alert: str
    action_label: str
    disabled: bool


class WatchlistTableView(BaseModel):
    header: list[str]
    rows: list[WatchlistRow]
    empty: bool
    empty_title: Optional[str] = None
    empty_hint: Optional[str] = None


class WatchlistPage(BaseModel):
    title: str
    subtitle: str
    user_id: str
    table: WatchlistTableView
