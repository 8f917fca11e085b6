from .base import Base, BaseModel
from .user import User
from .watchlist import WatchlistItem
