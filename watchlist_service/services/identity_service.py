from typing import Optional
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from ..core import logger
from ..database import get_db
from ..models import User


class IdentityService:
    """Maps an email address to the user id that owns watchlist entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_user_id(self, email: str) -> Optional[str]:
        if not email:
            return None

        try:
            result = await self.db.execute(select(User).where(User.email == email))
            user = result.scalars().first()
        except Exception:
            logger.exception("Identity lookup failed for %s", email)
            return None

        if user is None:
            return None

        user_id = user.external_id or (str(user.id) if user.id is not None else "")
        return user_id or None


def get_identity_service(db: AsyncSession = Depends(get_db)) -> IdentityService:
    return IdentityService(db=db)
