from sqlalchemy import Column, String
from .base import Base, BaseModel

class User(BaseModel, Base):
    """Identity record owned by the auth provider; this service only reads it."""
    email = Column(String, unique=True, index=True, nullable=False)
    external_id = Column(String, unique=True, index=True, nullable=True)
    username = Column(String, nullable=True)
