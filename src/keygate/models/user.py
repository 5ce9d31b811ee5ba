from sqlalchemy import Column, Date, ForeignKey, Integer, String

from ..database import Base


class User(Base):
    """User registered with an API key."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)
    firstname = Column(String(100), nullable=False)
    lastname = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    last_date = Column(Date, nullable=True)
    apikey = Column(Integer, ForeignKey("apikey.id"), nullable=False, index=True)

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
