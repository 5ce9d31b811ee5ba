from sqlalchemy import Column, Integer, String

from ..database import Base


class Admin(Base):
    """Admin account; ``password`` holds a bcrypt hash."""

    __tablename__ = "admin"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)

    def __repr__(self):
        return f"<Admin(id={self.id}, email='{self.email}')>"
