from sqlalchemy import Column, String, DateTime
from chatapi.core.clock import isoformat
from chatapi.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # stored verbatim, no hashing
    created_at = Column(DateTime(timezone=True), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
            "createdAt": isoformat(self.created_at),
        }
