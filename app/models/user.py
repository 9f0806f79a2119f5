from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never plaintext
    name = Column(Text, nullable=False)
    role = Column(String(100), nullable=False, default="Project Manager")

    def __repr__(self):
        return f"<User id={self.id} username={self.username} role={self.role}>"
