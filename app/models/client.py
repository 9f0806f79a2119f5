from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base, UTCDateTime


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    company = Column(Text, nullable=True)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")  # active, inactive, lead
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
