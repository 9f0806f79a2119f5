from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base, UTCDateTime


class Interaction(Base):
    __tablename__ = "interactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, nullable=False, index=True)
    type = Column(String(50), nullable=False)  # call, email, meeting, note
    content = Column(Text, nullable=False)
    date = Column(UTCDateTime, nullable=False)
    created_at = Column(UTCDateTime, nullable=False)
