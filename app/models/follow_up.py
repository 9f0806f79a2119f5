from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base, UTCDateTime


class FollowUp(Base):
    __tablename__ = "follow_ups"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    client_id = Column(Integer, nullable=False, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    scheduled_date = Column(UTCDateTime, nullable=False)
    type = Column(String(20), nullable=False, default="call")  # call, email, meeting, reminder
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled, completed, cancelled
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
