from sqlalchemy import Column, Integer, String, Text

from app.core.db import Base, UTCDateTime


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    # No foreign key: clients can be deleted out from under their tasks
    client_id = Column(Integer, nullable=True, index=True)
    status = Column(String(20), nullable=False, default="pending")  # pending, in_progress, completed
    priority = Column(String(20), nullable=False, default="medium")  # low, medium, high, urgent
    due_date = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, nullable=False)
    updated_at = Column(UTCDateTime, nullable=False)
