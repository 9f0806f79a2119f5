from sqlalchemy import Boolean, Column, Integer, String, Text

from app.core.db import Base, UTCDateTime


class CrmIntegration(Base):
    __tablename__ = "crm_integrations"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)  # salesforce, hubspot, pipedrive, zoho
    api_key = Column(Text, nullable=True)
    is_connected = Column(Boolean, nullable=False, default=False)
    last_sync = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, nullable=False)
