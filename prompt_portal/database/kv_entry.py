from sqlalchemy import Column, Text, DateTime
from sqlalchemy.sql import func
from prompt_portal.database.connection import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(Text, primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
