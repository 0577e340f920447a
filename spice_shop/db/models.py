from datetime import datetime
from sqlalchemy import Column, String, LargeBinary, DateTime

from spice_shop.db.base import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String(255), primary_key=True)
    value = Column(LargeBinary, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
