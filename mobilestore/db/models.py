"""SQLAlchemy models for the device store."""
from __future__ import annotations

from sqlalchemy import Column, Integer, String
from sqlalchemy.engine import Engine

from .session import Base


class DeviceRecord(Base):
    __tablename__ = "mobile_devices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # not unique: every save inserts a new row
    identifier = Column(String(255), nullable=True, index=True)
    model = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"DeviceRecord(id={self.id!r}, identifier={self.identifier!r}, model={self.model!r})"


def create_schema(engine: Engine) -> None:
    """Create missing tables; existing rows are left untouched."""
    Base.metadata.create_all(bind=engine)
