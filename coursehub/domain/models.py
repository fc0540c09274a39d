"""SQLAlchemy ORM models."""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Document(Base):
    """One schemaless document of a named collection."""

    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),)

    pk = Column(String(300), primary_key=True)
    collection = Column(String(100), nullable=False, index=True)
    doc_id = Column(String(200), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @staticmethod
    def make_pk(collection: str, doc_id: str) -> str:
        return f"{collection}/{doc_id}"
