"""
Search term model - one row per (query text, store), with popularity and last result count.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_graphql.db.base import Base


class SearchTerm(Base):
    __tablename__ = "search_terms"
    __table_args__ = (UniqueConstraint("query_text", "store_id", name="uq_search_terms_text_store"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    query_text: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    store_id: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    num_results: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    popularity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<SearchTerm(id={self.id}, query_text={self.query_text!r}, num_results={self.num_results})>"
