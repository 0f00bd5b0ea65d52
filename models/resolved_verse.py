from sqlalchemy import Column, String, Text, DateTime, func
from database import Base

class ResolvedVerse(Base):
    __tablename__ = 'resolved_verses'

    reference = Column(String(255), primary_key=True)  # E.g., "John/3/16"

    # Stored exactly as the oracle returned them
    book = Column(String(100), nullable=False)
    chapter = Column(String(50), nullable=False)
    verse = Column(String(50), nullable=False)
    text = Column(Text, nullable=False)

    query_id = Column(String(128), nullable=False)  # Fulfillment that last wrote this row
    resolved_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def to_json(self):
        return {
            "reference": self.reference,
            "book": self.book,
            "chapter": self.chapter,
            "verse": self.verse,
            "text": self.text,
            "query_id": self.query_id,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None
        }

    def __repr__(self):
        return f'<ResolvedVerse {self.reference} - {self.book} {self.chapter}:{self.verse}>'
