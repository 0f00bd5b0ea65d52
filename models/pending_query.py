from sqlalchemy import Column, String, DateTime, func
from database import Base
from models.types import Amount

class PendingQuery(Base):
    __tablename__ = 'pending_queries'

    query_id = Column(String(128), primary_key=True)
    # One outstanding query per reference; a new request supersedes the old row
    reference = Column(String(255), nullable=False, unique=True, index=True)

    requested_by = Column(String(255), nullable=False)
    payment = Column(Amount, nullable=False)
    gas_limit = Column(Amount, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_json(self):
        return {
            "query_id": self.query_id,
            "reference": self.reference,
            "requested_by": self.requested_by,
            "payment": self.payment,
            "gas_limit": self.gas_limit,
            "created_at": self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<PendingQuery {self.query_id} -> {self.reference}>'
