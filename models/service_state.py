from sqlalchemy import Column, Integer, String, DateTime, func
from database import Base
from models.types import Amount

SERVICE_STATE_ID = 1

class ServiceState(Base):
    """The single row holding owner, price, gas limit and treasury balance."""
    __tablename__ = 'service_state'

    id = Column(Integer, primary_key=True, default=SERVICE_STATE_ID)
    owner = Column(String(255), nullable=False)  # Set once, never updated

    verse_price = Column(Amount, nullable=False)
    gas_limit = Column(Amount, nullable=False)
    balance = Column(Amount, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f'<ServiceState owner={self.owner} price={self.verse_price} gas={self.gas_limit} balance={self.balance}>'
