from sqlalchemy import Column, Integer, String, DateTime, func
from database import Base
from models.types import Amount

class Withdrawal(Base):
    __tablename__ = 'withdrawals'

    id = Column(Integer, primary_key=True, index=True)
    recipient = Column(String(255), nullable=False)
    amount = Column(Amount, nullable=False)  # Zero for an empty treasury
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f'<Withdrawal {self.id} {self.amount} -> {self.recipient}>'
