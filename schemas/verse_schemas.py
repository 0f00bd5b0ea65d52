from pydantic import BaseModel, Field
from typing import Optional

from utils.registry import MAX_AMOUNT

class VerseRequestCreate(BaseModel):
    reference: str = Field(..., max_length=255)  # E.g., "John/3/16"; emptiness is checked by the registry
    payment: int = Field(..., ge=0, le=MAX_AMOUNT)

class OracleCallback(BaseModel):
    query_id: str = Field(..., max_length=128)
    result: Optional[str] = None  # Raw "book---chapter---verse---text"

class ParsePreview(BaseModel):
    result: Optional[str] = None

class AmountUpdate(BaseModel):
    amount: int = Field(..., ge=0, le=MAX_AMOUNT)
