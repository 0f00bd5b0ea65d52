from decimal import Decimal
from sqlalchemy import Numeric, String
from sqlalchemy.types import TypeDecorator

class Amount(TypeDecorator):
    """Unsigned 256-bit amount (wei, gas) held as a Python int.

    NUMERIC(78, 0) where the database has it; SQLite gets the decimal
    digits as text because its numeric storage stops at 64 bits.
    """
    impl = Numeric(78, 0)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'sqlite':
            return dialect.type_descriptor(String(78))
        return dialect.type_descriptor(Numeric(78, 0))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == 'sqlite':
            return str(int(value))
        return Decimal(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
