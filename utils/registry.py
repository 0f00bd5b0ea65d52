# utils/registry.py
"""Paid verse lookups and the owner controls around them.

A reference moves ``unrequested -> pending -> resolved``: ``request`` takes
the fee and hands the reference to the oracle, ``fulfill`` is the oracle's
answer. Every mutation runs under one lock and in one database transaction
so it either applies completely or not at all.
"""
import logging
import secrets
import threading

from database import get_db_session
from models import ServiceState, PendingQuery, ResolvedVerse, Withdrawal
from models.service_state import SERVICE_STATE_ID
from utils.errors import EmptyReference, InsufficientPayment, UnknownQuery, Unauthorized
from utils.parser import parse_response

logger = logging.getLogger(__name__)

MAX_AMOUNT = 2 ** 256 - 1  # uint256

STATUS_UNREQUESTED = 'unrequested'
STATUS_PENDING = 'pending'
STATUS_RESOLVED = 'resolved'


def _load_state(db, for_update=False):
    query = db.query(ServiceState).filter_by(id=SERVICE_STATE_ID)
    if for_update:
        query = query.with_for_update()
    state = query.first()
    if state is None:
        raise RuntimeError("Service state has not been initialised")
    return state


class AccessControl:
    def __init__(self, owner):
        self.owner = owner

    def is_owner(self, caller):
        return caller is not None and caller == self.owner

    def require_owner(self, caller, action):
        if not self.is_owner(caller):
            logger.warning(f"Rejected attempt by {caller} to {action}")
            raise Unauthorized(f"Only the owner may {action}")


class PriceTable:
    def __init__(self, access):
        self.access = access

    def get_price(self, db):
        return _load_state(db).verse_price

    def set_price(self, db, new_amount, caller):
        self.access.require_owner(caller, 'set the verse price')
        state = _load_state(db, for_update=True)
        old_amount, state.verse_price = state.verse_price, new_amount
        logger.info(f"Verse price changed from {old_amount} to {new_amount}")


class OracleBudget:
    def __init__(self, access):
        self.access = access

    def get_budget(self, db):
        return _load_state(db).gas_limit

    def set_budget(self, db, new_amount, caller):
        self.access.require_owner(caller, 'set the oracle gas limit')
        state = _load_state(db, for_update=True)
        old_amount, state.gas_limit = state.gas_limit, new_amount
        logger.info(f"Oracle gas limit changed from {old_amount} to {new_amount}")


class Treasury:
    def __init__(self, access):
        self.access = access

    def get_balance(self, db):
        return _load_state(db).balance

    def credit(self, db, amount):
        state = _load_state(db, for_update=True)
        state.balance += amount

    def withdraw(self, db, caller):
        """Move the whole balance to the owner. An empty treasury moves 0."""
        self.access.require_owner(caller, 'withdraw the treasury')
        state = _load_state(db, for_update=True)
        amount = state.balance
        state.balance = 0
        db.add(Withdrawal(recipient=self.access.owner, amount=amount))
        logger.info(f"Withdrew {amount} to owner {self.access.owner}")
        return amount


class LookupRegistry:
    def __init__(self, prices, budget, treasury, dispatcher, oracle_address):
        self.prices = prices
        self.budget = budget
        self.treasury = treasury
        self.dispatcher = dispatcher
        self.oracle_address = oracle_address

    def request(self, db, reference, payment, caller):
        if not reference or not reference.strip():
            raise EmptyReference()

        price = self.prices.get_price(db)
        if payment < price:
            logger.warning(f"Payment of {payment} from {caller} for {reference} is below price {price}")
            raise InsufficientPayment(f"Payment of {payment} is below the verse price of {price}")

        gas_limit = self.budget.get_budget(db)
        self.treasury.credit(db, payment)

        superseded = db.query(PendingQuery).filter_by(reference=reference).first()
        if superseded is not None:
            logger.info(f"Query {superseded.query_id} for {reference} superseded by a new request")
            db.delete(superseded)
            db.flush()  # Free the reference before inserting the new row

        # Written under a placeholder id so every database write has succeeded
        # before the oracle hears about the query
        pending = PendingQuery(
            query_id='provisional-' + secrets.token_hex(16),
            reference=reference,
            requested_by=caller,
            payment=payment,
            gas_limit=gas_limit
        )
        db.add(pending)
        db.flush()

        pending.query_id = self.dispatcher.dispatch(reference, gas_limit)
        db.flush()
        logger.info(f"Accepted request for {reference} from {caller}: query {pending.query_id}, paid {payment}")
        return pending.query_id

    def fulfill(self, db, query_id, raw_response, caller):
        if caller != self.oracle_address:
            logger.warning(f"Rejected callback for {query_id} from untrusted caller {caller}")
            raise Unauthorized("Only the oracle may deliver results")

        pending = db.get(PendingQuery, query_id) if query_id else None
        if pending is None:
            logger.warning(f"Callback for unknown query {query_id}")
            raise UnknownQuery(f"No pending query with id {query_id}")

        # Parse failures leave the pending query where it is
        fields = parse_response(raw_response)

        record = db.get(ResolvedVerse, pending.reference)
        if record is None:
            record = ResolvedVerse(reference=pending.reference)
            db.add(record)
        record.book = fields.book
        record.chapter = fields.chapter
        record.verse = fields.verse
        record.text = fields.text
        record.query_id = query_id

        db.delete(pending)
        logger.info(f"Resolved {pending.reference} from query {query_id}: {fields.book} {fields.chapter}:{fields.verse}")
        return fields

    def get_verse(self, db, reference):
        record = db.get(ResolvedVerse, reference) if reference else None
        return record.to_json() if record else None

    def get_status(self, db, reference):
        if db.query(PendingQuery).filter_by(reference=reference).first() is not None:
            return STATUS_PENDING
        if db.get(ResolvedVerse, reference) is not None:
            return STATUS_RESOLVED
        return STATUS_UNREQUESTED

    def list_pending(self, db):
        rows = db.query(PendingQuery).order_by(PendingQuery.created_at).all()
        return [row.to_json() for row in rows]


class VerseOracleService:
    """The one service object the HTTP layer talks to.

    Built by ``app.create_app`` and reached through
    ``current_app.extensions['verse_oracle']``.
    """

    def __init__(self, dispatcher, owner, oracle_address, initial_price, initial_gas_limit, session_scope=get_db_session):
        self._lock = threading.Lock()
        self._session_scope = session_scope

        stored_owner = self._bootstrap(owner, initial_price, initial_gas_limit)

        self.access = AccessControl(stored_owner)
        self.prices = PriceTable(self.access)
        self.budget = OracleBudget(self.access)
        self.treasury = Treasury(self.access)
        self.registry = LookupRegistry(self.prices, self.budget, self.treasury, dispatcher, oracle_address)

    def _bootstrap(self, owner, initial_price, initial_gas_limit):
        with self._session_scope() as db:
            state = db.get(ServiceState, SERVICE_STATE_ID)
            if state is None:
                if not owner:
                    raise RuntimeError("OWNER_ADDRESS must be set the first time the service starts")
                db.add(ServiceState(
                    id=SERVICE_STATE_ID,
                    owner=owner,
                    verse_price=initial_price,
                    gas_limit=initial_gas_limit,
                    balance=0
                ))
                logger.info(f"Service initialised for owner {owner}: price {initial_price}, gas limit {initial_gas_limit}")
                return owner

            if owner and owner != state.owner:
                logger.warning(f"Configured owner {owner} ignored; the owner is fixed as {state.owner}")
            return state.owner

    @property
    def owner(self):
        return self.access.owner

    @property
    def oracle_address(self):
        return self.registry.oracle_address

    def is_owner(self, caller):
        return self.access.is_owner(caller)

    # Reads

    def get_price(self):
        with self._session_scope() as db:
            return self.prices.get_price(db)

    def get_budget(self):
        with self._session_scope() as db:
            return self.budget.get_budget(db)

    def get_balance(self):
        with self._session_scope() as db:
            return self.treasury.get_balance(db)

    def get_verse(self, reference):
        with self._session_scope() as db:
            return self.registry.get_verse(db, reference)

    def get_status(self, reference):
        with self._session_scope() as db:
            return self.registry.get_status(db, reference)

    def list_pending(self, caller):
        self.access.require_owner(caller, 'list pending queries')
        with self._session_scope() as db:
            return self.registry.list_pending(db)

    # Mutations

    def set_price(self, new_amount, caller):
        with self._lock, self._session_scope() as db:
            self.prices.set_price(db, new_amount, caller)

    def set_budget(self, new_amount, caller):
        with self._lock, self._session_scope() as db:
            self.budget.set_budget(db, new_amount, caller)

    def withdraw(self, caller):
        with self._lock, self._session_scope() as db:
            return self.treasury.withdraw(db, caller)

    def request(self, reference, payment, caller):
        with self._lock, self._session_scope() as db:
            return self.registry.request(db, reference, payment, caller)

    def fulfill(self, query_id, raw_response, caller):
        with self._lock, self._session_scope() as db:
            return self.registry.fulfill(db, query_id, raw_response, caller)
