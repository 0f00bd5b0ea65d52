# utils/oracle.py
import requests
import logging
import secrets
import time
import random

from utils.errors import OracleUnavailable

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Sends a verse reference to the external oracle.

    The oracle answers later by calling ``/api/oracle/callback`` with the
    query id returned here.
    """

    def dispatch(self, reference, gas_limit):
        raise NotImplementedError


class LocalQueryDispatcher(QueryDispatcher):
    """In-process dispatcher. Issues ids and remembers what it was asked."""

    def __init__(self):
        self.dispatched = {}

    def dispatch(self, reference, gas_limit):
        query_id = '0x' + secrets.token_hex(32)
        self.dispatched[query_id] = (reference, gas_limit)
        logger.info(f"Local oracle accepted {reference} as {query_id} (gas limit {gas_limit})")
        return query_id


class HttpQueryDispatcher(QueryDispatcher):
    def __init__(self, url, callback_url, api_key=None, timeout=5, max_retries=2, base_delay=1):
        self.url = url
        self.callback_url = callback_url
        self.api_key = api_key
        self.timeout = timeout
        self.max_retries = max_retries
        self.base_delay = base_delay  # Base delay in seconds

    def _headers(self):
        headers = {"content-type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _backoff(self, retry_count):
        # Exponential backoff with jitter
        delay = self.base_delay * (2 ** retry_count) + random.uniform(0, 1)
        logger.info(f"Retrying oracle dispatch in {delay:.2f} seconds (attempt {retry_count}/{self.max_retries})...")
        time.sleep(delay)

    def dispatch(self, reference, gas_limit):
        data = {
            "reference": reference,
            "gas_limit": gas_limit,
            "callback_url": self.callback_url
        }
        retry_count = 0

        while True:
            try:
                response = requests.post(self.url, headers=self._headers(), json=data, timeout=self.timeout)
            except requests.RequestException as e:
                logger.warning(f"Oracle dispatch for {reference} failed: {e}")
                if retry_count < self.max_retries:
                    retry_count += 1
                    self._backoff(retry_count)
                    continue
                raise OracleUnavailable(f"Oracle unreachable after {self.max_retries} retries") from e

            if response.status_code == 429 or response.status_code >= 500:
                logger.warning(f"Oracle busy: {response.status_code}, {response.text}")
                if retry_count < self.max_retries:
                    retry_count += 1
                    self._backoff(retry_count)
                    continue
                raise OracleUnavailable(f"Oracle returned {response.status_code} after {self.max_retries} retries")

            if response.status_code not in (200, 201, 202):
                logger.error(f"Oracle rejected query for {reference}: {response.status_code}, {response.text}")
                raise OracleUnavailable(f"Oracle rejected the query ({response.status_code})")

            try:
                query_id = response.json()["query_id"]
            except (ValueError, KeyError, TypeError) as e:
                raise OracleUnavailable("Oracle reply did not include a query_id") from e

            if not query_id:
                raise OracleUnavailable("Oracle reply did not include a query_id")

            logger.info(f"Oracle accepted {reference} as {query_id} (gas limit {gas_limit})")
            return str(query_id)


def build_dispatcher(config):
    """Pick the dispatcher named by ORACLE_MODE."""
    mode = config.get('ORACLE_MODE', 'http')
    if mode == 'local':
        return LocalQueryDispatcher()
    if mode == 'http':
        return HttpQueryDispatcher(
            url=config['ORACLE_URL'],
            callback_url=config['ORACLE_CALLBACK_URL'],
            api_key=config.get('ORACLE_API_KEY'),
            timeout=config.get('ORACLE_TIMEOUT', 5),
            max_retries=config.get('ORACLE_MAX_RETRIES', 2),
            base_delay=config.get('ORACLE_RETRY_DELAY', 1)
        )
    raise ValueError(f"Unknown ORACLE_MODE: {mode}")
