# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv()

class Config:
    DATABASE_URL = os.getenv('DATABASE_URL', f"sqlite:///{os.path.join(BASE_DIR, 'verse_oracle.db')}")

    # Principals
    OWNER_ADDRESS = os.getenv('OWNER_ADDRESS')
    ORACLE_ADDRESS = os.getenv('ORACLE_ADDRESS', 'oracle')

    # Values used the first time the service state is created
    INITIAL_VERSE_PRICE = int(os.getenv('INITIAL_VERSE_PRICE', 15000000000000000))  # 0.015 ETH in wei
    INITIAL_GAS_LIMIT = int(os.getenv('INITIAL_GAS_LIMIT', 500000))

    # Outbound oracle
    ORACLE_MODE = os.getenv('ORACLE_MODE', 'http')  # 'http' or 'local'
    ORACLE_URL = os.getenv('ORACLE_URL', 'http://localhost:8545/queries')
    ORACLE_API_KEY = os.getenv('ORACLE_API_KEY')
    ORACLE_CALLBACK_URL = os.getenv('ORACLE_CALLBACK_URL', 'http://localhost:5001/api/oracle/callback')
    ORACLE_TIMEOUT = float(os.getenv('ORACLE_TIMEOUT', 5))
    ORACLE_MAX_RETRIES = int(os.getenv('ORACLE_MAX_RETRIES', 2))
    ORACLE_RETRY_DELAY = float(os.getenv('ORACLE_RETRY_DELAY', 1))

    # Bearer tokens
    JWT_SECRET = os.getenv('JWT_SECRET', 'your-secret-key')  # In production, use a proper secret key
    JWT_AUDIENCE = os.getenv('JWT_AUDIENCE', 'authenticated')
