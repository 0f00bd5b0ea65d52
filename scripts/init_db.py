# scripts/init_db.py
import sys
import logging
from pathlib import Path

# Add the parent directory to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from config import Config
from database import init_engine, init_db

logging.basicConfig(level=logging.INFO)

def main():
    """Create the verse oracle tables for local development"""
    print(f"Creating tables at: {Config.DATABASE_URL}")
    init_engine(Config.DATABASE_URL)
    init_db()
    print("Verse oracle tables created successfully!")

if __name__ == '__main__':
    main()
