# scripts/issue_token.py
"""Mint a bearer token for a principal, e.g. the owner or the oracle.

    python scripts/issue_token.py owner-address --hours 1
"""
import argparse
import sys
from pathlib import Path

# Add the parent directory to the Python path properly
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import Config
from utils.auth import generate_token, JWT_EXPIRATION_HOURS

def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('principal', help='Value for the sub claim')
    parser.add_argument('--hours', type=int, default=JWT_EXPIRATION_HOURS)
    args = parser.parse_args(argv)

    print(generate_token(args.principal, Config.JWT_SECRET, Config.JWT_AUDIENCE, hours=args.hours))

if __name__ == '__main__':
    main()
