#!/usr/bin/env python3
"""
Initialize the posts database.

Creates tables, a default API key (printed once) and, unless --skip-sync is
given, imports users and posts from JSONPlaceholder.

Usage:
  cd backend
  export DATABASE_URL="postgresql://..."   # or .env
  PYTHONPATH=. python scripts/init_db.py
  PYTHONPATH=. python scripts/init_db.py --skip-sync
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

# Run from repo root or backend; ensure backend is on path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx

from app.core.config import get_settings
from app.core.dependencies import SessionLocal, engine
from app.models.post import Base
from app.services.sync_service import initialize_database


def main() -> None:
    parser = argparse.ArgumentParser(description="Create tables, seed an API key and sync demo posts.")
    parser.add_argument("--skip-sync", action="store_true", help="Do not fetch users/posts from JSONPlaceholder.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if SessionLocal is None or engine is None:
        print("Error: DATABASE_URL is not set.", file=sys.stderr)
        sys.exit(1)

    settings = get_settings()
    Base.metadata.create_all(engine)

    db = SessionLocal()
    try:
        if args.skip_sync:
            summary = initialize_database(db)
        else:
            with httpx.Client(base_url=settings.jsonplaceholder_url, timeout=settings.sync_timeout_seconds) as client:
                summary = initialize_database(db, client)
    except Exception as exc:
        print(f"Database initialization failed: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    print("Database initialization completed.")
    print(f"  Users:    {summary.users} ({summary.users_synced} synced)")
    print(f"  Posts:    {summary.posts} ({summary.posts_synced} synced)")
    print(f"  API keys: {summary.api_keys}")
    if summary.created_api_key:
        print("Default API key (store it now, it is not shown again):")
        print(f"  {summary.created_api_key}")


if __name__ == "__main__":
    main()
