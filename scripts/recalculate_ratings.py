#!/usr/bin/env python3
"""
Rebuild Book Rating Aggregates

Recomputes average_rating and review_count for every book from its reviews.
Run after bulk imports or manual database edits.

USAGE:
    python scripts/recalculate_ratings.py
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bookcatalog.database import SessionLocal
from bookcatalog.services.ratings import recalculate_all_book_ratings


def main() -> None:
    db = SessionLocal()
    try:
        count = recalculate_all_book_ratings(db)
        print(f"Recalculated ratings for {count} books.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
