"""
Recompute photo and gallery like counters from the like ledger.

Run after a crash or whenever counters look off:
    python reconcile_likes.py
"""
import sys
import os

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.db.session import SessionLocal
from app.services.reconcile_service import reconcile_like_counters


def reconcile():
    """Repair like counters that drifted from the ledger."""
    db = SessionLocal()
    try:
        repaired = reconcile_like_counters(db)
        print(f"Reconciliation completed: {repaired} counter(s) repaired")
    except Exception as e:
        print(f"Reconciliation failed: {e}")
        import traceback
        traceback.print_exc()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    reconcile()
