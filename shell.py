"""
Interactive Python shell for trying the stores and scheduler against the local database.

Usage:
    python shell.py

This opens a database session and preloads the catalogue, ledger, scheduler
and notification center into an interactive shell.
"""

import code
from datetime import date, datetime, time, timedelta

from core.config import settings
from core.database import SessionLocal, init_db

from models.medication import Medication, CatalogueCategory, CatalogueForm
from models.dose_event import DoseEvent

from services.catalogue import CatalogueStore
from services.dose_ledger import DoseLedger
from services.dose_scheduler import DoseScheduler
from services.notification_service import NotificationCenter, AuthorizationStatus
from services.selection_flow import SelectionFlowController


def today_doses(ledger: DoseLedger):
    """Print today's doses."""
    for event in ledger.list_for_day(date.today()):
        mark = "x" if event.is_completed else " "
        print(f"[{mark}] {event.timestamp:%H:%M} {event.name} {event.amount}")


def main():
    init_db()
    db = SessionLocal()
    center = NotificationCenter()
    center.add_delivery_handler(lambda r: print(f"\n*** {r.title}: {r.body}"))
    center.start()

    catalogue = CatalogueStore(db)
    catalogue.ensure_seeded()
    ledger = DoseLedger(db, center)
    scheduler = DoseScheduler(ledger, center)
    scheduler.restore_pending_reminders()

    namespace = {
        "settings": settings,
        "db": db,
        "center": center,
        "catalogue": catalogue,
        "ledger": ledger,
        "scheduler": scheduler,
        "new_flow": lambda: SelectionFlowController(catalogue, scheduler),
        "today_doses": lambda: today_doses(ledger),
        "Medication": Medication,
        "DoseEvent": DoseEvent,
        "CatalogueCategory": CatalogueCategory,
        "CatalogueForm": CatalogueForm,
        "AuthorizationStatus": AuthorizationStatus,
        "date": date,
        "datetime": datetime,
        "time": time,
        "timedelta": timedelta,
    }

    banner = f"""
{settings.APP_NAME} shell ({settings.DATABASE_URL})

Available objects:
  catalogue, ledger, scheduler, center, db
  new_flow()      - start a selection flow
  today_doses()   - print today's doses

Example:
  scheduler.schedule("布洛芬", date.today(), time(20, 0), "1 片")
"""
    try:
        code.interact(banner=banner, local=namespace)
    finally:
        center.shutdown()
        db.close()


if __name__ == "__main__":
    main()
