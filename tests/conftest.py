import os

os.environ.setdefault("ENABLE_FILE_LOGGING", "false")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("NOTIFICATION_AUTHORIZATION", "authorized")
os.environ.setdefault("SEED_CATALOGUE", "false")

from datetime import datetime

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import build_engine, init_db
from services.catalogue import CatalogueStore
from services.dose_ledger import DoseLedger
from services.dose_scheduler import DoseScheduler
from services.notification_service import AuthorizationStatus, NotificationCenter
from services.selection_flow import FlowState, SelectionFlowController

# Every dose date used in the tests lies after this moment
NOW = datetime(2025, 1, 1, 0, 0)


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def center():
    """Notification center whose scheduler is never started."""
    return NotificationCenter(
        scheduler=BackgroundScheduler(),
        status=AuthorizationStatus.AUTHORIZED,
        enabled=True,
    )


@pytest.fixture
def catalogue(db):
    return CatalogueStore(db)


@pytest.fixture
def ledger(db, center):
    return DoseLedger(db, center)


@pytest.fixture
def dose_scheduler(ledger, center):
    return DoseScheduler(ledger, center, clock=lambda: NOW)


@pytest.fixture
def flow(catalogue, dose_scheduler):
    state = FlowState.start(initial_date=datetime(2025, 6, 1).date(), now=NOW)
    return SelectionFlowController(catalogue, dose_scheduler, state)
