import threading

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from core.database import build_engine, init_db
from core.exceptions import NotFoundError, PersistenceError, ValidationError
from models.medication import CatalogueCategory, UNCATEGORIZED
from schemas.medication import MedicationFields
from services.catalogue import CatalogueStore
from services.seed_data import BUILTIN_MEDICATIONS


def _names(medications):
    return [m.name for m in medications]


def test_list_sorted_by_category_then_name(catalogue):
    catalogue.add("b", {"category": "2"})
    catalogue.add("a", {"category": "2"})
    catalogue.add("z", {"category": "1"})
    catalogue.add("c", {"category": ""})

    listed = catalogue.list()
    keys = [(m.category, m.name) for m in listed]
    assert keys == sorted(keys)
    assert _names(listed) == ["c", "z", "a", "b"]


def test_filter_is_case_insensitive_on_name_generic_and_category(catalogue):
    catalogue.add("布洛芬", {"generic_name": "Ibuprofen", "category": "感冒发烧"})
    catalogue.add("二甲双胍", {"generic_name": "Metformin", "category": "糖尿病"})
    catalogue.add("Aspirin", {"category": "心血管"})

    assert _names(catalogue.list("ibu")) == ["布洛芬"]
    assert _names(catalogue.list("ASPI")) == ["Aspirin"]
    assert _names(catalogue.list("糖尿")) == ["二甲双胍"]
    assert len(catalogue.list("  ")) == 3
    assert catalogue.list("nothing-like-this") == []


def test_add_sets_user_flags(catalogue):
    med = catalogue.add("  维生素 C  ", MedicationFields(category="营养补充"), is_favorite=True)
    assert med.id is not None
    assert med.name == "维生素 C"
    assert med.is_builtin is False
    assert med.is_favorite is True
    assert med.doses_per_day == 1
    assert med.interval_days == 1


def test_add_rejects_blank_name(catalogue):
    with pytest.raises(ValidationError):
        catalogue.add("   ")
    assert catalogue.list() == []


def test_list_favorites(catalogue):
    catalogue.add("a", {"category": "x"}, is_favorite=True)
    catalogue.add("b", {"category": "x"})
    assert _names(catalogue.list_favorites()) == ["a"]


def test_ensure_seeded_is_idempotent(catalogue):
    inserted = catalogue.ensure_seeded()
    assert inserted == len(BUILTIN_MEDICATIONS)
    count = len(catalogue.list())

    assert catalogue.ensure_seeded() == 0
    assert len(catalogue.list()) == count
    assert all(m.is_builtin for m in catalogue.list())


def test_ensure_seeded_skips_non_empty_catalogue(catalogue):
    catalogue.add("自备药")
    assert catalogue.ensure_seeded() == 0
    assert _names(catalogue.list()) == ["自备药"]


def test_seed_covers_every_category():
    categories = {row[2] for row in BUILTIN_MEDICATIONS}
    assert categories == set(CatalogueCategory)


def test_reconcile_updates_existing_row(catalogue):
    existing = catalogue.add("阿司匹林", {"category": "心血管", "strength": "50 mg"})
    before = len(catalogue.list())

    med = catalogue.reconcile_by_name("阿司匹林", {"strength": "100 mg", "notes": "饭后"})

    assert len(catalogue.list()) == before
    assert med.id == existing.id
    assert med.is_favorite is True
    assert med.strength == "100 mg"
    assert med.notes == "饭后"
    # Fields that were not supplied are kept
    assert med.category == "心血管"


def test_reconcile_creates_favorite_when_missing(catalogue):
    med = catalogue.reconcile_by_name("新药", {"category": "过敏"})
    assert med.is_favorite is True
    assert med.is_builtin is False
    assert _names(catalogue.list()) == ["新药"]


def test_reconcile_name_match_is_case_sensitive(catalogue):
    catalogue.add("Aspirin")
    catalogue.reconcile_by_name("aspirin")
    assert sorted(_names(catalogue.list())) == ["Aspirin", "aspirin"]


def test_add_then_delete(catalogue):
    med = catalogue.add("二甲双胍", {"category": "糖尿病"})
    assert _names(catalogue.list()).count("二甲双胍") == 1

    catalogue.delete(med)
    assert "二甲双胍" not in _names(catalogue.list())


def test_batch_delete(catalogue):
    a = catalogue.add("a")
    b = catalogue.add("b")
    catalogue.add("c")
    assert catalogue.delete([a, b]) == 2
    assert _names(catalogue.list()) == ["c"]


def test_toggle_favorite_twice_restores(catalogue):
    med = catalogue.add("a")
    assert catalogue.toggle_favorite(med).is_favorite is True
    assert catalogue.toggle_favorite(med).is_favorite is False


def test_set_usage_plan(catalogue):
    med = catalogue.add("胰岛素")
    med = catalogue.set_usage_plan(med, doses_per_day=3, interval_days=2)
    assert (med.doses_per_day, med.interval_days) == (3, 2)


@pytest.mark.parametrize("doses, interval", [(0, 1), (1, 0), (-1, 5)])
def test_set_usage_plan_rejects_values_below_one(catalogue, doses, interval):
    med = catalogue.add("胰岛素")
    with pytest.raises(ValidationError):
        catalogue.set_usage_plan(med, doses, interval)


def test_grouped_keeps_catalogue_order(catalogue):
    catalogue.add("b", {"category": "心血管"})
    catalogue.add("a", {"category": "心血管"})
    catalogue.add("x", {"category": "糖尿病"})
    catalogue.add("y")

    groups = catalogue.grouped()
    assert list(groups) == [UNCATEGORIZED, "心血管", "糖尿病"]
    assert _names(groups["心血管"]) == ["a", "b"]


def test_get_unknown_raises(catalogue):
    with pytest.raises(NotFoundError):
        catalogue.get(999)


def test_mutations_publish_full_list(catalogue):
    published = []
    unsubscribe = catalogue.changes.subscribe(lambda items: published.append(_names(items)))

    med = catalogue.add("b")
    catalogue.add("a")
    catalogue.delete(med)
    unsubscribe()
    catalogue.add("c")

    assert published == [["b"], ["a", "b"], ["a"]]


def test_failed_save_raises_persistence_error(catalogue, db, monkeypatch):
    def boom():
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db, "commit", boom)
    with pytest.raises(PersistenceError):
        catalogue.add("a")


def test_failed_read_is_an_empty_result(catalogue, db, monkeypatch):
    catalogue.add("a", is_favorite=True)

    def boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "execute", boom)

    assert catalogue.list() == []
    assert catalogue.list_favorites() == []
    assert catalogue.repo.count() == 0


def test_concurrent_seeding_inserts_once(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'catalogue.db'}")
    init_db(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    barrier = threading.Barrier(4)
    inserted = []

    def seed():
        with factory() as session:
            barrier.wait()
            inserted.append(CatalogueStore(session).ensure_seeded())

    workers = [threading.Thread(target=seed) for _ in range(4)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    with factory() as session:
        assert len(CatalogueStore(session).list()) == len(BUILTIN_MEDICATIONS)
    assert sorted(inserted) == [0, 0, 0, len(BUILTIN_MEDICATIONS)]
    engine.dispose()
