"""
Storage contract tests, run against both the in-memory and SQLite backends.
"""
from datetime import datetime, timedelta, timezone

import pytest

from cure_it_api.app.core.config import Settings
from cure_it_api.app.core.errors import ValidationError
from cure_it_api.app.schemas.contact import ContactFilters
from cure_it_api.app.schemas.session import SessionRead
from cure_it_api.app.storage import MemoryStorage, SQLiteStorage, create_storage
from cure_it_api.app.storage.seed import DEFAULT_CONTACTS

T0 = datetime(2020, 1, 1, tzinfo=timezone.utc)


def contact(name, service_type="police", city="Mumbai", state="Maharashtra", **extra):
    return {"name": name, "service_type": service_type, "phone": "100", "city": city, "state": state, **extra}


def test_create_and_fetch_user(storage):
    created = storage.create_user({"email": "a@example.com", "password": "hash", "role": "user"})

    assert storage.get_user(created.id).email == "a@example.com"
    assert storage.get_user_by_email("a@example.com").id == created.id
    assert storage.get_user_by_email("A@example.com") is None
    assert storage.get_user("missing") is None


def test_duplicate_email_is_rejected(storage):
    storage.create_user({"email": "a@example.com", "password": "hash", "role": "user"})

    with pytest.raises(ValidationError):
        storage.create_user({"email": "a@example.com", "password": "other", "role": "admin"})


def test_update_user_refreshes_updated_at(storage):
    created = storage.create_user(
        {"email": "a@example.com", "password": "hash", "role": "user", "created_at": T0, "updated_at": T0}
    )

    updated = storage.update_user(created.id, {"city": "Pune", "last_login_at": T0 + timedelta(hours=1)})

    assert updated.city == "Pune"
    assert updated.last_login_at == T0 + timedelta(hours=1)
    assert updated.updated_at > T0
    assert updated.created_at == T0
    assert storage.update_user("missing", {"city": "Pune"}) is None


def test_list_users_newest_first(storage):
    for offset, email in enumerate(["old@example.com", "mid@example.com", "new@example.com"]):
        stamp = T0 + timedelta(minutes=offset)
        storage.create_user(
            {"email": email, "password": "hash", "role": "user", "created_at": stamp, "updated_at": stamp}
        )

    assert [u.email for u in storage.list_users()] == ["new@example.com", "mid@example.com", "old@example.com"]


def test_list_contacts_orders_by_service_type_then_name(storage):
    storage.create_contact(contact("Zeta Station", "police"))
    storage.create_contact(contact("Alpha Clinic", "medical"))
    storage.create_contact(contact("Beta Station", "police"))
    storage.create_contact(contact("City Fire", "fire"))

    result = [(c.service_type.value, c.name) for c in storage.list_contacts()]

    assert result == [
        ("fire", "City Fire"),
        ("medical", "Alpha Clinic"),
        ("police", "Beta Station"),
        ("police", "Zeta Station"),
    ]


def test_list_contacts_filters(storage):
    storage.create_contact(contact("Mumbai Police", city="Mumbai"))
    storage.create_contact(contact("Delhi Police", city="Delhi", state="Delhi"))
    storage.create_contact(contact("Delhi Clinic", "medical", city="Delhi", state="Delhi", facility="City HOSPITAL"))
    storage.create_contact(contact("Hidden", city="Delhi", state="Delhi", is_active=False))

    by_city = storage.list_contacts(ContactFilters(city="Delhi"))
    by_state_and_type = storage.list_contacts(ContactFilters(state="Delhi", service_type="police"))
    by_search = storage.list_contacts(ContactFilters(search="hospital"))

    assert [c.name for c in by_city] == ["Delhi Clinic", "Delhi Police"]
    assert [c.name for c in by_state_and_type] == ["Delhi Police"]
    assert [c.name for c in by_search] == ["Delhi Clinic"]


def test_search_treats_wildcards_literally(storage):
    storage.create_contact(contact("Mumbai Police"))
    storage.create_contact(contact("100% Care", "medical"))

    assert [c.name for c in storage.list_contacts(ContactFilters(search="%"))] == ["100% Care"]
    assert storage.list_contacts(ContactFilters(search="_")) == []


def test_search_folds_non_ascii_case(storage):
    storage.create_contact(contact("\u00c9cole Police"))
    storage.create_contact(contact("Station", "fire"))

    assert [c.name for c in storage.list_contacts(ContactFilters(search="\u00e9COLE"))] == ["\u00c9cole Police"]


def test_contact_defaults(storage):
    created = storage.create_contact(contact("Defaulted"))

    assert created.availability == "24/7"
    assert created.is_active is True
    assert created.designation is None


def test_update_and_delete_contact(storage):
    created = storage.create_contact(contact("Station"), contact_id="c-1")

    updated = storage.update_contact("c-1", {"phone": "112", "is_active": False})

    assert created.id == "c-1"
    assert updated.phone == "112"
    assert updated.is_active is False
    assert updated.updated_at >= created.updated_at
    assert storage.list_contacts() == []
    assert storage.update_contact("missing", {"phone": "1"}) is None
    assert storage.delete_contact("c-1") is True
    assert storage.delete_contact("c-1") is False
    assert storage.get_contact("c-1") is None


def test_sessions_roundtrip_and_expiry(storage):
    user = storage.create_user({"email": "a@example.com", "password": "hash", "role": "user"})
    expired = SessionRead(id="s-old", user_id=user.id, expires_at=T0, created_at=T0 - timedelta(days=7))
    live = SessionRead(id="s-new", user_id=user.id, expires_at=T0 + timedelta(days=1), created_at=T0)
    storage.create_session(expired)
    storage.create_session(live)

    assert storage.get_session("s-new").expires_at == live.expires_at
    assert storage.delete_expired_sessions(T0) == 1
    assert storage.get_session("s-old") is None
    assert storage.delete_session("s-new") is True
    assert storage.delete_session("s-new") is False


def test_initialize_seeds_only_empty_store(storage):
    storage.seed = True
    storage.initialize()
    storage.initialize()

    assert storage.count_contacts() == len(DEFAULT_CONTACTS)
    assert storage.get_contact("contact-6").name == "AIIMS Delhi"


def test_sqlite_data_survives_new_instance(tmp_path):
    path = str(tmp_path / "persist.db")
    first = SQLiteStorage(path)
    first.initialize()
    first.create_user({"email": "a@example.com", "password": "hash", "role": "admin"})

    second = SQLiteStorage(path)
    second.initialize()

    assert second.get_user_by_email("a@example.com").role.value == "admin"


def test_create_storage_selects_backend(tmp_path):
    assert isinstance(create_storage(Settings(storage_backend="memory")), MemoryStorage)
    sqlite_backend = create_storage(Settings(storage_backend="sqlite", database_url=str(tmp_path / "x.db")))
    assert isinstance(sqlite_backend, SQLiteStorage)

    with pytest.raises(ValueError):
        create_storage(Settings(storage_backend="mongo"))
