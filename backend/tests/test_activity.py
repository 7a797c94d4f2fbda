"""Activity log writes and the plant history timeline."""
from datetime import timedelta

from conftest import BASE_TIME, make_plant, make_user

from scifanor.activity import get_activities, log_activity
from scifanor.errors import TransientIOError
from scifanor.models import ActionType, PlantActivityLog


def test_anonymous_actions_are_not_logged(db, backend_for, alice):
    plant = make_plant(db, alice, "Mangga")
    assert log_activity(backend_for(), plant.id, ActionType.UPDATE, "x") is None
    assert db.query(PlantActivityLog).count() == 0


def test_log_failure_is_swallowed(db, backend_for, alice, monkeypatch, caplog):
    plant = make_plant(db, alice, "Mangga")
    backend = backend_for(alice)

    def broken(*args, **kwargs):
        raise TransientIOError("disk full")

    monkeypatch.setattr(backend, "insert", broken)
    assert log_activity(backend, plant.id, ActionType.CREATE, "Menambahkan tumbuhan Mangga") is None
    assert "Error logging activity" in caplog.text


def test_history_is_newest_first_with_relative_time(db, backend_for, alice):
    plant = make_plant(db, alice, "Mangga")
    for minutes, details in ((0, "pertama"), (90, "kedua")):
        db.add(PlantActivityLog(
            plant_id=plant.id, user_id=alice.id, action_type="update",
            details=details, created_at=BASE_TIME + timedelta(minutes=minutes),
        ))
    db.commit()

    entries = get_activities(backend_for(), plant.id, now=BASE_TIME + timedelta(hours=2))
    assert [e.details for e in entries] == ["kedua", "pertama"]
    assert [e.time_ago for e in entries] == ["30 menit yang lalu", "2 jam yang lalu"]
    assert entries[0].user_name == "Alice Siregar"
    assert entries[0].user.initial == "A"


def test_history_without_profile_uses_placeholder_name(db, backend_for, alice):
    plant = make_plant(db, alice, "Mangga")
    ghost = make_user(db, "hantu@scifanor.local", with_profile=False)
    log_activity(backend_for(ghost), plant.id, ActionType.UPDATE, "Mengubah Habitat")

    entries = get_activities(backend_for(), plant.id)
    assert entries[0].user is None
    assert entries[0].user_name == "Unknown User"
    assert entries[0].time_ago == "baru saja"


def test_history_degrades_to_empty_on_read_failure(backend_for, monkeypatch):
    backend = backend_for()

    def broken(*args, **kwargs):
        raise TransientIOError("timeout")

    monkeypatch.setattr(backend, "fetch_where", broken)
    assert get_activities(backend, "p1") == []
