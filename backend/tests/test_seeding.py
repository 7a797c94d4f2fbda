"""Bulk student account creation."""
import pytest

from scifanor.auth import verify_password
from scifanor.models import Profile, User
from scifanor.seeding import generate_email, seed_students


@pytest.mark.parametrize("name, email", [
    ("Adrian Harry Putra Pardede", "adrian.pardede@scifanor.local"),
    ("Mentari BR. Situmorang", "mentari.situmorang@scifanor.local"),
    ("Keysya Fadhillah'lmi", "keysya.fadhillahlmi@scifanor.local"),
    ("Ardiansyah", "ardiansyah01@scifanor.local"),
])
def test_generate_email(name, email):
    assert generate_email(name) == email


def test_generate_email_needs_a_usable_part():
    with pytest.raises(ValueError):
        generate_email("Al")


def test_seed_creates_users_and_profiles(db):
    accounts = seed_students(db, ["Siti Mulia", "", "Tiara Salsabila"], password="SciFanor2026!")
    assert [a.email for a in accounts] == ["siti.mulia@scifanor.local", "tiara.salsabila@scifanor.local"]

    user = db.query(User).filter_by(email="siti.mulia@scifanor.local").one()
    assert verify_password("SciFanor2026!", user.password_hash)
    assert db.get(Profile, user.id).full_name == "Siti Mulia"


def test_seed_skips_existing_accounts(db):
    seed_students(db, ["Siti Mulia"])
    again = seed_students(db, ["Siti Mulia"])
    assert again[0].created is False
    assert again[0].password is None
    assert db.query(User).count() == 1
