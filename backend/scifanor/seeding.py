"""Bulk creation of student accounts with their profiles."""
import logging
import re
import secrets
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from scifanor.auth import hash_password
from scifanor.models import Profile, User

logger = logging.getLogger(__name__)

EMAIL_DOMAIN = "scifanor.local"
_NON_LETTERS = re.compile(r"[^a-z\s]")


@dataclass
class SeededAccount:
    full_name: str
    email: str
    password: Optional[str]
    created: bool


def generate_email(full_name: str) -> str:
    """``first.last@scifanor.local`` from the longer name parts.

    Parts of two letters or fewer and the ``br`` marriage marker are ignored;
    a single remaining part becomes ``name01``.
    """
    parts = _NON_LETTERS.sub("", full_name.lower().strip()).split()
    clean = [p for p in parts if len(p) > 2 and p != "br"]
    if len(clean) >= 2:
        return f"{clean[0]}.{clean[-1]}@{EMAIL_DOMAIN}"
    if clean:
        return f"{clean[0]}01@{EMAIL_DOMAIN}"
    raise ValueError(f"Cannot derive an e-mail address from {full_name!r}")


def seed_students(db: Session, names: Iterable[str], password: Optional[str] = None) -> list[SeededAccount]:
    """Create a user and profile per name; existing e-mails are left untouched."""
    accounts = []
    for name in names:
        name = name.strip()
        if not name:
            continue
        email = generate_email(name)
        if db.query(User).filter(User.email == email).first():
            logger.info("Skipping %s, %s already exists", name, email)
            accounts.append(SeededAccount(name, email, None, created=False))
            continue

        plain = password or secrets.token_urlsafe(9)
        user = User(email=email, password_hash=hash_password(plain))
        db.add(user)
        db.flush()
        db.add(Profile(id=user.id, full_name=name, is_admin=False))
        db.commit()
        logger.info("Created %s (%s)", name, email)
        accounts.append(SeededAccount(name, email, plain, created=True))
    return accounts
