#!/usr/bin/env python3
"""
Create student accounts (user + profile) from a list of names.
Writes the generated credentials to a CSV file.
"""
import argparse
import csv
import logging

from scifanor.database import get_session_factory, init_db
from scifanor.seeding import seed_students


def main():
    parser = argparse.ArgumentParser(description="Create SciFanor student accounts")
    parser.add_argument("names_file", help="Text file with one full name per line")
    parser.add_argument("--password", help="Shared initial password (random per student if not set)")
    parser.add_argument("--output", default="siswa_credentials.csv", help="Credentials CSV path")
    parser.add_argument("--create-tables", action="store_true", help="Create tables before seeding")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    with open(args.names_file, encoding="utf-8") as fh:
        names = [line.strip() for line in fh if line.strip()]

    if args.create_tables:
        init_db()

    session = get_session_factory()()
    try:
        accounts = seed_students(session, names, password=args.password)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    created = [a for a in accounts if a.created]
    with open(args.output, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["No", "Nama", "Email", "Password"])
        for i, account in enumerate(created, start=1):
            writer.writerow([i, account.full_name, account.email, account.password])

    print("=" * 60)
    print(f"Finished! Created: {len(created)}, Skipped: {len(accounts) - len(created)}")
    print(f"Credentials saved to: {args.output}")
    print("=" * 60)


if __name__ == "__main__":
    main()
