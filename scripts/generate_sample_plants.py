#!/usr/bin/env python3
"""
Populate a running SciFanor API with a handful of sample plants.
Logs in with an existing account and creates each plant through the API.
"""
import argparse

import requests

# Configuration
API_URL = "http://localhost:8000"

SAMPLE_PLANTS = [
    {
        "nama_indonesia": "Mangga",
        "nama_latin": "Mangifera indica",
        "divisi": "Magnoliophyta",
        "class": "Magnoliopsida",
        "ordo": "Sapindales",
        "famili": "Anacardiaceae",
        "genus": "Mangifera",
        "spesies": "Mangifera indica",
        "habitat": "Dataran rendah tropis dengan musim kemarau yang jelas.",
        "manfaat": "Buahnya dimakan segar atau diolah menjadi jus dan manisan.",
    },
    {
        "nama_indonesia": "Manggis",
        "nama_latin": "Garcinia mangostana",
        "ordo": "Malpighiales",
        "famili": "Clusiaceae",
        "genus": "Garcinia",
        "spesies": "Garcinia mangostana",
        "habitat": "Hutan hujan tropis yang lembap.",
    },
    {
        "nama_indonesia": "Jambu Biji",
        "nama_latin": "Psidium guajava",
        "ordo": "Myrtales",
        "famili": "Myrtaceae",
        "genus": "Psidium",
        "spesies": "Psidium guajava",
        "ciri_khas": "Kulit batang licin dan mengelupas. Daun berhadapan.",
    },
    {
        "nama_indonesia": "Cengkeh",
        "nama_latin": "Syzygium aromaticum",
        "ordo": "Myrtales",
        "famili": "Myrtaceae",
        "genus": "Syzygium",
        "spesies": "Syzygium aromaticum",
        "manfaat": "Bunga kering dipakai sebagai rempah dan bahan rokok kretek.",
    },
]


def login(email: str, password: str) -> dict:
    res = requests.post(f"{API_URL}/auth/login", json={"email": email, "password": password})
    res.raise_for_status()
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


def main():
    parser = argparse.ArgumentParser(description="Create sample plants through the API")
    parser.add_argument("--email", required=True, help="Account used as the plants' creator")
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    print("=" * 60)
    print("Sample Plant Generator")
    print("=" * 60)

    headers = login(args.email, args.password)
    created = 0
    for plant in SAMPLE_PLANTS:
        try:
            res = requests.post(f"{API_URL}/plants", headers=headers, json=plant)
            if res.status_code == 201:
                created += 1
                print(f"  {plant['nama_indonesia']}: {res.json()['id']}")
            else:
                print(f"  {plant['nama_indonesia']}: error {res.status_code} {res.text}")
        except requests.RequestException as e:
            print(f"  Connection error: {e}")

    print(f"\n{'=' * 60}")
    print(f"SUCCESS: Created {created} of {len(SAMPLE_PLANTS)} plants")
    print("=" * 60)


if __name__ == "__main__":
    main()
