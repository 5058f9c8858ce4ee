#!/usr/bin/env python3
"""
Seed script: registers users and creates farms via the API (no direct DB).
Addresses are Hungarian settlements so both the geocoder and the router can resolve them.
Run with the API up:
  python scripts/seed_data.py
  python scripts/seed_data.py --farms-per-user 10 --base-url http://localhost:8000/api/v1
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000/api/v1"

USERS = [
    {"email": "test1@example.com", "password": "admin1", "address": "Budapest Nánási út"},
    {"email": "test2@example.com", "password": "admin2", "address": "Szolnok"},
    {"email": "test3@example.com", "password": "admin3", "address": "Kecskemét"},
    {"email": "test4@example.com", "password": "admin4", "address": "Zalaegerszeg"},
]

SETTLEMENTS = [
    "Debrecen", "Szeged", "Miskolc", "Pécs", "Győr", "Nyíregyháza", "Székesfehérvár",
    "Szombathely", "Szolnok", "Tatabánya", "Kaposvár", "Érd", "Veszprém", "Békéscsaba",
    "Eger", "Sopron", "Nagykanizsa", "Dunaújváros", "Hódmezővásárhely", "Cegléd", "Baja",
    "Gödöllő", "Vác", "Kiskunfélegyháza", "Gyöngyös", "Hatvan", "Makó", "Jászberény",
]

CROPS = ["wheat", "maize", "barley", "sunflower", "rapeseed", "oats", "rye", "potato", "vineyard", "orchard"]


def random_measure(low: float, high: float) -> float:
    return round(random.uniform(low, high), 2)


def random_farm() -> dict:
    return {
        "address": random.choice(SETTLEMENTS),
        "name": f"{random.choice(CROPS)} {random.randint(1, 9999)}",
        "size": random_measure(0.5, 1000),
        "yield": random_measure(0.5, 10.0),
    }


def main():
    ap = argparse.ArgumentParser(description="Seed users and farms via API")
    ap.add_argument("--farms-per-user", type=int, default=30, help="Farms per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_farms = 0
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        for user in USERS:
            r = client.post("/users", json=user)
            if r.status_code not in (201, 422):
                errors.append(f"Register {user['email']}: {r.status_code} {r.text[:80]}")
                continue

            r = client.post("/auth/login", json={"email": user["email"], "password": user["password"]})
            if r.status_code != 200:
                errors.append(f"Login {user['email']}: {r.status_code}")
                continue
            headers = {"Authorization": f"Bearer {r.json()['token']}"}

            for _ in range(args.farms_per_user):
                r = client.post("/farms", headers=headers, json=random_farm())
                if r.status_code == 201:
                    created_farms += 1
                else:
                    errors.append(f"Farm for {user['email']}: {r.status_code} {r.text[:80]}")
            print(f"  {user['email']}: total farms so far: {created_farms}")

    print(f"\nDone. Farms created: {created_farms}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
