import sqlite3
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from ride_booking_api.app.core.db import create_db_engine
from ride_booking_api.app.main import create_app

# Mirrors the columns of the production tables that the API reads.
SCHEMA = """
CREATE TABLE "City" (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL
);

CREATE TABLE "User" (
    id TEXT PRIMARY KEY,
    name TEXT,
    phone TEXT,
    role TEXT,
    "languagePreference" TEXT
);

CREATE TABLE "Driver" (
    id TEXT PRIMARY KEY,
    "userId" TEXT NOT NULL,
    "isActive" INTEGER DEFAULT 1
);

CREATE TABLE "Vehicle" (
    id TEXT PRIMARY KEY,
    "driverId" TEXT,
    type TEXT,
    "totalSeats" INTEGER,
    "numberPlate" TEXT
);

CREATE TABLE "Route" (
    id TEXT PRIMARY KEY,
    "sourceCityId" TEXT NOT NULL,
    "destinationCityId" TEXT NOT NULL,
    checkpoints TEXT
);

CREATE TABLE "Trip" (
    id TEXT PRIMARY KEY,
    "driverId" TEXT NOT NULL,
    "vehicleId" TEXT,
    "routeId" TEXT NOT NULL,
    "travelDate" TEXT,
    "departureTime" TEXT,
    "totalSeats" INTEGER,
    "availableSeats" INTEGER,
    "isActive" INTEGER,
    "createdAt" TEXT,
    "updatedAt" TEXT
);
"""

CITIES = [
    ("c_lhr", "Lahore"),
    ("c_isl", "Islahabad"),
    ("c_kar", "Karachi"),
    ("c_mul", "Multan"),
    ("c_zrh", "Zürich"),
] + [(f"c_town_{n:02d}", f"Town {n:02d}") for n in range(12, 0, -1)]

USERS = [
    ("u_ali", "Ali Raza", "+923001112233", "DRIVER", "ur"),
    ("u_sara", "Sara Khan", "+923004445566", "DRIVER", "en"),
]

DRIVERS = [
    ("d_ali", "u_ali", 1),
    ("d_sara", "u_sara", 1),
    # Points at a user that does not exist.
    ("d_orphan", "u_missing", 1),
]

VEHICLES = [
    ("v_coaster", "d_ali", "COASTER", 22, "LEA-1234"),
    ("v_hiace", "d_sara", "HIACE", 14, "LEB-5678"),
    ("v_orphan", "d_orphan", "CAR", 4, "LEC-0000"),
]

ROUTES = [
    ("r_lhr_kar", "c_lhr", "c_kar", '[{"cityId": "c_mul", "order": 1}]'),
    ("r_kar_lhr", "c_kar", "c_lhr", None),
    # Destination city does not exist.
    ("r_ghost", "c_lhr", "c_ghost", None),
]

TIMESTAMP = "2024-05-20T12:00:00"

TRIPS = [
    ("t_morning", "d_ali", "v_coaster", "r_lhr_kar", "2024-06-01T08:00:00", "08:00", 22, 10, 1),
    ("t_early", "d_sara", "v_hiace", "r_lhr_kar", "2024-06-01T06:30:00", "06:30", 14, 14, 1),
    ("t_inactive", "d_ali", "v_coaster", "r_lhr_kar", "2024-06-01T10:00:00", "10:00", 22, 22, 0),
    ("t_next_day", "d_ali", "v_coaster", "r_lhr_kar", "2024-06-02T08:00:00", "08:00", 22, 22, 1),
    ("t_no_user", "d_orphan", "v_orphan", "r_lhr_kar", "2024-06-01T09:00:00", "09:00", 4, 4, 1),
    ("t_ghost", "d_ali", "v_coaster", "r_ghost", "2024-06-01T08:00:00", "08:00", 22, 22, 1),
    ("t_return", "d_ali", "v_coaster", "r_kar_lhr", "2024-06-01T12:00:00", "12:00", 22, 5, 1),
    ("t_late", "d_sara", "v_hiace", "r_lhr_kar", "2024-06-01T23:59:00", "23:59", 14, 3, 1),
    # No vehicle assigned yet.
    ("t_unassigned", "d_ali", None, "r_lhr_kar", "2024-06-01T07:00:00", "07:00", 22, 22, 1),
]


def seed_database(path: Path) -> None:
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA)
        conn.executemany('INSERT INTO "City" VALUES (?, ?)', CITIES)
        conn.executemany('INSERT INTO "User" VALUES (?, ?, ?, ?, ?)', USERS)
        conn.executemany('INSERT INTO "Driver" VALUES (?, ?, ?)', DRIVERS)
        conn.executemany('INSERT INTO "Vehicle" VALUES (?, ?, ?, ?, ?)', VEHICLES)
        conn.executemany('INSERT INTO "Route" VALUES (?, ?, ?, ?)', ROUTES)
        conn.executemany(
            'INSERT INTO "Trip" VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)',
            [trip + (TIMESTAMP, TIMESTAMP) for trip in TRIPS],
        )
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def database_path(tmp_path: Path) -> str:
    path = tmp_path / "rides.db"
    seed_database(path)
    return str(path)


@pytest.fixture
def engine(database_path: str):
    engine = create_db_engine(f"sqlite:///{database_path}", pool_size=2, max_overflow=0, pool_timeout=1)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine: Engine) -> TestClient:
    return TestClient(create_app(engine=engine))


@pytest.fixture
def broken_engine(tmp_path: Path):
    """An engine over a database that lacks every table the API reads."""
    path = tmp_path / "empty.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE unrelated (x INTEGER)")
    conn.commit()
    conn.close()
    engine = create_db_engine(f"sqlite:///{path}", pool_size=1, max_overflow=0, pool_timeout=1)
    yield engine
    engine.dispose()


@pytest.fixture
def broken_client(broken_engine: Engine) -> TestClient:
    return TestClient(create_app(engine=broken_engine))


@pytest.fixture
def unreachable_engine(tmp_path: Path):
    """An engine whose database file can never be opened."""
    path = tmp_path / "missing" / "rides.db"
    engine = create_db_engine(f"sqlite:///{path}", pool_size=1, max_overflow=0, pool_timeout=1)
    yield engine
    engine.dispose()


@pytest.fixture
def unreachable_client(unreachable_engine: Engine) -> TestClient:
    return TestClient(create_app(engine=unreachable_engine))


@pytest.fixture
def busy_engine(database_path: str):
    """A single-connection engine whose only connection is checked out."""
    engine = create_db_engine(f"sqlite:///{database_path}", pool_size=1, max_overflow=0, pool_timeout=0.2)
    held = engine.connect()
    yield engine
    held.close()
    engine.dispose()


@pytest.fixture
def busy_client(busy_engine: Engine) -> TestClient:
    return TestClient(create_app(engine=busy_engine))
