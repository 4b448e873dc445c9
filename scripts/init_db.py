"""
Create the MuscleMap tables on ``DATABASE_URL`` and report what is stored.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy import inspect
from sqlmodel import Session

from musclemap.core.config import settings
from musclemap.core.logging_config import configure_logging
from musclemap.db.init_db import init_db
from musclemap.db.repositories.stimulation import StimulationRepository
from musclemap.db.repositories.workout_session import WorkoutSessionRepository
from musclemap.db.session import engine

EXPECTED_TABLES = ("workout_sessions", "muscle_stimulations")

if __name__ == "__main__":
    configure_logging()
    print("=" * 60)
    print("MuscleMap Database Initialization")
    print("=" * 60)
    print(f"Database URL: {settings.DATABASE_URL}")
    print()

    try:
        init_db(engine)

        existing = set(inspect(engine).get_table_names())
        for table in EXPECTED_TABLES:
            print(f"{'✓' if table in existing else '✗'} '{table}'")

        with Session(engine) as session:
            completed = WorkoutSessionRepository(session).completed_session_count()
            events = len(StimulationRepository(session).all_events())
        print()
        print(f"Completed sessions: {completed}")
        print(f"Stimulation events: {events}")

    except Exception as e:
        print()
        print(f"✗ Database initialization failed: {e}")
        print("=" * 60)
        sys.exit(1)

    print("=" * 60)
