#!/usr/bin/env python3
"""Create the default admin account (and optionally demo judges and candidates)"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.app.core.config import settings
from backend.app.core.database import AsyncSessionLocal, engine
from backend.app.core.logging import setup_logging, get_logger
from backend.app.models.user import UserRole
from backend.app.repositories.user_repository import UserRepository
from backend.app.repositories.candidate_repository import CandidateRepository

setup_logging()
logger = get_logger(__name__)

DEMO_JUDGES = [
    ("Judge One", "judge1@pageant.com"),
    ("Judge Two", "judge2@pageant.com"),
    ("Judge Three", "judge3@pageant.com"),
]

DEMO_CANDIDATES = 10


async def seed(with_demo: bool) -> None:
    try:
        await _seed(with_demo)
    finally:
        await engine.dispose()


async def _seed(with_demo: bool) -> None:
    async with AsyncSessionLocal() as session:
        users = UserRepository(session)
        candidates = CandidateRepository(session)

        if await users.get_by_email(settings.ADMIN_EMAIL):
            logger.info(f"Admin already exists: {settings.ADMIN_EMAIL}")
        else:
            await users.create(name=settings.ADMIN_NAME, email=settings.ADMIN_EMAIL, role=UserRole.ADMIN)

        if not with_demo:
            return

        for name, email in DEMO_JUDGES:
            if not await users.get_by_email(email):
                await users.create(name=name, email=email, role=UserRole.JUDGE)

        for number in range(1, DEMO_CANDIDATES + 1):
            if not await candidates.get_by_number(number):
                await candidates.create({'candidate_number': number, 'name': f"Candidate {number}"})

        logger.info(f"Seeded {len(DEMO_JUDGES)} judges and {DEMO_CANDIDATES} candidates")


def main():
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--demo", action="store_true", help="Also create demo judges and candidates")
    args = parser.parse_args()

    asyncio.run(seed(args.demo))


if __name__ == "__main__":
    main()
