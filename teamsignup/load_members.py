"""Bulk Registration Tool - registers synthetic members against a project.

Usage:
    python -m teamsignup.load_members --project-id <id> --count 200

Each member gets a random Egyptian number, a generated name, a section in
1-4 and its own device id. Registrations run with bounded concurrency;
a summary of successes, failures and elapsed time is printed at the end.
"""

import argparse
import asyncio
import logging
import random
import sys
import time
import uuid
from dataclasses import dataclass, field

from teamsignup.client import ApiError, TeamSignupClient
from teamsignup.infrastructure.device_identity import MemoryStorage
from teamsignup.infrastructure.observability import setup_logging
from teamsignup.schemas.member import MAX_SECTION, MIN_SECTION

logger = logging.getLogger(__name__)

FIRST_NAMES = (
    "Mohamed", "Ahmed", "Mahmoud", "Ali", "Hassan", "Omar", "Khaled",
    "Youssef", "Karim", "Nour", "Sara", "Fatima", "Nada", "Layla",
    "Mariam", "Heba", "Amira", "Dina", "Aya", "Yasmin", "Salma", "Mona",
)
LAST_NAMES = (
    "Ibrahim", "Hassan", "Mohamed", "Ahmed", "Sayed", "Khalil", "Mansour",
    "Farouk", "Sherif", "Nabil", "Fahmy", "Saleh", "Kamel", "Samir", "Fouad",
)


@dataclass
class LoadReport:
    succeeded: int = 0
    failed: int = 0
    errors: dict[str, int] = field(default_factory=dict)
    elapsed_seconds: float = 0.0

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors[message] = self.errors.get(message, 0) + 1


def random_whatsapp_number(rng: random.Random) -> str:
    return f"+20{rng.randint(1_000_000_000, 9_999_999_999)}"


def generated_name(index: int, rng: random.Random) -> str:
    """Index suffix keeps names unique within one run."""
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)} {index}"


async def run_load(
    client: TeamSignupClient,
    project_id: str,
    count: int,
    concurrency: int = 10,
    seed: int | None = None,
) -> LoadReport:
    """Register `count` synthetic members through one shared client.

    All workers share the client's cookie jar, so its session ends up bound
    to whichever member registered last. Nothing here reads that session;
    each registration carries its own device id, so no generated member can
    later be removed from this client.
    """
    rng = random.Random(seed)
    report = LoadReport()
    semaphore = asyncio.Semaphore(concurrency)

    async def register_one(index: int) -> None:
        async with semaphore:
            try:
                await client.register(
                    name=generated_name(index, rng),
                    whatsapp_number=random_whatsapp_number(rng),
                    project_id=project_id,
                    section_number=rng.randint(MIN_SECTION, MAX_SECTION),
                    device_id=str(uuid.uuid4()),
                )
                report.succeeded += 1
            except ApiError as e:
                report.record_failure(e.message)
                logger.warning(f"Registration {index} failed: {e}")

    started = time.perf_counter()
    await asyncio.gather(*(register_one(i) for i in range(1, count + 1)))
    report.elapsed_seconds = time.perf_counter() - started
    return report


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--project-id", required=True)
    parser.add_argument("--count", type=int, default=200)
    parser.add_argument("--base-url", default="http://localhost:5000")
    parser.add_argument("--concurrency", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    return parser.parse_args(argv)


async def _main(args: argparse.Namespace) -> LoadReport:
    async with TeamSignupClient(args.base_url, MemoryStorage()) as client:
        return await run_load(
            client, args.project_id, args.count, args.concurrency, args.seed,
        )


def main(argv: list[str] | None = None) -> int:
    setup_logging("INFO", "text")
    args = _parse_args(argv)
    report = asyncio.run(_main(args))
    logger.info(
        f"Registered {report.succeeded}/{args.count} member(s) "
        f"in {report.elapsed_seconds:.2f}s ({report.failed} failed)",
    )
    for message, n in sorted(report.errors.items(), key=lambda kv: -kv[1]):
        logger.info(f"  {n} x {message}")
    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
