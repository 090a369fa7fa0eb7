#!/usr/bin/env python3
"""Load test script for the inquiry API.

Everything goes through the HTTP API, so the script only needs httpx and a
running server.

Usage:
    # Create inquiries
    python scripts/load_test.py seed --count 1000

    # Concurrent GET /api/inquiries
    python scripts/load_test.py read --concurrency 10 --duration 60

    # Create-then-delete workers
    python scripts/load_test.py churn --concurrency 10 --duration 30
"""

from __future__ import annotations

import argparse
import asyncio
import random
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import httpx

DEFAULT_BASE_URL = "http://localhost:5000"
INQUIRIES_PATH = "/api/inquiries"

FIRST_NAMES = [
    "Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Henry",
    "Ivy", "Jack", "Kate", "Leo", "Mia", "Noah", "Olivia", "Paul",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Wilson", "Anderson", "Taylor", "Moore",
]

EVENTS = ["wedding", "birthday party", "conference", "team offsite", "concert", "workshop"]

MESSAGE_TEMPLATES = [
    "Is the venue available for a {event} of about {guests} people?",
    "Could you send me a quote for a {event}?",
    "We are planning a {event} and need catering for {guests} guests.",
    "What packages do you offer for a {event}?",
]


def generate_payload() -> dict:
    first, last = random.choice(FIRST_NAMES), random.choice(LAST_NAMES)
    event_date = datetime.now(timezone.utc) + timedelta(days=random.randint(7, 365))
    payload = {
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}@example.com",
        "message": random.choice(MESSAGE_TEMPLATES).format(
            event=random.choice(EVENTS),
            guests=random.randint(10, 300),
        ),
        "eventDate": event_date.replace(microsecond=0).isoformat(),
    }
    if random.random() < 0.5:
        payload["userId"] = f"user_{random.randint(1, 500)}"
    return payload


@dataclass
class LoadTestStats:
    """Statistics for load test results."""

    requests: int = 0
    successes: int = 0
    failures: int = 0
    timings_ms: list[float] = field(default_factory=list)
    status_codes: dict[int, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def record(self, elapsed_ms: float, status_code: int | None, error: str | None = None) -> None:
        self.requests += 1
        self.timings_ms.append(elapsed_ms)

        if status_code:
            self.status_codes[status_code] = self.status_codes.get(status_code, 0) + 1
            if 200 <= status_code < 300:
                self.successes += 1
            else:
                self.failures += 1
        else:
            self.failures += 1

        if error and len(self.errors) < 10:
            self.errors.append(error)

    def percentile(self, pct: float) -> float:
        if not self.timings_ms:
            return 0.0
        ordered = sorted(self.timings_ms)
        idx = min(len(ordered) - 1, int(round(pct / 100 * (len(ordered) - 1))))
        return ordered[idx]

    @property
    def avg_time_ms(self) -> float:
        return sum(self.timings_ms) / len(self.timings_ms) if self.timings_ms else 0.0

    def __str__(self) -> str:
        lines = [
            f"Total requests:  {self.requests}",
            f"Successes:       {self.successes}",
            f"Failures:        {self.failures}",
            f"Avg time:        {self.avg_time_ms:.2f} ms",
            f"p50 / p95 / p99: {self.percentile(50):.2f} / {self.percentile(95):.2f} / {self.percentile(99):.2f} ms",
            f"Max time:        {max(self.timings_ms, default=0.0):.2f} ms",
            f"Status codes:    {dict(sorted(self.status_codes.items()))}",
        ]
        if self.errors:
            lines.append(f"Sample errors:   {self.errors[:3]}")
        return "\n".join(lines)


class LoadTester:
    """Drives the inquiry API with concurrent httpx clients."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip("/")

    async def _timed(self, stats: LoadTestStats, call) -> httpx.Response | None:
        start = time.perf_counter()
        try:
            response = await call()
        except httpx.HTTPError as e:
            stats.record((time.perf_counter() - start) * 1000, None, str(e))
            return None
        stats.record((time.perf_counter() - start) * 1000, response.status_code)
        return response

    async def seed(self, count: int, concurrency: int) -> LoadTestStats:
        """Create ``count`` inquiries through POST /api/inquiries."""
        print(f"Seeding {count} inquiries (concurrency={concurrency})...")
        stats = LoadTestStats()
        semaphore = asyncio.Semaphore(concurrency)
        start_time = time.perf_counter()

        async with httpx.AsyncClient(base_url=self.base_url, timeout=30.0) as client:

            async def create_one() -> None:
                async with semaphore:
                    await self._timed(stats, lambda: client.post(INQUIRIES_PATH, json=generate_payload()))

            await asyncio.gather(*(create_one() for _ in range(count)))

        elapsed = time.perf_counter() - start_time
        print(f"Seeding complete: {stats.successes} created in {elapsed:.2f}s ({stats.requests / elapsed:.0f}/sec)")
        print(stats)
        return stats

    async def _run_workers(self, concurrency: int, duration_seconds: int, step) -> None:
        stop_event = asyncio.Event()

        async def worker() -> None:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=30.0) as client:
                while not stop_event.is_set():
                    await step(client)

        workers = [asyncio.create_task(worker()) for _ in range(concurrency)]
        print(f"Load test running for {duration_seconds} seconds...")
        await asyncio.sleep(duration_seconds)
        stop_event.set()
        await asyncio.gather(*workers)

    async def run_read_load_test(self, concurrency: int, duration_seconds: int) -> LoadTestStats:
        """Hammer GET /api/inquiries."""
        print(f"Running read load test: concurrency={concurrency}, duration={duration_seconds}s")
        stats = LoadTestStats()

        async def step(client: httpx.AsyncClient) -> None:
            await self._timed(stats, lambda: client.get(INQUIRIES_PATH))

        await self._run_workers(concurrency, duration_seconds, step)

        print("\n" + "=" * 60)
        print("READ LOAD TEST RESULTS")
        print("=" * 60)
        print(stats)
        print(f"\nThroughput: {stats.requests / duration_seconds:.2f} req/sec")
        return stats

    async def run_churn_load_test(self, concurrency: int, duration_seconds: int) -> dict[str, LoadTestStats]:
        """Each worker creates an inquiry and deletes it again."""
        print(f"Running churn load test: concurrency={concurrency}, duration={duration_seconds}s")
        stats = {"create": LoadTestStats(), "delete": LoadTestStats()}

        async def step(client: httpx.AsyncClient) -> None:
            created = await self._timed(
                stats["create"], lambda: client.post(INQUIRIES_PATH, json=generate_payload())
            )
            if created is None or created.status_code != 200:
                return
            inquiry_id = created.json()["id"]
            await self._timed(stats["delete"], lambda: client.delete(f"{INQUIRIES_PATH}/{inquiry_id}"))

        await self._run_workers(concurrency, duration_seconds, step)

        print("\n" + "=" * 60)
        print("CHURN LOAD TEST RESULTS")
        print("=" * 60)
        for name, op_stats in stats.items():
            print(f"\n{name}:")
            print("-" * 40)
            print(op_stats)
        total = sum(s.requests for s in stats.values())
        print(f"\nThroughput: {total / duration_seconds:.2f} req/sec")
        return stats


def _add_worker_args(parser: argparse.ArgumentParser, duration: int) -> None:
    parser.add_argument(
        "--concurrency", "-c",
        type=int,
        default=10,
        help="Number of concurrent workers (default: 10)",
    )
    parser.add_argument(
        "--duration", "-d",
        type=int,
        default=duration,
        help=f"Test duration in seconds (default: {duration})",
    )


async def main() -> None:
    parser = argparse.ArgumentParser(description="Load test for the inquiry API")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL (default: {DEFAULT_BASE_URL})",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    seed_parser = subparsers.add_parser("seed", help="Create inquiries through the API")
    seed_parser.add_argument(
        "--count", "-n",
        type=int,
        default=1000,
        help="Number of inquiries to create (default: 1000)",
    )
    seed_parser.add_argument(
        "--concurrency", "-c",
        type=int,
        default=20,
        help="Requests in flight at once (default: 20)",
    )

    _add_worker_args(subparsers.add_parser("read", help="Run list load test"), duration=60)
    _add_worker_args(subparsers.add_parser("churn", help="Run create/delete load test"), duration=30)

    args = parser.parse_args()
    tester = LoadTester(args.base_url)

    if args.command == "seed":
        await tester.seed(args.count, args.concurrency)

    elif args.command == "read":
        await tester.run_read_load_test(args.concurrency, args.duration)

    elif args.command == "churn":
        await tester.run_churn_load_test(args.concurrency, args.duration)


if __name__ == "__main__":
    asyncio.run(main())
