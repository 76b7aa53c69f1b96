from __future__ import annotations

import argparse
import logging
import os
import random
import shutil
import time
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from string import ascii_lowercase

from newest_of.scanmodel import FilterConfig
from newest_of.scanmodel import Order
from newest_of.scanner import Scanner

BASE_DIR: Path = Path(__file__).resolve().parent
TEST_DIR: Path = BASE_DIR / "smoketest_tree"
EXTENSIONS = ["go", "json", "txt", "md", ""]
MTIME_RANGE: tuple[int, int] = (1_000_000_000, 1_700_000_000)

logger = logging.getLogger("smoketest")


def _random_name(length: int = 8) -> str:
    return "".join(random.choice(ascii_lowercase) for _ in range(length))


def build_tree(root: Path, depth: int, width: int, files_per_dir: int) -> int:
    """Create a random tree of files with random mtimes. Returns the entry count."""
    created = 0
    for _ in range(files_per_dir):
        extension = random.choice(EXTENSIONS)
        filepath = root / (f"{_random_name()}.{extension}" if extension else _random_name())
        filepath.write_text("smoketest")
        mtime = random.randint(*MTIME_RANGE)
        os.utime(filepath, (mtime, mtime))
        created += 1

    if depth > 0:
        for _ in range(width):
            subdir = root / _random_name()
            subdir.mkdir()
            created += 1 + build_tree(subdir, depth - 1, width, files_per_dir)

    return created


@contextmanager
def smoketest_tree(depth: int, width: int, files_per_dir: int) -> Generator[int, None, None]:
    """Build the tree, yield its entry count (root included), clean up on exit."""
    shutil.rmtree(TEST_DIR, ignore_errors=True)
    TEST_DIR.mkdir(parents=True)
    try:
        yield 1 + build_tree(TEST_DIR, depth, width, files_per_dir)
    finally:
        shutil.rmtree(TEST_DIR, ignore_errors=True)


def main() -> int:
    """Scan a large random tree and check the result against a full sort."""
    parser = argparse.ArgumentParser(description="Smoketest the scanner on a random tree.")
    parser.add_argument("--depth", type=int, default=3)
    parser.add_argument("--width", type=int, default=5)
    parser.add_argument("--files", type=int, default=40)
    parser.add_argument("--count", type=int, default=10)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    with smoketest_tree(args.depth, args.width, args.files) as expected_visits:
        for order in Order:
            scanner = Scanner(
                FilterConfig(include=frozenset({"go", "json"})),
                count=args.count,
                order=order,
            )

            tic = time.perf_counter()
            result = scanner.scan([str(TEST_DIR)])
            toc = time.perf_counter()

            streamed: list[int] = []
            everything = Scanner(
                FilterConfig(include=frozenset({"go", "json"})),
                unordered=True,
                on_candidate=lambda candidate: streamed.append(candidate.mtime_ns),
            )
            everything.scan([str(TEST_DIR)])

            ranked = sorted(streamed, key=order.interest_key)
            expected = ranked[len(ranked) - min(args.count, len(ranked)) :]
            found = [candidate.mtime_ns for candidate in result.entries]

            logger.info("%s: scanned %s entries in %s seconds", order.value, result.total_visited, toc - tic)
            if result.total_visited != expected_visits or found != expected:
                logger.error("%s: result does not match a full sort", order.value)
                return 1

    logger.info("Smoketest passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
