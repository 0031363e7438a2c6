# app/core/import_codes.py

import asyncio
import sys
from pathlib import Path

from app.core.config import Settings
from app.core.logging_config import configure_logging
from app.services.store_selector import build_selector
from app.services.bulk_loader import BulkLoader


def read_codes(path: Path):
    # One code per line; blank lines are dropped by the loader
    return path.read_text(encoding="utf-8").splitlines()


async def import_codes(path: Path):
    settings = Settings.from_env()
    selector = build_selector(settings)
    await selector.start()
    try:
        report = await BulkLoader(selector).load(read_codes(path))
    finally:
        await selector.close()
    if report.mode != "redis":
        print("Warning: durable store unavailable, codes were loaded into process memory and are now gone.")
    print(f"Imported {report.inserted} new codes ({report.submitted} submitted) into {report.mode}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        sys.exit("usage: python -m app.core.import_codes <codes.txt>")
    configure_logging("INFO")
    asyncio.run(import_codes(Path(sys.argv[1])))
