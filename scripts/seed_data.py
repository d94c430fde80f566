"""Seed the default spending categories.

The initial migration already inserts them; this script repairs a database
where some were removed, and prints what is present afterwards.

Usage: python scripts/seed_data.py
"""

import asyncio
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parents[1] / "src"))

from finance_dashboard.db.session import AsyncSessionLocal, async_engine  # noqa: E402
from finance_dashboard.repositories.category import seed_default_categories  # noqa: E402


async def main() -> None:
    print("Seeding default categories...")
    async with AsyncSessionLocal() as session:
        categories = await seed_default_categories(session)

    for category in categories:
        print(f"  - {category.id}: {category.name}")

    await async_engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
