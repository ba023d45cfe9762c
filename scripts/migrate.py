#!/usr/bin/env python3
"""
Database setup script for deployments.

Usage:
    python scripts/migrate.py              # Create any missing tables
    python scripts/migrate.py --status     # Show tables and row counts
    python scripts/migrate.py --reset      # Drop and recreate all tables (DANGER!)

Schema changes on an existing database go through Alembic: `alembic upgrade head`.
"""

import asyncio
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import func, inspect, select
from courtside.database import engine, init_db, drop_db, AsyncSessionLocal
from courtside.models import User, Team, Player, Game, GameStat


async def check_tables():
    """Check which tables exist."""
    async with engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


async def run_migrations():
    """Create all tables."""
    print("🔄 Creating database tables...")
    
    existing = await check_tables()
    print(f"   Existing tables: {existing}")
    
    await init_db()
    
    new_tables = await check_tables()
    created = set(new_tables) - set(existing)
    
    if created:
        print(f"✅ Created tables: {created}")
    else:
        print("✅ All tables already exist")
    
    print(f"   Total tables: {len(new_tables)}")


async def check_status():
    """Show tables and row counts."""
    print("📊 Database Status")
    print("=" * 40)
    
    tables = await check_tables()
    print(f"Tables in database ({len(tables)}):")
    for table in sorted(tables):
        print(f"  - {table}")
    
    if not tables:
        return
    
    async with AsyncSessionLocal() as db:
        for model in (User, Team, Player, Game, GameStat):
            if model.__tablename__ in tables:
                count = await db.scalar(select(func.count()).select_from(model))
                print(f"  {model.__tablename__}: {count} rows")


async def reset_database():
    """Reset database (drop and recreate all tables)."""
    print("⚠️  WARNING: This will DELETE all data!")
    confirm = input("Type 'RESET' to confirm: ")
    
    if confirm != 'RESET':
        print("Cancelled.")
        return
    
    print("🗑️  Dropping all tables...")
    await drop_db()
    
    print("🔄 Recreating tables...")
    await init_db()
    
    print("✅ Database reset complete")


async def main():
    if len(sys.argv) > 1:
        arg = sys.argv[1]
        if arg == '--status':
            await check_status()
        elif arg == '--reset':
            await reset_database()
        else:
            print(f"Unknown argument: {arg}")
            print(__doc__)
    else:
        await run_migrations()


if __name__ == "__main__":
    asyncio.run(main())
