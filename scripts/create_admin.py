#!/usr/bin/env python3
"""
Create an admin account. Registration over the API only hands out
player and coach roles.

Usage:
    python scripts/create_admin.py "League Office" admin@league.org 's3cret-pass'
"""
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from courtside.core.exceptions import CourtsideError
from courtside.database import AsyncSessionLocal, init_db
from courtside.services import UserService


async def create_admin(name: str, email: str, password: str) -> int:
    await init_db()
    async with AsyncSessionLocal() as db:
        user = await UserService.create_user(db, name=name, email=email, password=password, role="admin")
        return user.id


def main():
    if len(sys.argv) != 4:
        print(__doc__)
        sys.exit(1)
    
    name, email, password = sys.argv[1:]
    try:
        user_id = asyncio.run(create_admin(name, email, password))
    except CourtsideError as e:
        print(f"❌ {e.message}")
        sys.exit(1)
    print(f"✅ Admin {email} created (id {user_id})")


if __name__ == "__main__":
    main()
