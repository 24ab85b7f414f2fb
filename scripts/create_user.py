#!/usr/bin/env python3
"""Create a user directly in the database.

Every /usuarios route requires a token, so the first account has to be
created out of band before anyone can log in.

Usage:
    JWT_SECRET=... DATABASE_URL=postgresql+asyncpg://user:pass@db/usuarios \
        python scripts/create_user.py "Ada Lovelace" ada@example.com --description "admin"

The password is prompted for unless --password is given.
"""

import argparse
import asyncio
import getpass
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import get_settings
from src.database import Database
from src.repositories.user_repository import UserRepository
from src.services.auth import hash_password_async


async def create_user(name: str, email: str, password: str, description: str) -> int:
    """Insert the user; return 0 on success or 1 if the email is taken."""
    database = Database.from_settings(get_settings())
    try:
        await database.create_all()
        repo = UserRepository(database)
        if await repo.find_by_email(email) is not None:
            print(f"A user with email {email} already exists")
            return 1

        user = await repo.create(
            name=name,
            email=email,
            password_hash=await hash_password_async(password),
            description=description,
        )
        print(f"Created user {user.id} ({user.email})")
        return 0
    finally:
        await database.dispose()


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("name")
    parser.add_argument("email")
    parser.add_argument("--password")
    parser.add_argument("--description", default="")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if not password:
        parser.error("password must not be empty")

    return asyncio.run(create_user(args.name, args.email, password, args.description))


if __name__ == "__main__":
    sys.exit(main())
