"""User repository."""

import logging

from sqlalchemy import delete, select, update

from src.database import Database
from src.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Persistence operations for the users table.

    Every operation borrows its own session from the pool and binds all
    caller-supplied values as statement parameters. Store failures surface
    as StoreUnavailable or QueryFailed from src.database.
    """

    def __init__(self, database: Database):
        self.database = database

    async def list_all(self) -> list[User]:
        """Return every user in store order."""
        async with self.database.session() as session:
            result = await session.execute(select(User))
            return list(result.scalars().all())

    async def get(self, user_id: int) -> User | None:
        """Return a user by primary key, or None."""
        async with self.database.session() as session:
            return await session.get(User, user_id)

    async def find_by_email(self, email: str) -> User | None:
        """Return the first user with this email, or None."""
        async with self.database.session() as session:
            result = await session.execute(select(User).where(User.email == email).limit(1))
            return result.scalars().first()

    async def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        description: str | None = "",
    ) -> User:
        """Insert a user and return it with its assigned id."""
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            description=description or "",
        )
        async with self.database.session() as session:
            session.add(user)
            await session.flush()
            await session.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    async def update(
        self,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        password_hash: str | None = None,
        description: str | None = None,
    ) -> None:
        """Overwrite the supplied fields of a user.

        Fields left as None keep their stored value. An unknown id is not an
        error: the statement simply matches no rows.
        """
        values = {
            User.name: name,
            User.email: email,
            User.password_hash: password_hash,
            User.description: description,
        }
        values = {column: value for column, value in values.items() if value is not None}
        if not values:
            logger.debug(f"Update of user {user_id} had no fields to write")
            return

        async with self.database.session() as session:
            result = await session.execute(
                update(User).where(User.id == user_id).values(values)
            )
        if result.rowcount == 0:
            logger.debug(f"Update matched no user with id {user_id}")

    async def delete(self, user_id: int) -> None:
        """Remove a user. An unknown id is not an error."""
        async with self.database.session() as session:
            result = await session.execute(delete(User).where(User.id == user_id))
        if result.rowcount == 0:
            logger.debug(f"Delete matched no user with id {user_id}")
