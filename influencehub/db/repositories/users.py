from typing import Optional

from sqlalchemy import select

from influencehub.db.models import User
from influencehub.db.repositories.base import Repository


class UsersRepository(Repository):
    async def get(self, user_id: int) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return (await self.session.scalars(stmt)).first()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        return (await self.session.scalars(stmt)).first()

    async def get_many(self, user_ids: set[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        stmt = select(User).where(User.id.in_(user_ids))
        return {user.id: user for user in (await self.session.scalars(stmt)).all()}

    async def create(self, username: str, password: str, **fields) -> User:
        return await self.save(User(username=username, password=password, **fields))
