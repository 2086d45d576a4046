from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.db.models.user import User as UserModel

if TYPE_CHECKING:
    from collabdocs.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: "User") -> "User":
        """Создание нового пользователя"""
        db_user = UserModel(
            name=user.name,
            email=user.email,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at
        )
        if user.id:
            db_user.id = user.id

        self.session.add(db_user)
        try:
            await self.session.commit()
            await self.session.refresh(db_user)
            return self._to_domain(db_user)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("User with this email already exists")

    async def get_by_id(self, user_id: str) -> Optional["User"]:
        """Получение пользователя по id"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_by_email(self, email: str) -> Optional["User"]:
        """Получение пользователя по email"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def get_all(self, limit: int = 100, offset: int = 0) -> List["User"]:
        """Получение списка пользователей, старые первыми"""
        result = await self.session.execute(
            select(UserModel)
            .order_by(UserModel.created_at.asc())
            .offset(offset)
            .limit(limit)
        )
        db_users = result.scalars().all()
        return [self._to_domain(user) for user in db_users]

    def _to_domain(self, db_user: UserModel) -> "User":
        """Преобразование модели БД в доменную сущность"""
        from collabdocs.domains.identity.entities import User

        return User(
            id=db_user.id,
            name=db_user.name,
            email=db_user.email,
            avatar_url=db_user.avatar_url,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at
        )
