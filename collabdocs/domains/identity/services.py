import logging
from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from collabdocs.core.security import create_session_token, verify_session_token
from collabdocs.db.repositories.user_repository import UserRepository
from collabdocs.domains.identity.entities import User
from collabdocs.domains.identity.schemas import OAuthProfile

logger = logging.getLogger(__name__)

USERS_LIST_LIMIT = 20


class IdentityService:
    """Сервис для работы с пользователями и сессиями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def sign_in(self, profile: OAuthProfile) -> User:
        """Вход через провайдера: пользователь создается при первом входе"""
        user = await self.user_repository.get_by_email(profile.email.lower())

        if user:
            logger.info("User %s signed in", user.id)
            return user

        user = User.from_profile(
            email=profile.email,
            name=profile.name,
            avatar_url=profile.picture
        )
        created = await self.user_repository.create(user)
        logger.info("User %s created on first sign-in", created.id)
        return created

    def issue_session_token(self, user: User) -> str:
        """Токен сессии со стабильным id пользователя"""
        return create_session_token({"sub": user.id, "email": user.email, "name": user.name})

    async def get_user_from_token(self, token: str) -> Optional[User]:
        """Получение пользователя из токена сессии"""
        payload = verify_session_token(token)
        if not payload:
            return None
        return await self.user_repository.get_by_id(payload["sub"])

    async def list_users(self, limit: int = USERS_LIST_LIMIT) -> List[User]:
        """Список пользователей (не больше 20), старые первыми"""
        return await self.user_repository.get_all(limit=limit)
