from datetime import datetime, timezone
from typing import Optional


class User:
    """Сущность пользователя домена Identity.

    Профиль (имя, email, аватар) приходит от провайдера идентификации и
    приложением не изменяется.
    """

    def __init__(
        self,
        id: Optional[str],
        name: str,
        email: str,
        avatar_url: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.name = name
        self.email = email
        self.avatar_url = avatar_url
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or datetime.now(timezone.utc)

    @property
    def image(self) -> Optional[str]:
        return self.avatar_url

    @classmethod
    def from_profile(cls, email: str, name: Optional[str] = None, avatar_url: Optional[str] = None) -> "User":
        """Создание пользователя при первом входе через OAuth"""
        return cls(
            id=None,
            name=name or email.split("@")[0],
            email=email.lower(),
            avatar_url=avatar_url
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, name={self.name})"
