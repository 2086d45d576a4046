from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import JWTError, jwt

from collabdocs.core.config import settings


def create_session_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена сессии"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.session_expire_minutes)

    to_encode.update({"exp": expire, "type": "session"})
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_session_token(token: str) -> Optional[Dict[str, Any]]:
    """Проверка токена сессии и извлечение данных"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    if payload.get("type") != "session" or not payload.get("sub"):
        return None

    return payload


def extract_token_from_header(authorization: str) -> Optional[str]:
    """Извлечение токена из заголовка Authorization"""
    if not authorization:
        return None

    parts = authorization.split()

    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None

    return parts[1]


def get_request_token(headers, cookies) -> Optional[str]:
    """Токен сессии из cookie или заголовка Authorization"""
    token = cookies.get(settings.session_cookie_name)
    if token:
        return token
    return extract_token_from_header(headers.get("authorization", ""))
