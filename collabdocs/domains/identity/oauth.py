import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from collabdocs.core.config import Settings, settings
from collabdocs.domains.identity.schemas import OAuthProfile

logger = logging.getLogger(__name__)


class OAuthError(Exception):
    """Ошибка обмена с провайдером идентификации"""


class OAuthClient:
    """Клиент OAuth 2 (authorization code) для внешнего провайдера"""

    def __init__(
        self,
        config: Settings = settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0
    ):
        self.config = config
        self.transport = transport
        self.timeout = timeout

    @property
    def provider(self) -> str:
        return self.config.oauth_provider

    def authorization_url(self, state: str) -> str:
        """URL страницы входа провайдера"""
        params = {
            "client_id": self.config.oauth_client_id,
            "redirect_uri": self.config.oauth_redirect_url,
            "response_type": "code",
            "scope": self.config.oauth_scope,
            "state": state,
        }
        return f"{self.config.oauth_authorize_url}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> OAuthProfile:
        """Обмен кода на токен и получение профиля пользователя"""
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            token_resp = await client.post(
                self.config.oauth_token_url,
                data={
                    "grant_type": "authorization_code",
                    "code": code,
                    "client_id": self.config.oauth_client_id,
                    "client_secret": self.config.oauth_client_secret,
                    "redirect_uri": self.config.oauth_redirect_url,
                },
                headers={"Accept": "application/json"},
            )
            if token_resp.status_code != 200:
                raise OAuthError(f"Token exchange failed: {token_resp.status_code}")

            access_token = token_resp.json().get("access_token")
            if not access_token:
                raise OAuthError("Token response has no access_token")

            profile_resp = await client.get(
                self.config.oauth_userinfo_url,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            if profile_resp.status_code != 200:
                raise OAuthError(f"Userinfo request failed: {profile_resp.status_code}")

        data = profile_resp.json()
        if not data.get("email"):
            raise OAuthError("Provider profile has no email")

        return OAuthProfile(
            sub=data.get("sub"),
            email=data["email"],
            name=data.get("name"),
            picture=data.get("picture")
        )


def get_oauth_client() -> OAuthClient:
    return OAuthClient()
