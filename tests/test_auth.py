from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from collabdocs.core.config import settings
from collabdocs.core.security import create_session_token, verify_session_token
from collabdocs.domains.identity.oauth import OAuthClient, get_oauth_client
from collabdocs.main import app


def provider_handler(email="carol@example.com", token_status=200):
    """Fake identity provider: token endpoint plus userinfo endpoint"""
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url == httpx.URL(settings.oauth_token_url):
            if token_status != 200:
                return httpx.Response(token_status, json={"error": "invalid_grant"})
            return httpx.Response(200, json={"access_token": "provider-token", "token_type": "Bearer"})
        if request.url == httpx.URL(settings.oauth_userinfo_url):
            assert request.headers["Authorization"] == "Bearer provider-token"
            return httpx.Response(200, json={
                "sub": "123",
                "email": email,
                "name": "Carol",
                "picture": "https://example.com/carol.png",
            })
        return httpx.Response(404)
    return handler


@pytest.fixture
def fake_provider():
    def install(**kwargs):
        transport = httpx.MockTransport(provider_handler(**kwargs))
        app.dependency_overrides[get_oauth_client] = lambda: OAuthClient(transport=transport)
    return install


async def start_signin(anon_client, callback_url="/documents/abc"):
    response = await anon_client.get("/api/auth/signin", params={"callbackUrl": callback_url})
    assert response.status_code == 302
    return parse_qs(urlparse(response.headers["location"]).query)["state"][0]


def test_session_token_roundtrip():
    """Test that the session token carries the user id"""
    token = create_session_token({"sub": "user-1"})
    payload = verify_session_token(token)
    assert payload["sub"] == "user-1"
    assert payload["type"] == "session"


def test_session_token_rejects_garbage():
    """Test that an invalid token is not accepted"""
    assert verify_session_token("not-a-token") is None


async def test_api_requires_session(anon_client):
    """Test that unauthenticated requests are redirected to login"""
    response = await anon_client.get("/api/documents")
    assert response.status_code == 307
    assert response.headers["location"] == "/login?callbackUrl=%2Fapi%2Fdocuments"


async def test_invalid_session_redirected(anon_client):
    """Test that a forged cookie does not pass"""
    anon_client.cookies.set(settings.session_cookie_name, "forged")
    response = await anon_client.get("/api/users")
    assert response.status_code == 307


async def test_bearer_token_accepted(anon_client, auth_token):
    """Test that the session token is also read from the Authorization header"""
    response = await anon_client.get("/api/users", headers={"Authorization": f"Bearer {auth_token}"})
    assert response.status_code == 200


async def test_public_paths(anon_client):
    """Test that health and login are reachable without a session"""
    assert (await anon_client.get("/health")).status_code == 200

    response = await anon_client.get("/login", params={"callbackUrl": "/documents/1"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["callbackUrl"] == "/documents/1"
    assert data["providers"][0]["id"] == settings.oauth_provider


async def test_session_anonymous(anon_client):
    """Test that the session endpoint returns null without a session"""
    response = await anon_client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json() == {"data": None}


async def test_session_signed_in(client, user):
    """Test that the session endpoint returns the signed-in user"""
    response = await client.get("/api/auth/session")
    assert response.json()["data"]["id"] == user.id


async def test_signin_redirects_to_provider(anon_client):
    """Test that sign-in sends the user to the provider with a state"""
    response = await anon_client.get("/api/auth/signin")
    assert response.status_code == 302
    location = response.headers["location"]
    assert location.startswith(settings.oauth_authorize_url)
    assert "state=" in location


async def test_callback_creates_user_and_session(anon_client, fake_provider):
    """Test the full authorization code flow on first sign-in"""
    fake_provider()
    state = await start_signin(anon_client)

    response = await anon_client.get("/api/auth/callback/google", params={"code": "abc", "state": state})
    assert response.status_code == 302
    assert response.headers["location"] == "/documents/abc"
    assert settings.session_cookie_name in response.cookies

    session = (await anon_client.get("/api/auth/session")).json()["data"]
    assert session["email"] == "carol@example.com"
    assert session["image"] == "https://example.com/carol.png"

    assert (await anon_client.get("/api/documents")).status_code == 200


async def test_callback_reuses_existing_user(anon_client, fake_provider, user):
    """Test that a returning user keeps the same id"""
    fake_provider(email="Alice@Example.com")
    state = await start_signin(anon_client)

    await anon_client.get("/api/auth/callback/google", params={"code": "abc", "state": state})
    session = (await anon_client.get("/api/auth/session")).json()["data"]
    assert session["id"] == user.id


async def test_callback_state_mismatch(anon_client, fake_provider):
    """Test that a callback without the matching state is refused"""
    fake_provider()
    await start_signin(anon_client)

    response = await anon_client.get("/api/auth/callback/google", params={"code": "abc", "state": "other"})
    assert response.status_code == 302
    assert response.headers["location"] == "/login?error=OAuthCallback"


async def test_callback_provider_failure(anon_client, fake_provider):
    """Test that a failed code exchange redirects back to login"""
    fake_provider(token_status=400)
    state = await start_signin(anon_client)

    response = await anon_client.get("/api/auth/callback/google", params={"code": "bad", "state": state})
    assert response.headers["location"] == "/login?error=OAuthCallback"
    assert settings.session_cookie_name not in response.cookies


async def test_signin_ignores_external_callback(anon_client, fake_provider):
    """Test that only same-site callback URLs are honoured"""
    fake_provider()
    state = await start_signin(anon_client, callback_url="https://evil.example.com")

    response = await anon_client.get("/api/auth/callback/google", params={"code": "abc", "state": state})
    assert response.headers["location"] == "/"


async def test_signout_clears_session(client):
    """Test that sign-out removes the session cookie"""
    response = await client.post("/api/auth/signout")
    assert response.status_code == 200
    assert response.json() == {"data": {"success": True}}
    assert settings.session_cookie_name in response.headers.get("set-cookie", "")
