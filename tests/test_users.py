from tests.conftest import make_user


async def test_list_users(client, user):
    """Test listing users with avatar fields"""
    response = await client.get("/api/users")
    assert response.status_code == 200
    users = response.json()["data"]
    assert len(users) == 1
    assert users[0]["email"] == "alice@example.com"
    assert "avatarUrl" in users[0]
    assert "image" in users[0]


async def test_list_users_limited_oldest_first(client, user, session_factory):
    """Test that at most 20 users are returned, oldest first"""
    for i in range(25):
        await make_user(session_factory, email=f"user{i}@example.com", name=f"User {i}")

    response = await client.get("/api/users")
    users = response.json()["data"]
    assert len(users) == 20
    assert users[0]["id"] == user.id
    assert users[1]["name"] == "User 0"
