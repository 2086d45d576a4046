async def test_create_reply(client, comment, other_user):
    """Test replying to a comment"""
    response = await client.post(f"/api/comments/{comment['id']}/replies", json={
        "userId": other_user.id,
        "content": "On it",
    })
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["commentId"] == comment["id"]
    assert data["user"]["name"] == "Bob"
    assert data["content"] == "On it"


async def test_create_reply_missing_fields(client, comment, user):
    """Test that userId and content are required"""
    url = f"/api/comments/{comment['id']}/replies"
    assert (await client.post(url, json={"userId": user.id})).status_code == 400
    assert (await client.post(url, json={"content": "x"})).status_code == 400


async def test_create_reply_unknown_comment(client, user):
    """Test replying to a missing comment"""
    response = await client.post("/api/comments/missing/replies", json={"userId": user.id, "content": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Comment not found"}


async def test_create_reply_unknown_user(client, comment):
    """Test that an unknown author is rejected"""
    response = await client.post(f"/api/comments/{comment['id']}/replies", json={"userId": "missing", "content": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid userId"}


async def test_replies_oldest_first(client, document, comment, user, other_user):
    """Test reply ordering inside a thread"""
    url = f"/api/comments/{comment['id']}/replies"
    await client.post(url, json={"userId": user.id, "content": "first"})
    await client.post(url, json={"userId": other_user.id, "content": "second"})
    await client.post(url, json={"userId": user.id, "content": "third"})

    response = await client.get(f"/api/documents/{document['id']}/comments")
    replies = response.json()["data"][0]["replies"]
    assert [r["content"] for r in replies] == ["first", "second", "third"]


async def test_update_reply(client, comment, user):
    """Test editing a reply"""
    reply = (await client.post(f"/api/comments/{comment['id']}/replies", json={
        "userId": user.id,
        "content": "Draft",
    })).json()["data"]

    response = await client.patch(f"/api/replies/{reply['id']}", json={"content": "Final"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["content"] == "Final"
    assert data["user"]["id"] == user.id


async def test_update_reply_not_found(client):
    """Test editing an unknown reply"""
    response = await client.patch("/api/replies/missing", json={"content": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Reply not found"}


async def test_delete_reply(client, document, comment, user):
    """Test deleting a reply"""
    reply = (await client.post(f"/api/comments/{comment['id']}/replies", json={
        "userId": user.id,
        "content": "Temp",
    })).json()["data"]

    response = await client.delete(f"/api/replies/{reply['id']}")
    assert response.status_code == 200
    assert response.json() == {"data": {"success": True}}

    comments = (await client.get(f"/api/documents/{document['id']}/comments")).json()["data"]
    assert comments[0]["replies"] == []


async def test_delete_reply_not_found(client):
    """Test deleting an unknown reply"""
    response = await client.delete("/api/replies/missing")
    assert response.status_code == 404
