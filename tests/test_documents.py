from sqlalchemy import func, select

from collabdocs.db.models import Comment, Reply


async def test_list_documents_empty(client):
    """Test listing documents when none exist"""
    response = await client.get("/api/documents")
    assert response.status_code == 200
    assert response.json() == {"data": []}


async def test_create_document_defaults(client):
    """Test creating a document without a body"""
    response = await client.post("/api/documents")
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["title"] == "Untitled"
    assert data["content"] == {"type": "doc", "content": []}
    assert "id" in data
    assert "createdAt" in data and "updatedAt" in data


async def test_create_document_with_title(client):
    """Test creating a document with a title"""
    response = await client.post("/api/documents", json={"title": "Roadmap"})
    assert response.status_code == 201
    assert response.json()["data"]["title"] == "Roadmap"


async def test_create_document_normalizes_legacy_html(client):
    """Test that string content is converted to the document tree"""
    response = await client.post("/api/documents", json={
        "title": "Legacy",
        "content": "<h1>Intro</h1><p>First line</p>",
    })
    assert response.status_code == 201
    content = response.json()["data"]["content"]
    assert content["type"] == "doc"
    assert content["content"][0]["type"] == "heading"
    assert content["content"][0]["attrs"] == {"level": 1}
    assert content["content"][1]["content"][0]["text"] == "First line"


async def test_create_document_invalid_content(client):
    """Test that a malformed tree is rejected"""
    response = await client.post("/api/documents", json={"content": {"type": "doc", "content": [{"type": "table"}]}})
    assert response.status_code == 400
    assert "error" in response.json()


async def test_get_document(client, document):
    """Test fetching a document by id"""
    response = await client.get(f"/api/documents/{document['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Plan"


async def test_get_document_not_found(client):
    """Test fetching an unknown document"""
    response = await client.get("/api/documents/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Document not found"}


async def test_update_title_keeps_content(client, document):
    """Test that a partial update leaves absent fields untouched"""
    response = await client.patch(f"/api/documents/{document['id']}", json={"title": "Renamed"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Renamed"
    assert data["content"] == document["content"]


async def test_long_title_is_accepted(client):
    """Test that titles have no length limit on create and update"""
    title = "T" * 300
    response = await client.post("/api/documents", json={"title": title})
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["title"] == title

    renamed = "R" * 300
    response = await client.patch(f"/api/documents/{created['id']}", json={"title": renamed})
    assert response.status_code == 200
    assert response.json()["data"]["title"] == renamed

    response = await client.get(f"/api/documents/{created['id']}")
    assert response.json()["data"]["title"] == renamed


async def test_update_content_replaces_tree(client, document):
    """Test that content is replaced as a whole"""
    new_content = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "Only"}]}]}
    response = await client.patch(f"/api/documents/{document['id']}", json={"content": new_content})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["title"] == "Plan"
    assert data["content"] == new_content


async def test_update_document_not_found(client):
    """Test updating an unknown document"""
    response = await client.patch("/api/documents/missing", json={"title": "X"})
    assert response.status_code == 404


async def test_list_documents_most_recently_updated_first(client):
    """Test ordering by last update"""
    first = (await client.post("/api/documents", json={"title": "First"})).json()["data"]
    await client.post("/api/documents", json={"title": "Second"})
    await client.patch(f"/api/documents/{first['id']}", json={"title": "First edited"})

    response = await client.get("/api/documents")
    titles = [doc["title"] for doc in response.json()["data"]]
    assert titles == ["First edited", "Second"]


async def test_delete_document(client, document):
    """Test deleting a document"""
    response = await client.delete(f"/api/documents/{document['id']}")
    assert response.status_code == 200
    assert response.json() == {"data": {"success": True}}

    response = await client.get(f"/api/documents/{document['id']}")
    assert response.status_code == 404


async def test_delete_document_not_found(client):
    """Test deleting an unknown document"""
    response = await client.delete("/api/documents/missing")
    assert response.status_code == 404


async def test_delete_document_cascades(client, document, comment, user, db_session):
    """Test that comments and replies go away with their document"""
    await client.post(f"/api/comments/{comment['id']}/replies", json={"userId": user.id, "content": "Agreed"})

    response = await client.delete(f"/api/documents/{document['id']}")
    assert response.status_code == 200

    comments = await db_session.scalar(select(func.count()).select_from(Comment))
    replies = await db_session.scalar(select(func.count()).select_from(Reply))
    assert comments == 0
    assert replies == 0
