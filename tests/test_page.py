import asyncio

from collabdocs.client.page import DocumentPage


def paragraph(text):
    return {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": text}]}]}


async def test_page_load(api, document, comment, user):
    """Test wiring of document, comments, current user and highlights"""
    page = DocumentPage(api, document["id"])
    await page.load()

    assert page.title == "Plan"
    assert page.editor.text == "Hello brave new world of docs"
    assert page.current_user.id == user.id
    assert page.sidebar.current_user_id == user.id
    assert page.sidebar.active_count == 1
    assert page.highlights.comment_at(7) == comment["id"]


async def test_page_add_comment_clears_selection(api, document, user):
    page = DocumentPage(api, document["id"])
    await page.load()

    page.select(6, 11)
    comment = await page.add_comment("  Nice word  ")

    assert comment.content == "Nice word"
    assert comment.highlighted_text == "brave"
    assert comment.selection_from == 6
    assert comment.selection_to == 11
    assert page.editor.selection is None
    assert page.sidebar.active_comment_id == comment.id
    assert page.highlights.text_of(comment.id) == "brave"


async def test_page_add_comment_requires_selection_and_text(api, document):
    page = DocumentPage(api, document["id"])
    await page.load()

    assert await page.add_comment("No selection") is None
    page.select(0, 5)
    assert await page.add_comment("   ") is None
    assert page.comments_store.comments == []


async def test_page_add_comment_requires_user(api, document):
    page = DocumentPage(api, document["id"])
    await page.load()
    page.current_user = None

    page.select(0, 5)
    assert await page.add_comment("Hi") is None


async def test_page_autosave_sends_full_state(api, document):
    """Test that edits are debounced into one save with title and content"""
    page = DocumentPage(api, document["id"], autosave_delay=0.05)
    await page.load()

    page.edit_title("Draft")
    page.edit_content(paragraph("Rewritten"))
    page.edit_title("Final")
    await asyncio.sleep(0.5)

    saved = await api.get_document(document["id"])
    assert saved.title == "Final"
    assert saved.content == paragraph("Rewritten")
    assert page.autosave.last_error is None


async def test_page_close_flushes_pending_save(api, document):
    page = DocumentPage(api, document["id"], autosave_delay=10)
    await page.load()

    page.edit_title("Before leaving")
    await page.close()

    assert (await api.get_document(document["id"])).title == "Before leaving"


async def test_page_saved_content_has_no_highlights(api, document, comment):
    """Test that highlight marks never reach the stored document"""
    page = DocumentPage(api, document["id"])
    await page.load()

    page.edit_content(page.highlights.rendered)
    await page.close()

    saved = await api.get_document(document["id"])
    assert saved.content == document["content"]


async def test_page_authorship_gating(api, document, comment, other_user):
    """Test that another user's comment cannot be edited from the page"""
    page = DocumentPage(api, document["id"])
    await page.load()
    page.sidebar.current_user_id = other_user.id

    target = page.comments_store.comments[0]
    assert await page.edit_comment(target, "Hijack") is None
    assert await page.delete_comment(target) is False


async def test_page_reply_and_resolve(api, document, comment):
    page = DocumentPage(api, document["id"])
    await page.load()

    reply = await page.reply(comment["id"], "Thanks")
    assert reply.content == "Thanks"
    assert len(page.comments_store.comments[0].replies) == 1

    await page.resolve(comment["id"])
    assert page.sidebar.active_count == 0
    assert page.highlights.ranges == []
