import pytest

from collabdocs.domains.documents.content import empty_content, flatten_text, normalize_content, text_between


def doc(*blocks):
    return {"type": "doc", "content": [
        {"type": kind, "content": [{"type": "text", "text": text}]} for kind, text in blocks
    ]}


def test_normalize_none():
    assert normalize_content(None) == empty_content()


def test_normalize_tree_keeps_marks():
    """Test that a valid tree passes through with its marks"""
    tree = {"type": "doc", "content": [{"type": "paragraph", "content": [
        {"type": "text", "text": "bold", "marks": [{"type": "bold"}]},
    ]}]}
    assert normalize_content(tree) == tree


def test_normalize_invalid_tree():
    with pytest.raises(ValueError):
        normalize_content({"type": "doc", "content": [{"type": "image"}]})


def test_normalize_unsupported_type():
    with pytest.raises(ValueError):
        normalize_content(42)


def test_normalize_json_string():
    """Test that a serialized tree is parsed"""
    result = normalize_content('{"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}]}')
    assert flatten_text(result) == "x"


def test_normalize_html_string():
    """Test that editor HTML is converted to blocks"""
    result = normalize_content("<h2>Title</h2><p>One &amp; two</p><p></p>")
    assert result["content"][0] == {
        "type": "heading",
        "attrs": {"level": 2},
        "content": [{"type": "text", "text": "Title"}],
    }
    assert result["content"][1]["content"][0]["text"] == "One & two"
    assert result["content"][2] == {"type": "paragraph", "content": []}


def test_normalize_plain_text():
    """Test that plain text becomes one paragraph per non-empty line"""
    result = normalize_content("first\n\n  second  \n")
    assert [b["type"] for b in result["content"]] == ["paragraph", "paragraph"]
    assert flatten_text(result) == "first\nsecond"


def test_normalize_blank_string():
    assert normalize_content("   ") == empty_content()


def test_flatten_text_joins_blocks():
    content = doc(("heading", "Intro"), ("paragraph", "Body text"))
    assert flatten_text(content) == "Intro\nBody text"


def test_flatten_text_empty():
    assert flatten_text(empty_content()) == ""


def test_text_between_clamps():
    content = doc(("paragraph", "Hello world"))
    assert text_between(content, 6, 11) == "world"
    assert text_between(content, 6, 500) == "world"
    assert text_between(content, -5, 5) == "Hello"
    assert text_between(content, 50, 60) == ""
