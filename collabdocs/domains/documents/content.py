"""Структурированное содержимое документа.

Каноническое представление - дерево вида::

    {"type": "doc", "content": [
        {"type": "heading", "attrs": {"level": 1}, "content": [{"type": "text", "text": "..."}]},
        {"type": "paragraph", "content": [{"type": "text", "text": "..."}]},
    ]}

Ранние версии хранили содержимое строкой (HTML или обычный текст). Такие
значения приводятся к дереву на границе хранилища функцией
``normalize_content``; дальше по коду ходит только дерево.

Смещения комментариев считаются по "плоскому" тексту документа: текст блоков,
соединенный символом ``BLOCK_SEPARATOR``.
"""
import json
from html.parser import HTMLParser
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

BLOCK_SEPARATOR = "\n"


class Mark(BaseModel):
    """Разметка текстового узла (bold, highlight и т.п.)"""
    type: str
    attrs: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")


class TextNode(BaseModel):
    type: Literal["text"] = "text"
    text: str
    marks: Optional[List[Mark]] = None


class BlockNode(BaseModel):
    type: Literal["heading", "paragraph"]
    attrs: Optional[Dict[str, Any]] = None
    content: List[TextNode] = Field(default_factory=list)


class DocumentContent(BaseModel):
    type: Literal["doc"] = "doc"
    content: List[BlockNode] = Field(default_factory=list)


def empty_content() -> Dict[str, Any]:
    """Пустое дерево документа"""
    return {"type": "doc", "content": []}


def normalize_content(value: Any) -> Dict[str, Any]:
    """Приведение входного значения к каноническому дереву.

    Raises:
        ValueError: если значение нельзя интерпретировать как документ.
    """
    if value is None:
        return empty_content()

    if isinstance(value, DocumentContent):
        return value.model_dump(exclude_none=True)

    if isinstance(value, str):
        return _from_legacy_string(value)

    if isinstance(value, dict):
        try:
            tree = DocumentContent.model_validate(value)
        except ValidationError as e:
            raise ValueError(f"Invalid document content: {e.error_count()} error(s)") from e
        return tree.model_dump(exclude_none=True)

    raise ValueError("Invalid document content")


def _from_legacy_string(value: str) -> Dict[str, Any]:
    stripped = value.strip()
    if not stripped:
        return empty_content()

    if stripped.startswith("{"):
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict) and parsed.get("type") == "doc":
            return normalize_content(parsed)

    if stripped.startswith("<"):
        parser = _BlockHTMLParser()
        parser.feed(stripped)
        parser.close()
        return {"type": "doc", "content": parser.blocks}

    return {
        "type": "doc",
        "content": [_paragraph(line.strip()) for line in stripped.splitlines() if line.strip()],
    }


def _paragraph(text: str) -> Dict[str, Any]:
    return {"type": "paragraph", "content": [{"type": "text", "text": text}] if text else []}


class _BlockHTMLParser(HTMLParser):
    """Минимальный разбор HTML редактора: заголовки h1-h3 и абзацы"""

    HEADINGS = {"h1": 1, "h2": 2, "h3": 3}

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.blocks: List[Dict[str, Any]] = []
        self._current: Optional[Dict[str, Any]] = None
        self._buffer: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag in self.HEADINGS or tag == "p":
            self._flush()
            if tag == "p":
                self._current = {"type": "paragraph"}
            else:
                self._current = {"type": "heading", "attrs": {"level": self.HEADINGS[tag]}}
        elif tag == "br":
            self._buffer.append(" ")

    def handle_endtag(self, tag):
        if tag in self.HEADINGS or tag == "p":
            self._flush()

    def handle_data(self, data):
        self._buffer.append(data)

    def close(self):
        super().close()
        self._flush()

    def _flush(self):
        text = "".join(self._buffer).strip()
        self._buffer = []
        block = self._current
        self._current = None
        if block is None:
            if not text:
                return
            block = {"type": "paragraph"}
        block["content"] = [{"type": "text", "text": text}] if text else []
        self.blocks.append(block)


def block_text(block: Dict[str, Any]) -> str:
    return "".join(node.get("text", "") for node in block.get("content") or [])


def flatten_text(content: Dict[str, Any]) -> str:
    """Плоский текст документа, по которому считаются смещения"""
    return BLOCK_SEPARATOR.join(block_text(block) for block in content.get("content") or [])


def text_between(content: Dict[str, Any], start: int, end: int) -> str:
    """Текст в диапазоне [start, end) плоского текста"""
    text = flatten_text(content)
    start = max(0, min(start, len(text)))
    end = max(start, min(end, len(text)))
    return text[start:end]
