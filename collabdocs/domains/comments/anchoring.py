"""Привязка комментариев к тексту документа.

Комментарий хранит смещения ``[selection_from, selection_to)`` в плоском
тексте документа на момент создания. При отображении диапазоны просто
обрезаются по текущей длине текста; пересчета смещений после правок нет.
"""
import copy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from collabdocs.domains.documents.content import BLOCK_SEPARATOR, flatten_text

HIGHLIGHT_MARK = "highlight"


@dataclass(frozen=True)
class HighlightRange:
    comment_id: str
    start: int
    end: int


def clamp_range(start: int, end: int, length: int) -> Optional[Tuple[int, int]]:
    """Обрезка диапазона по [0, length]; пустой результат отбрасывается"""
    start = max(0, min(start, length))
    end = max(start, min(end, length))
    if start == end:
        return None
    return start, end


def highlight_ranges(content: Dict[str, Any], comments: Iterable[Any]) -> List[HighlightRange]:
    """Диапазоны подсветки для открытых комментариев"""
    length = len(flatten_text(content))
    ranges = []
    for comment in comments:
        if comment.is_resolved:
            continue
        clamped = clamp_range(comment.selection_from, comment.selection_to, length)
        if clamped:
            ranges.append(HighlightRange(comment.id, *clamped))
    return ranges


def _is_highlight(mark: Dict[str, Any]) -> bool:
    return mark.get("type") == HIGHLIGHT_MARK


def _merge_nodes(nodes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    merged: List[Dict[str, Any]] = []
    for node in nodes:
        if merged and merged[-1].get("marks") == node.get("marks"):
            merged[-1]["text"] += node["text"]
        else:
            merged.append(node)
    return merged


def clear_highlights(content: Dict[str, Any]) -> Dict[str, Any]:
    """Копия дерева без меток подсветки"""
    result = copy.deepcopy(content)
    for block in result.get("content") or []:
        nodes = []
        for node in block.get("content") or []:
            marks = [mark for mark in node.get("marks") or [] if not _is_highlight(mark)]
            if marks:
                node["marks"] = marks
            else:
                node.pop("marks", None)
            nodes.append(node)
        if "content" in block:
            block["content"] = _merge_nodes(nodes)
    return result


def _split_node(node: Dict[str, Any], node_start: int, ranges: List[HighlightRange]) -> List[Dict[str, Any]]:
    text = node["text"]
    node_end = node_start + len(text)

    cuts = {0, len(text)}
    for r in ranges:
        if r.start < node_end and r.end > node_start:
            cuts.add(max(r.start, node_start) - node_start)
            cuts.add(min(r.end, node_end) - node_start)
    cuts = sorted(cuts)

    pieces = []
    for lo, hi in zip(cuts, cuts[1:]):
        piece = dict(node, text=text[lo:hi])
        marks = list(node.get("marks") or [])
        for r in ranges:
            if r.start <= node_start + lo and r.end >= node_start + hi:
                marks.append({"type": HIGHLIGHT_MARK, "attrs": {"commentId": r.comment_id}})
        if marks:
            piece["marks"] = marks
        pieces.append(piece)
    return pieces


def apply_highlights(content: Dict[str, Any], ranges: List[HighlightRange]) -> Dict[str, Any]:
    """Копия дерева с метками подсветки для каждого диапазона"""
    result = copy.deepcopy(content)
    if not ranges:
        return result

    offset = 0
    for block in result.get("content") or []:
        nodes = []
        for node in block.get("content") or []:
            if node.get("type") != "text" or not node.get("text"):
                nodes.append(node)
                continue
            nodes.extend(_split_node(node, offset, ranges))
            offset += len(node["text"])
        if "content" in block:
            block["content"] = nodes
        offset += len(BLOCK_SEPARATOR)
    return result


class HighlightLayer:
    """Подсветка комментариев поверх загруженного содержимого.

    При любом изменении набора комментариев или содержимого подсветка
    пересчитывается целиком: сначала снимается, затем накладывается заново.
    """

    def __init__(self, content: Optional[Dict[str, Any]] = None, comments: Optional[List[Any]] = None):
        self.content = content or {"type": "doc", "content": []}
        self.comments = list(comments or [])
        self.ranges: List[HighlightRange] = []
        self.rendered: Dict[str, Any] = self.content
        self.refresh()

    def set_content(self, content: Dict[str, Any]) -> Dict[str, Any]:
        self.content = content
        return self.refresh()

    def set_comments(self, comments: Iterable[Any]) -> Dict[str, Any]:
        self.comments = list(comments)
        return self.refresh()

    def refresh(self) -> Dict[str, Any]:
        base = clear_highlights(self.content)
        self.ranges = highlight_ranges(base, self.comments)
        self.rendered = apply_highlights(base, self.ranges)
        return self.rendered

    def comment_at(self, position: int) -> Optional[str]:
        """id открытого комментария, подсвеченного в данной позиции"""
        for r in self.ranges:
            if r.start <= position < r.end:
                return r.comment_id
        return None

    def text_of(self, comment_id: str) -> str:
        for r in self.ranges:
            if r.comment_id == comment_id:
                return flatten_text(self.content)[r.start:r.end]
        return ""


__all__ = [
    "HIGHLIGHT_MARK",
    "HighlightRange",
    "HighlightLayer",
    "clamp_range",
    "highlight_ranges",
    "clear_highlights",
    "apply_highlights",
]
