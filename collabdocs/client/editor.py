from dataclasses import dataclass
from typing import Any, Dict, Optional

from collabdocs.domains.comments.anchoring import clamp_range
from collabdocs.domains.documents.content import empty_content, flatten_text, normalize_content


@dataclass(frozen=True)
class TextSelection:
    """Выделенный фрагмент плоского текста документа"""
    start: int
    end: int
    text: str


class EditorState:
    """Содержимое редактора и текущее выделение"""

    def __init__(self, content: Any = None):
        self.content: Dict[str, Any] = normalize_content(content) if content is not None else empty_content()
        self.selection: Optional[TextSelection] = None

    @property
    def text(self) -> str:
        return flatten_text(self.content)

    def load(self, content: Any) -> None:
        """Загрузка содержимого документа; выделение сбрасывается"""
        self.content = normalize_content(content)
        self.selection = None

    def set_content(self, content: Any) -> None:
        """Правка пользователя: выделение сохраняется, только если текст под ним не изменился"""
        self.content = normalize_content(content)
        if self.selection and self.text[self.selection.start:self.selection.end] != self.selection.text:
            self.selection = None

    def select(self, start: int, end: int) -> Optional[TextSelection]:
        """Выделение диапазона; пустое выделение сбрасывает текущее"""
        if start > end:
            start, end = end, start

        text = self.text
        clamped = clamp_range(start, end, len(text))
        if not clamped:
            self.selection = None
            return None

        start, end = clamped
        self.selection = TextSelection(start=start, end=end, text=text[start:end])
        return self.selection

    def clear_selection(self) -> None:
        self.selection = None
