"""
In-memory host text field.
"""
from typing import List, Optional


class TextBuffer:
    """
    An editable text field with a cursor, standing in for the focused app.

    Messages "sent" with Enter are collected in ``sent`` and the field is cleared.
    """

    def __init__(self, text: str = "", cursor: Optional[int] = None):
        self.text = text
        self.cursor = len(text) if cursor is None else cursor
        if not 0 <= self.cursor <= len(self.text):
            raise ValueError(f"cursor {self.cursor} outside text of length {len(self.text)}")
        self.sent: List[str] = []

    def text_before_cursor(self, n: int) -> str:
        return self.text[max(0, self.cursor - n):self.cursor]

    def delete_before_cursor(self, n: int) -> None:
        start = max(0, self.cursor - n)
        self.text = self.text[:start] + self.text[self.cursor:]
        self.cursor = start

    def commit_text(self, text: str) -> None:
        self.text = self.text[:self.cursor] + text + self.text[self.cursor:]
        self.cursor += len(text)

    def send_enter(self) -> None:
        self.sent.append(self.text)
        self.text = ""
        self.cursor = 0

    def move_cursor(self, position: int) -> None:
        self.cursor = min(max(0, position), len(self.text))
