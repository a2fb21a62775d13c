"""
Unit tests for TextBufferAdapter and the in-memory TextBuffer.
"""
import pytest

from rescriber.adapter import TextBufferAdapter
from rescriber.buffer import TextBuffer


class TestCaptureText:
    """Test text capture."""

    def test_capture_without_connection(self):
        """Test that no host connection means nothing to capture."""
        assert TextBufferAdapter().capture_text() == ""

    def test_capture_text_before_cursor(self):
        buffer = TextBuffer("hello world", cursor=5)
        adapter = TextBufferAdapter(buffer)

        assert adapter.capture_text() == "hello"

    def test_capture_respects_lookback(self):
        """Test that only the lookback window is captured."""
        buffer = TextBuffer("x" * 1500)
        adapter = TextBufferAdapter(buffer)

        assert adapter.capture_text() == "x" * 1000

    def test_capture_after_detach(self):
        adapter = TextBufferAdapter(TextBuffer("hello"))
        adapter.detach()

        assert adapter.capture_text() == ""


class TestReplace:
    """Test replacement of the captured span."""

    def test_replace_swaps_text(self):
        buffer = TextBuffer("call me at 555-123-4567")
        adapter = TextBufferAdapter(buffer)

        assert adapter.replace("call me at 555-123-4567", "call me at [PHONE]") is True
        assert buffer.text == "call me at [PHONE]"
        assert buffer.cursor == len("call me at [PHONE]")

    def test_replace_keeps_text_outside_span(self):
        """Test that only the captured span before the cursor is replaced."""
        buffer = TextBuffer("Hi, my SSN is 123-45-6789 thanks", cursor=25)
        adapter = TextBufferAdapter(buffer, lookback_chars=11)
        original = adapter.capture_text()

        assert original == "123-45-6789"
        assert adapter.replace(original, "[SSN]")
        assert buffer.text == "Hi, my SSN is [SSN] thanks"

    def test_replace_refuses_edited_buffer(self):
        """Test that the buffer is left alone if it changed after capture."""
        buffer = TextBuffer("hello")
        adapter = TextBufferAdapter(buffer)
        original = adapter.capture_text()
        buffer.commit_text(" there")

        assert adapter.replace(original, "[REDACTED]") is False
        assert buffer.text == "hello there"

    def test_replace_without_connection(self):
        adapter = TextBufferAdapter()

        assert adapter.replace("hello", "bye") is False


class TestTextBuffer:
    """Test the in-memory host field."""

    def test_cursor_defaults_to_end(self):
        assert TextBuffer("abc").cursor == 3

    def test_invalid_cursor(self):
        with pytest.raises(ValueError):
            TextBuffer("abc", cursor=4)

    def test_edit_in_the_middle(self):
        buffer = TextBuffer("abcd", cursor=2)
        buffer.delete_before_cursor(1)
        buffer.commit_text("X")

        assert buffer.text == "aXcd"
        assert buffer.cursor == 2

    def test_delete_past_start(self):
        buffer = TextBuffer("ab")
        buffer.delete_before_cursor(10)

        assert buffer.text == ""
        assert buffer.cursor == 0

    def test_send_enter_clears_field(self):
        buffer = TextBuffer("see you")
        buffer.send_enter()

        assert buffer.sent == ["see you"]
        assert buffer.text == ""
