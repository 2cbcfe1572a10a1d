"""Tests for text helpers and the inline keyboards."""

import re
from datetime import datetime

import pytest
from hypothesis import given, strategies as st

from imagebot.keyboards.inline import (
    CallbackData,
    aspect_ratio_keyboard,
    image_settings_keyboard,
    model_keyboard,
    settings_keyboard,
)
from imagebot.utils.helpers import (
    MARKDOWN_SPECIAL_CHARS,
    escape_markdown,
    format_date,
    format_model,
    is_command,
    parse_command,
    truncate_text,
)


class TestEscapeMarkdown:

    def test_escapes_reserved_characters(self):
        assert escape_markdown("a_b*c") == "a\\_b\\*c"
        assert escape_markdown("1+1=2!") == "1\\+1\\=2\\!"
        assert escape_markdown("[link](url)") == "\\[link\\]\\(url\\)"

    def test_plain_text_is_unchanged(self):
        assert escape_markdown("a cat on a mat") == "a cat on a mat"
        assert escape_markdown("") == ""

    @pytest.mark.parametrize("char", list(MARKDOWN_SPECIAL_CHARS))
    def test_every_special_character_is_escaped(self, char):
        assert escape_markdown(char) == "\\" + char

    def test_backslashes_are_escaped(self):
        assert escape_markdown("C:\\dir\\") == "C:\\\\dir\\\\"
        assert escape_markdown("\\") == "\\\\"

    @given(st.text())
    def test_only_backslashes_are_added(self, text):
        escaped = escape_markdown(text)

        assert re.sub(r"\\(.)", r"\1", escaped, flags=re.DOTALL) == text
        assert len(escaped) == len(text) + sum(text.count(c) for c in MARKDOWN_SPECIAL_CHARS)


class TestCommandParsing:

    def test_is_command(self):
        assert is_command("/start")
        assert not is_command("start")
        assert not is_command("")
        assert not is_command(None)

    def test_parse_command_splits_arguments(self):
        assert parse_command("/echo hello   world") == ("/echo", ["hello", "world"])
        assert parse_command("/help") == ("/help", [])

    def test_parse_command_drops_bot_mention(self):
        assert parse_command("/notifications@image_bot off") == ("/notifications", ["off"])

    def test_parse_empty_text(self):
        assert parse_command("   ") == ("", [])


class TestFormatting:

    def test_truncate_text(self):
        assert truncate_text("Hello World", 8) == "Hello..."
        assert truncate_text("Hi", 10) == "Hi"
        assert len(truncate_text("x" * 1000, 480)) == 480

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 9, 15, 30)) == "2024-03-09"
        assert format_date(None) == "—"

    def test_format_model(self):
        assert format_model("fast") == "Fast"
        assert format_model("high-quality") == "High Quality"
        assert format_model("custom") == "custom"


def _callbacks(markup) -> list[str]:
    return [button.callback_data for row in markup.inline_keyboard for button in row]


def _labels(markup) -> list[str]:
    return [button.text for row in markup.inline_keyboard for button in row]


class TestKeyboards:

    def test_settings_keyboard_offers_opposite_toggle(self):
        assert CallbackData.SETTINGS_NOTIFICATIONS_OFF in _callbacks(settings_keyboard(True))
        assert CallbackData.SETTINGS_NOTIFICATIONS_ON in _callbacks(settings_keyboard(False))

    def test_image_settings_keyboard_links_each_setting(self):
        callbacks = _callbacks(image_settings_keyboard())

        for data in (CallbackData.IMAGE_ASPECT, CallbackData.IMAGE_SIZE, CallbackData.IMAGE_MODEL):
            assert data in callbacks

    def test_aspect_ratio_choices_carry_value(self):
        markup = aspect_ratio_keyboard("16:9")
        callbacks = _callbacks(markup)

        assert "img:set:aspect:16:9" in callbacks
        assert "img:set:aspect:1:1" in callbacks
        assert sum("✅" in label for label in _labels(markup)) == 1

    def test_model_choices(self):
        callbacks = _callbacks(model_keyboard("fast"))

        assert "img:set:model:fast" in callbacks
        assert "img:set:model:high-quality" in callbacks

    def test_callback_data_fits_telegram_limit(self):
        for markup in (aspect_ratio_keyboard("1:1"), model_keyboard("fast"), image_settings_keyboard()):
            for data in _callbacks(markup):
                assert len(data.encode()) <= 64
