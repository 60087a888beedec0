"""Tests for the content validator rule chain."""

from __future__ import annotations

import pytest

from DialogDesk.messages import validation_reason
from DialogDesk.tickets.validator import ContentValidator, validate


@pytest.mark.parametrize("text", [None, "", 42])
def test_empty_or_non_string_is_rejected(text: object) -> None:
    result = validate(text)
    assert not result.is_valid
    assert result.code == "empty"


@pytest.mark.parametrize("text", ["   ", "абв", " ок! ", "test"])
def test_short_text_is_rejected(text: str) -> None:
    result = validate(text)
    assert not result.is_valid
    assert result.code == "too_short"
    assert result.reason == validation_reason("too_short")


def test_repeated_characters_anywhere_reject() -> None:
    assert validate("aaaaa").code == "repeated_chars"
    assert validate("принтер не працює!!!!! терміново").code == "repeated_chars"
    # Runs of spaces are not "characters" for this rule.
    assert validate("принтер     не працює в бухгалтерії").is_valid


def test_bla_bla_bla_is_meaningless() -> None:
    result = validate("bla bla bla")
    assert not result.is_valid
    assert result.code == "junk_tokens"
    assert "змісту" in result.reason


@pytest.mark.parametrize("text", ["ого-го", "угу...", "12345 678", "?!?!?", "asasas", "бла, бла, бла"])
def test_meaningless_patterns(text: str) -> None:
    assert validate(text).code == "meaningless"


def test_word_level_rules() -> None:
    assert validate("а б в г д").code == "no_words"
    assert validate("ну вот так короче").code == "only_filler"
    assert validate("ну принтер").code == "too_little_content"


def test_words_are_whitespace_tokens() -> None:
    assert validate("ну комп'ютер").code == "too_little_content"
    assert validate("ну, wi-fi!").code == "too_little_content"
    assert validate("не працює комп'ютер").is_valid


def test_keyboard_mash_is_gibberish() -> None:
    assert validate("sdfkj weoir").code == "gibberish"


def test_rule_order_short_circuits() -> None:
    # Digits-only text would be "meaningless", but the repeated-run rule runs first.
    assert validate("11111 22").code == "repeated_chars"


def test_real_report_is_accepted() -> None:
    result = validate("Не працює принтер у бухгалтерії, потрібна допомога")
    assert result.is_valid
    assert result.reason == ""


def test_custom_junk_tokens() -> None:
    validator = ContentValidator(junk_tokens=frozenset({"абра"}))
    assert validator.validate("абра абра абра").code == "junk_tokens"
    assert validate("абра абра абра").code != "junk_tokens"
