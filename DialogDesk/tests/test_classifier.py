"""Tests for the keyword ticket classifier."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from DialogDesk.classifiers import TICKET_ID_PATTERN, KeywordTicketClassifier, classify, generate_ticket_id, generate_title
from DialogDesk.classifiers.keywords import DEPARTMENT_KEYWORDS
from DialogDesk.classifiers.utils import TicketClassifierProtocol, best_label, is_standalone, keyword_score

FIXED_NOW = datetime(2024, 5, 1, 10, 15, 0, 123456)


def _classifier() -> KeywordTicketClassifier:
    return KeywordTicketClassifier(clock=lambda: FIXED_NOW, rng=random.Random(7))


def test_printer_example_is_it_high_ukrainian() -> None:
    ticket = _classifier().classify("принтер не працює, терміново потрібно", requester_id="42")
    assert ticket.department == "IT"
    assert ticket.priority == "High"
    assert ticket.language == "Ukrainian"
    assert ticket.requester == "42"
    assert ticket.category == "Request"
    assert ticket.status == "Open"
    assert ticket.created_at == FIXED_NOW.replace(microsecond=0)
    assert TICKET_ID_PATTERN.match(ticket.id)


def test_high_beats_low_priority() -> None:
    clf = _classifier()
    assert clf.predict_priority("терміново, коли зможете") == "High"
    assert clf.predict_priority("коли зможете, потрібно оновити") == "Low"
    assert clf.predict_priority("потрібно оновити") == "Medium"
    assert clf.predict_priority("добрий день") == "Medium"


def test_department_selection_and_ties() -> None:
    clf = _classifier()
    assert clf.predict_department("Прошу юриста перевірити договір оренди") == "Legal"
    assert clf.predict_department("Коли буде нарахована зарплата та премія") == "HR"
    # Ties keep the canonical order IT, Legal, HR.
    assert clf.predict_department("принтер і договір") == "IT"
    assert clf.predict_department("договір і зарплата") == "Legal"
    assert clf.predict_department("Добрий день, маю питання") == "IT"


@pytest.mark.parametrize(
    ("department", "keyword"),
    [
        ("IT", "монитор"),
        ("IT", "клавиатура"),
        ("Legal", "сертификат"),
        ("Legal", "арбитраж"),
        ("Legal", "авторское право"),
        ("HR", "оценка"),
        ("HR", "отгул"),
        ("HR", "тренинг"),
        ("HR", "компенсация"),
        ("HR", "мотивация"),
        ("HR", "график"),
    ],
)
def test_russian_spellings_are_listed_separately(department: str, keyword: str) -> None:
    assert keyword in DEPARTMENT_KEYWORDS[department]


def test_russian_report_is_routed_by_russian_keyword() -> None:
    clf = _classifier()
    assert clf.department_scores("хочу взять отгул на пятницу")["HR"] == 1.5
    assert clf.predict_department("хочу взять отгул на пятницу") == "HR"
    assert clf.predict_department("нужен сертификат для арбитраж") == "Legal"


def test_standalone_bonus() -> None:
    assert keyword_score("принтер", ["принтер"]) == 1.5
    assert keyword_score("принтери", ["принтер"]) == 1.0
    assert is_standalone("vpn", "не працює vpn")
    assert not is_standalone("vpn", "openvpn")


@pytest.mark.parametrize(
    "text",
    ["принтер не працює", "договір і зарплата", "нова програма для excel", "щось незрозуміле"],
)
def test_department_score_is_monotonic(text: str) -> None:
    clf = _classifier()
    for department, keywords in clf.department_keywords.items():
        keyword = keywords[0]
        before = clf.department_scores(text)
        after = clf.department_scores(f"{text} {keyword}")
        assert after[department] >= before[department]
        if clf.predict_department(text) == department:
            assert clf.predict_department(f"{text} {keyword}") == department


def test_best_label_defaults_and_ties() -> None:
    assert best_label({"IT": 0.0, "Legal": 0.0}, "IT") == "IT"
    assert best_label({"IT": 1.0, "Legal": 1.0, "HR": 0.5}, "IT") == "IT"
    assert best_label({"IT": 1.0, "Legal": 2.5}, "IT") == "Legal"


def test_language_detection() -> None:
    clf = _classifier()
    assert clf.detect_language("Не работает компьютер, что делать если нужно срочно") == "Russian"
    assert clf.detect_language("printer broken") == "Mixed"
    assert clf.detect_language("принтер і сканер") == "Mixed"
    assert clf.language_scores("принтер і сканер") == {"Ukrainian": 2, "Russian": 0}
    assert clf.language_scores("стандарт квитанція") == {"Ukrainian": 2, "Russian": 0}
    assert clf.language_scores("стандарт та квитанція") == {"Ukrainian": 3, "Russian": 0}


def test_title_from_subject_and_body() -> None:
    assert generate_title("тіло заявки", "Принтер") == "Принтер"
    assert generate_title("принтер не працює", "abc") == "Принтер не працює"
    long_text = "Принтер не друкує. Також сканер не бачить документи і треба терміново"
    assert generate_title(long_text) == "Принтер не друкує."


def test_title_truncation() -> None:
    text = "Дуже довгий опис проблеми без жодних розділових знаків який триває і триває"
    title = generate_title(text)
    assert len(title) == 50
    assert title.endswith("...")
    assert title.startswith("Дуже довгий")
    # A sentence ending before position 10 does not count.
    early = generate_title("Привіт. Принтер у бухгалтерії не друкує вже третій день поспіль, допоможіть")
    assert early.endswith("...")
    assert early != "Привіт."


def test_title_is_single_line() -> None:
    assert generate_title("Принтер\nне друкує") == "Принтер не друкує"


def test_ticket_id_format() -> None:
    ticket_id = generate_ticket_id(datetime(2024, 5, 1, 10, 15, 0), random.Random(1))
    assert ticket_id.startswith("TKT-20240501101500")
    assert TICKET_ID_PATTERN.match(ticket_id)
    assert TICKET_ID_PATTERN.match(generate_ticket_id())


def test_unknown_department_in_keyword_table_raises() -> None:
    with pytest.raises(ValueError):
        KeywordTicketClassifier(department_keywords={"Finance": ["рахунок"]})


def test_custom_keywords_and_protocol() -> None:
    clf = KeywordTicketClassifier(department_keywords={"IT": DEPARTMENT_KEYWORDS["IT"], "HR": ["обід"]})
    assert clf.predict_department("де мій обід") == "HR"
    assert isinstance(clf, TicketClassifierProtocol)


def test_module_level_classify() -> None:
    ticket = classify("Не працює пошта в outlook, потрібно терміново", subject="", requester_id="7")
    assert ticket.department == "IT"
    assert ticket.priority == "High"
