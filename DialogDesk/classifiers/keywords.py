"""Static keyword tables for department, priority and language detection.

Each department mixes Ukrainian and Russian vocabulary with common English
technical terms. Keywords are matched as lower-case substrings.
"""

from __future__ import annotations

from typing import Dict, List

DEPARTMENT_KEYWORDS: Dict[str, List[str]] = {
    "IT": [
        # Ukrainian
        "комп'ютер",
        "інтернет",
        "пошта",
        "принтер",
        "програма",
        "система",
        "мережа",
        "сайт",
        "сервер",
        "база даних",
        "пароль",
        "доступ",
        "установка",
        "налаштування",
        "програмне забезпечення",
        "антивірус",
        "резервне копіювання",
        "відновлення",
        "технічна підтримка",
        "оновлення",
        "ліцензія",
        "обладнання",
        "монітор",
        "клавіатура",
        "миша",
        "звук",
        "відео",
        "камера",
        "мікрофон",
        "wi-fi",
        "wifi",
        # Russian
        "компьютер",
        "интернет",
        "почта",
        "программа",
        "сеть",
        "база данных",
        "настройка",
        "программное обеспечение",
        "антивирус",
        "резервное копирование",
        "восстановление",
        "техническая поддержка",
        "обновление",
        "лицензия",
        "оборудование",
        "монитор",
        "клавиатура",
        "мышь",
        "видео",
        "микрофон",
        "вай-фай",
        # Common IT terms
        "it",
        "айти",
        "email",
        "е-мейл",
        "windows",
        "office",
        "outlook",
        "excel",
        "word",
        "powerpoint",
        "skype",
        "teams",
        "zoom",
        "vpn",
        "ip",
        "dns",
        "tcp",
        "http",
        "https",
        "ftp",
        "sql",
    ],
    "Legal": [
        # Ukrainian
        "юрист",
        "юридичний",
        "договір",
        "контракт",
        "угода",
        "документ",
        "правовий",
        "закон",
        "законодавство",
        "нормативний",
        "акт",
        "реєстрація",
        "ліцензування",
        "дозвіл",
        "сертифікат",
        "патент",
        "торговельна марка",
        "авторське право",
        "інтелектуальна власність",
        "судовий",
        "претензія",
        "позов",
        "арбітраж",
        "медіація",
        "нотаріус",
        "довіреність",
        "заповіт",
        "спадщина",
        "податки",
        "відповідальність",
        "штраф",
        "санкції",
        "компліанс",
        # Russian
        "юридический",
        "договор",
        "соглашение",
        "правовой",
        "законодательство",
        "нормативный",
        "регистрация",
        "лицензирование",
        "разрешение",
        "сертификат",
        "торговая марка",
        "авторское право",
        "интеллектуальная собственность",
        "судебный",
        "претензия",
        "иск",
        "арбитраж",
        "медиация",
        "нотариус",
        "доверенность",
        "завещание",
        "наследство",
        "налоги",
        "ответственность",
        "санкции",
        "комплаенс",
    ],
    "HR": [
        # Ukrainian
        "кадри",
        "персонал",
        "співробітник",
        "працівник",
        "найм",
        "звільнення",
        "відпустка",
        "лікарняний",
        "зарплата",
        "премія",
        "бонус",
        "стажування",
        "навчання",
        "тренінг",
        "атестація",
        "оцінка",
        "посада",
        "підвищення",
        "переведення",
        "графік",
        "робочий час",
        "відгул",
        "прогул",
        "дисципліна",
        "мотивація",
        "відрядження",
        "витрати",
        "компенсація",
        "соціальний пакет",
        "страхування",
        "медичний огляд",
        "профспілка",
        # Russian
        "кадры",
        "сотрудник",
        "работник",
        "увольнение",
        "отпуск",
        "больничный",
        "премия",
        "стажировка",
        "обучение",
        "тренинг",
        "аттестация",
        "оценка",
        "должность",
        "повышение",
        "перевод",
        "график",
        "рабочее время",
        "отгул",
        "дисциплина",
        "мотивация",
        "командировка",
        "расходы",
        "компенсация",
        "социальный пакет",
        "страхование",
        "медосмотр",
        "профсоюз",
        # Common HR terms
        "hr",
        "эйчар",
        "cv",
        "резюме",
        "собеседование",
        "рекрутинг",
    ],
}

PRIORITY_KEYWORDS: Dict[str, List[str]] = {
    "High": [
        "срочно",
        "терміново",
        "критично",
        "критически",
        "аварійно",
        "аварийно",
        "негайно",
        "немедленно",
        "блокер",
        "блокирует",
        "не працює",
        "не работает",
        "зламався",
        "сломался",
        "падає",
        "падает",
        "горить",
        "горит",
    ],
    "Medium": [
        "важливо",
        "важно",
        "потрібно",
        "нужно",
        "необхідно",
        "необходимо",
        "слід",
        "следует",
        "варто",
        "стоит",
        "бажано",
        "желательно",
    ],
    "Low": [
        "коли буде час",
        "когда будет время",
        "не поспішаючи",
        "не спеша",
        "коли зможете",
        "когда сможете",
        "на дозвіллі",
        "на досуге",
    ],
}

# High wins over Low, Low over Medium.
PRIORITY_CHECK_ORDER: List[str] = ["High", "Low", "Medium"]

UKRAINIAN_LETTERS = "іїєґ"
UKRAINIAN_LETTER_WEIGHT = 2

UKRAINIAN_MARKERS: List[str] = [
    "та",
    "або",
    "якщо",
    "який",
    "тому",
    "треба",
    "потрібно",
    "можна",
    "буде",
    "має",
    "можуть",
    "повинен",
    "після",
    "перед",
]

RUSSIAN_MARKERS: List[str] = [
    "что",
    "или",
    "если",
    "который",
    "поэтому",
    "нужно",
    "можно",
    "будет",
    "имеет",
    "могут",
    "должен",
    "после",
    "перед",
]

# A side needs more than this many points to be called a single language.
LANGUAGE_CONFIDENCE_THRESHOLD = 2

__all__ = [
    "DEPARTMENT_KEYWORDS",
    "PRIORITY_KEYWORDS",
    "PRIORITY_CHECK_ORDER",
    "UKRAINIAN_LETTERS",
    "UKRAINIAN_LETTER_WEIGHT",
    "UKRAINIAN_MARKERS",
    "RUSSIAN_MARKERS",
    "LANGUAGE_CONFIDENCE_THRESHOLD",
]
