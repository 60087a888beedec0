"""User-facing texts (Ukrainian)."""

from __future__ import annotations

from typing import Dict

VALIDATION_REASONS: Dict[str, str] = {
    "empty": "Порожнє повідомлення. Будь ласка, опишіть вашу проблему.",
    "too_short": "Повідомлення занадто коротке, мінімум 5 символів.",
    "repeated_chars": "Повідомлення містить повторювані символи.",
    "junk_tokens": "Повідомлення не має змісту.",
    "meaningless": "Повідомлення не має змісту. Будь ласка, опишіть вашу проблему детальніше.",
    "no_words": "Повідомлення не містить змістовних слів.",
    "only_filler": "Повідомлення містить лише слова-паразити.",
    "too_little_content": "Замало змістовної інформації. Додайте більше деталей.",
    "gibberish": "Повідомлення схоже на випадковий набір символів.",
}

FIELD_LOCKED = "Поле «{field}» визначається автоматично і не може бути змінене вручну."
FIELD_NOT_FOUND = "Поле «{field}» не знайдено у тексті заявки."
EMPTY_FIELD_VALUE = "Поле «{field}» не може бути порожнім."

BUTTONS: Dict[str, str] = {
    "confirm": "✅ Підтвердити",
    "cancel": "❌ Скасувати",
    "edit": "✏️ Редагувати",
    "edit_again": "✏️ Редагувати ще",
    "edit_text": "⌨️ Текстом",
    "edit_voice": "🎤 Голосом",
    "edit_document": "📄 Весь текст",
    "back": "⬅️ Назад",
}

TICKET_PREVIEW = "{content}\n\nПеревірте заявку та підтвердіть відправку."
TICKET_UPDATED_PREVIEW = "🔄 Заявку оновлено:\n\n{content}\n\nПеревірте зміни та підтвердіть відправку."
TICKET_SENT = "✅ Заявку {ticket_id} відправлено до служби підтримки."
TICKET_SENT_WITH_URL = "✅ Заявку {ticket_id} відправлено до служби підтримки: {url}"
TICKET_DEBUG_SENT = "🧪 Режим налагодження: заявку {ticket_id} не відправлено до служби підтримки."
TICKET_CANCELLED = "❌ Створення заявки скасовано."
TICKET_NOT_FOUND = "Заявку не знайдено або вона вже оброблена."
TICKET_SUBMIT_ERROR = "Не вдалося відправити заявку. Спробуйте пізніше."
EDIT_OPTIONS = "Як ви хочете відредагувати заявку?"
EDIT_TEXT_INSTRUCTION = (
    "Напишіть, що змінити. Наприклад:\n"
    "• змінити заголовок на Проблема з принтером\n"
    "• додати до опису: помилка з'являється зранку"
)
EDIT_VOICE_INSTRUCTION = "Надішліть голосове повідомлення з описом змін."
EDIT_DOCUMENT_INSTRUCTION = "Скопіюйте текст заявки, виправте його та надішліть повністю:\n\n{document}"
VOICE_PROCESSING = "🎤 Обробляю голосове повідомлення..."

REJECTED = "⚠️ {reason}"
VOICE_DISABLED = "Голосові повідомлення зараз не обробляються. Напишіть, будь ласка, текстом."
VOICE_ERROR = "Не вдалося розпізнати голосове повідомлення. Спробуйте ще раз або напишіть текстом."
TEXT_ERROR = "Не вдалося обробити повідомлення. Спробуйте ще раз."
GENERAL_ERROR = "Сталася помилка. Спробуйте ще раз."
UNKNOWN_COMMAND = "Невідома команда. Скористайтеся /help."

BOT_READY = "👋 Вітаю! Опишіть проблему текстом або голосом, і я створю заявку."
AUTH_WELCOME = "👋 Вітаю, {firstname} {lastname} ({email})! Ви авторизовані в системі підтримки."
AUTH_USER_NOT_FOUND = "Користувача з Telegram ID {user_id} не знайдено в системі підтримки."
AUTH_SERVICE_ERROR = "Сервіс авторизації тимчасово недоступний."
AUTH_DEBUG_WARNING = "⚠️ Режим налагодження: {reason} Доступ дозволено."
AUTH_ACCESS_DENIED = "⛔ Доступ заборонено. {reason} Зверніться до адміністратора."
HISTORY_CLEARED = "🧹 Історію очищено."
HELP = (
    "Я створюю заявки до служби підтримки.\n\n"
    "• Опишіть проблему текстом або голосовим повідомленням.\n"
    "• Перевірте заявку, за потреби відредагуйте її та підтвердіть.\n\n"
    "Команди: /start, /help, /clear, /stats, /health\n"
    "Режим: {mode}"
)
STATS = "📊 Сесій усього: {total}\nАктивних за 30 хв: {active}\nЧас роботи: {uptime}"
HEALTH = (
    "🩺 Стан сервісів:\n"
    "Розпізнавання мовлення: {speech}\n"
    "Обробка тексту: {text}\n"
    "Резервна LLM: {llm}\n"
    "{summary}"
)
HEALTH_ONLINE = "✅"
HEALTH_OFFLINE = "❌"
HEALTH_ALL_OK = "Усі сервіси працюють."
HEALTH_DEGRADED = "Деякі сервіси недоступні."


def validation_reason(code: str) -> str:
    """Localized reason text for a validator rule code."""
    return VALIDATION_REASONS[code]


def status_mark(online: bool) -> str:
    return HEALTH_ONLINE if online else HEALTH_OFFLINE

