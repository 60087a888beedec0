"""Display text format shared by the confirmation preview and the editor.

The rendered block is the source of truth for pending tickets, so every
field line is anchored on its emoji and bold label::

    🎫 **Заявка створена**

    📋 **ID:** TKT-20240501101500042
    💻 **Відділ:** IT
    ...
    ✅ **Статус:** Open

``parse_fields`` reads those anchors back; values that cannot be found come
back as empty strings rather than raising.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, List, Optional, Pattern

from DialogDesk.label_space import DEFAULT_CATEGORY, DEFAULT_STATUS
from DialogDesk.tickets.model import Ticket

HEADER = "🎫 **Заявка створена**"
TIMESTAMP_FORMAT = "%d.%m.%Y, %H:%M:%S"

DEPARTMENT_EMOJIS: Dict[str, str] = {
    "IT": "💻",
    "Legal": "⚖️",
    "HR": "👥",
}
DEFAULT_DEPARTMENT_EMOJI = "📁"

PRIORITY_EMOJIS: Dict[str, str] = {
    "High": "🔴",
    "Medium": "🟡",
    "Low": "🟢",
    "Critical": "⚫",
}
DEFAULT_PRIORITY_EMOJI = "🟡"

ADDITIONAL_INFO_EMOJI = "🔄"

# field -> (label, emoji alternatives that may prefix the line)
FIELD_LABELS: Dict[str, str] = {
    "id": "ID",
    "department": "Відділ",
    "category": "Категорія",
    "priority": "Пріоритет",
    "title": "Заголовок",
    "description": "Опис",
    "language": "Мова",
    "created": "Створено",
    "status": "Статус",
    "additional_info": "Додаткова інформація",
}

FIELD_EMOJIS: Dict[str, List[str]] = {
    "id": ["📋"],
    "department": list(DEPARTMENT_EMOJIS.values()) + [DEFAULT_DEPARTMENT_EMOJI],
    "category": ["📂"],
    "priority": list(PRIORITY_EMOJIS.values()),
    "title": ["📝"],
    "description": ["📄"],
    "language": ["🌐"],
    "created": ["⏰"],
    "status": ["✅"],
    "additional_info": [ADDITIONAL_INFO_EMOJI],
}

DISPLAY_FIELDS: List[str] = [
    "id",
    "department",
    "category",
    "priority",
    "title",
    "description",
    "language",
    "created",
    "status",
]
MULTILINE_FIELDS = {"description", "additional_info"}
PARSED_FIELDS: List[str] = DISPLAY_FIELDS + ["additional_info"]


def _emoji_group(field: str) -> str:
    return "(?:" + "|".join(re.escape(emoji) for emoji in FIELD_EMOJIS[field]) + ")"


def line_prefix_pattern(field: str) -> str:
    """Regex source matching '<emoji> **<Label>:**' at the start of a line."""
    return rf"^{_emoji_group(field)}[ \t]*\*\*{re.escape(FIELD_LABELS[field])}:\*\*"


# A multi-line value stops at the next line that starts a known field.
_ALL_EMOJIS = sorted({emoji for emojis in FIELD_EMOJIS.values() for emoji in emojis}, key=len, reverse=True)
_NEXT_FIELD_LOOKAHEAD = r"(?=\n(?:" + "|".join(re.escape(emoji) for emoji in _ALL_EMOJIS) + r")[ \t]*\*\*[^*\n]+:\*\*|\Z)"


def _compile_field_pattern(field: str) -> Pattern[str]:
    prefix = line_prefix_pattern(field)
    if field == "additional_info":
        # Block form: label line, value on the following lines.
        return re.compile(prefix + r"[ \t]*\n?(.*?)" + _NEXT_FIELD_LOOKAHEAD, re.M | re.S)
    if field in MULTILINE_FIELDS:
        return re.compile(prefix + r"[ \t]?(.*?)" + _NEXT_FIELD_LOOKAHEAD, re.M | re.S)
    return re.compile(prefix + r"[ \t]?([^\n]*)$", re.M)


FIELD_PATTERNS: Dict[str, Pattern[str]] = {field: _compile_field_pattern(field) for field in PARSED_FIELDS}


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def department_emoji(department: str) -> str:
    return DEPARTMENT_EMOJIS.get(department, DEFAULT_DEPARTMENT_EMOJI)


def priority_emoji(priority: str) -> str:
    return PRIORITY_EMOJIS.get(priority, DEFAULT_PRIORITY_EMOJI)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def parse_timestamp(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value.strip(), TIMESTAMP_FORMAT)
    except ValueError:
        return None


def field_line(field: str, value: str, emoji: Optional[str] = None) -> str:
    """One display line; department and priority pick their emoji from the value."""
    if emoji is None:
        if field == "department":
            emoji = department_emoji(value)
        elif field == "priority":
            emoji = priority_emoji(value)
        else:
            emoji = FIELD_EMOJIS[field][0]
    return f"{emoji} **{FIELD_LABELS[field]}:** {value}"


def additional_info_block(text: str) -> str:
    return f"{ADDITIONAL_INFO_EMOJI} **{FIELD_LABELS['additional_info']}:**\n{text}"


def render(ticket: Ticket) -> str:
    """Render a ticket into its canonical display text."""
    values = {
        "id": ticket.id,
        "department": ticket.department,
        "category": ticket.category,
        "priority": ticket.priority,
        "title": ticket.title,
        "description": ticket.description,
        "language": ticket.language,
        "created": format_timestamp(ticket.created_at),
        "status": ticket.status,
    }
    lines = [field_line(field, values[field]) for field in DISPLAY_FIELDS]
    return HEADER + "\n\n" + "\n".join(lines)


def render_fields(fields: Dict[str, str]) -> str:
    """Render already-parsed field values, keeping any additional info block."""
    lines = [field_line(field, fields.get(field, "")) for field in DISPLAY_FIELDS]
    text = HEADER + "\n\n" + "\n".join(lines)
    extra = fields.get("additional_info", "")
    if extra:
        text += "\n\n" + additional_info_block(extra)
    return text


def parse_fields(display_text: str) -> Dict[str, str]:
    """Extract every known field from display text; missing fields are ''."""
    text = display_text or ""
    fields: Dict[str, str] = {}
    for field, pattern in FIELD_PATTERNS.items():
        match = pattern.search(text)
        fields[field] = match.group(1).strip() if match else ""
    return fields


def ticket_from_fields(fields: Dict[str, str], requester: str = "") -> Ticket:
    """Rebuild a ticket from parsed fields.

    Raises ValueError when a required field is missing or out of range; the
    caller decides whether that is a programmer error or bad input.
    """
    created = parse_timestamp(fields.get("created", ""))
    if created is None:
        raise ValueError(f"Unparseable creation timestamp '{fields.get('created', '')}'")
    return Ticket(
        id=fields.get("id", ""),
        department=fields.get("department", ""),
        category=fields.get("category") or DEFAULT_CATEGORY,
        priority=fields.get("priority", ""),
        title=fields.get("title", ""),
        description=fields.get("description", ""),
        requester=requester,
        language=fields.get("language", ""),
        created_at=created,
        status=fields.get("status") or DEFAULT_STATUS,
    )


__all__ = [
    "HEADER",
    "DEPARTMENT_EMOJIS",
    "PRIORITY_EMOJIS",
    "FIELD_LABELS",
    "FIELD_PATTERNS",
    "DISPLAY_FIELDS",
    "additional_info_block",
    "capitalize_first",
    "department_emoji",
    "field_line",
    "format_timestamp",
    "line_prefix_pattern",
    "parse_fields",
    "parse_timestamp",
    "priority_emoji",
    "render",
    "render_fields",
    "ticket_from_fields",
]
