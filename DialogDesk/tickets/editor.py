"""Field editor for pending tickets.

Free-text edit instructions are first classified into ``EditIntent`` values
(retitle, append/replace description, freeform note) and then applied to the
display text by a separate pure transform. Nothing the user typed is
dropped: whatever does not address a field ends up in the additional
information block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from DialogDesk.messages import EMPTY_FIELD_VALUE, FIELD_LOCKED, FIELD_NOT_FOUND
from DialogDesk.tickets.formatter import (
    FIELD_LABELS,
    FIELD_PATTERNS,
    PARSED_FIELDS,
    additional_info_block,
    capitalize_first,
    field_line,
    line_prefix_pattern,
    parse_fields,
    render_fields,
)
from DialogDesk.tickets.model import Ticket
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = ("title", "description")
LOCKED_FIELDS = ("priority", "department", "category")
SYSTEM_FIELDS = ("id", "language", "created", "status")


class EditKind(str, Enum):
    RETITLE = "retitle"
    APPEND_DESCRIPTION = "append_description"
    REPLACE_DESCRIPTION = "replace_description"
    FREEFORM = "freeform"


@dataclass(frozen=True, slots=True)
class EditIntent:
    kind: EditKind
    text: str


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of a field-scoped edit; ``value`` is the (possibly unchanged) target."""

    value: Union[Ticket, str]
    applied: bool
    reason: str = ""


_TITLE_TRIGGER = re.compile(
    r"(?<!\w)(заголов(?:ок|ку|ка)|назв[аиу]|названи[ея]|title|subject|heading)(?!\w)",
    re.I,
)
_DESCRIPTION_TRIGGER = re.compile(r"(?<!\w)(опис\w*|description|details|деталі|детали)(?!\w)", re.I)
# Mentions of "the problem" address the description but are part of the content,
# so such lines are always appended.
_DESCRIPTION_HINT = re.compile(r"(?<!\w)проблем\w*", re.I)

REPLACE_VERBS = frozenset(
    {
        # Ukrainian
        "змінити", "зміни", "змініть", "замінити", "заміни", "замініть", "поміняти", "поміняй",
        "поміняйте", "переписати", "перепиши", "перепишіть",
        # Russian
        "изменить", "измени", "измените", "заменить", "замени", "замените", "поменять", "поменяй",
        "поменяйте", "переписать", "перепишите",
        # English
        "change", "replace", "rewrite", "set",
    }
)
APPEND_VERBS = frozenset(
    {
        "додати", "додай", "додайте", "дописати", "допиши", "допишіть",
        "добавить", "добавь", "добавьте", "дописать", "допишите",
        "add", "append",
    }
)
# Words that may sit between a field trigger and the new value.
VALUE_PREFIXES = frozenset(
    {
        "на", "до", "в", "у", "к", "це", "это", "новий", "нова", "нове", "новый", "новое", "новая",
        "to", "as", "is", "new",
    }
)
CONNECTOR_WORDS = REPLACE_VERBS | APPEND_VERBS | VALUE_PREFIXES | frozenset(
    {
        "будь", "ласка", "нехай", "хай", "і", "й", "та", "а", "також",
        "пожалуйста", "пусть", "и", "также",
        "the", "a", "please", "and", "also",
    }
)
_EDGE_PUNCTUATION = " \t:;,.-–—\"'«»“”„"


def _words(text: str) -> List[str]:
    return [word.strip(_EDGE_PUNCTUATION).lower() for word in text.split()]


def _strip_leading(text: str, skip: FrozenSet[str]) -> str:
    words = text.split()
    while words:
        head = words[0].strip(_EDGE_PUNCTUATION).lower()
        if head and head not in skip:
            break
        words.pop(0)
    return " ".join(words).strip(_EDGE_PUNCTUATION)


def _split_trailing(text: str) -> Tuple[str, str]:
    """Split trailing connector words off; returns (kept text, stripped tail)."""
    words = text.split()
    tail: List[str] = []
    while words:
        last = words[-1].strip(_EDGE_PUNCTUATION).lower()
        if last and last not in CONNECTOR_WORDS:
            break
        tail.insert(0, words.pop())
    return " ".join(words).strip(_EDGE_PUNCTUATION), " ".join(tail)


def _field_value(line: str, trigger: re.Match[str]) -> str:
    # Every connector goes before the trigger; after it only the words that
    # introduce the value, so the user's wording stays intact.
    lead = _strip_leading(line[: trigger.start()], CONNECTOR_WORDS)
    value = _strip_leading(line[trigger.end() :], VALUE_PREFIXES)
    return " ".join(part for part in (lead, value) if part)


def _description_kind(lead: str) -> EditKind:
    # Only the words leading up to the trigger count, never the new content.
    words = set(_words(lead))
    if words & REPLACE_VERBS and not words & APPEND_VERBS:
        return EditKind.REPLACE_DESCRIPTION
    return EditKind.APPEND_DESCRIPTION


def _classify_line(line: str) -> List[Tuple[EditIntent, str]]:
    """Intents addressed by one line, each paired with the text it came from."""
    title = _TITLE_TRIGGER.search(line)
    description = _DESCRIPTION_TRIGGER.search(line)

    if description is not None and (title is None or description.start() < title.start()):
        kind = _description_kind(line[: description.start()])
        return [(EditIntent(kind, _field_value(line, description)), line)]

    if title is not None and description is None:
        return [(EditIntent(EditKind.RETITLE, _field_value(line, title)), line)]

    if title is not None and description is not None:
        # "change the title to X and the description to Y": the leading verb
        # covers both parts unless the second part names its own.
        between, tail = _split_trailing(line[title.end() : description.start()])
        lead = _strip_leading(line[: title.start()], CONNECTOR_WORDS)
        title_value = " ".join(part for part in (lead, _strip_leading(between, VALUE_PREFIXES)) if part)
        own_verb = set(_words(tail)) & (REPLACE_VERBS | APPEND_VERBS)
        kind = _description_kind(tail if own_verb else line[: title.start()])
        description_value = _strip_leading(line[description.end() :], VALUE_PREFIXES)
        return [
            (EditIntent(EditKind.RETITLE, title_value), line[: description.start()].strip()),
            (EditIntent(kind, description_value), line[description.start() :]),
        ]

    if _DESCRIPTION_HINT.search(line):
        value = _strip_leading(line, APPEND_VERBS | VALUE_PREFIXES)
        return [(EditIntent(EditKind.APPEND_DESCRIPTION, value), line)]
    return []


def classify_edit(instruction: str) -> Tuple[EditIntent, ...]:
    """Split an edit instruction into intents.

    Each line is classified on its own; a line naming both the title and
    the description yields one intent for each. Untriggered lines right after a
    description intent continue that description; all other untriggered
    lines, and triggered lines that carry no new value, are collected into a
    single trailing FREEFORM intent.
    """
    text = (instruction or "").strip()
    if not text:
        return ()

    entries: List[Tuple[EditIntent, str]] = []
    leftovers: List[str] = []
    description_open = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        classified = _classify_line(line)
        if not classified:
            if description_open:
                last, source = entries[-1]
                joined = f"{last.text}\n{line}" if last.text else line
                entries[-1] = (EditIntent(last.kind, joined), source)
            else:
                leftovers.append(line)
            continue
        entries.extend(classified)
        description_open = classified[-1][0].kind != EditKind.RETITLE

    field_intents: List[EditIntent] = []
    for intent, source in entries:
        if intent.text:
            field_intents.append(intent)
        else:
            leftovers.append(source)

    if not field_intents:
        return (EditIntent(EditKind.FREEFORM, text),)
    if leftovers:
        field_intents.append(EditIntent(EditKind.FREEFORM, "\n".join(leftovers)))
    return tuple(field_intents)


def _replace_value(display_text: str, field: str, value: str) -> Optional[str]:
    match = FIELD_PATTERNS[field].search(display_text)
    if match is None:
        return None
    return display_text[: match.start(1)] + value + display_text[match.end(1) :]


def _replace_line(display_text: str, field: str, value: str) -> Optional[str]:
    pattern = re.compile(line_prefix_pattern(field) + r"[^\n]*$", re.M)
    updated, count = pattern.subn(lambda _match: field_line(field, value), display_text, count=1)
    return updated if count else None


def join_description(existing: str, addition: str) -> str:
    """Append to a description: new paragraph for multi-line text, else a new sentence."""
    current = existing.rstrip()
    if not current:
        return addition
    if "\n" in current:
        return f"{current}\n\n{addition}"
    if current[-1] in ".!?…":
        return f"{current} {addition}"
    return f"{current}. {addition}"


def append_note(display_text: str, note: str) -> str:
    """Add text to the additional information block, creating it when absent."""
    existing = parse_fields(display_text)["additional_info"]
    if existing:
        updated = _replace_value(display_text, "additional_info", f"{existing}\n{note}")
        if updated is not None:
            return updated
    return display_text.rstrip() + "\n\n" + additional_info_block(note)


def apply_intent(display_text: str, intent: EditIntent) -> str:
    """Apply one intent; an intent whose anchor is missing degrades to a note."""
    updated: Optional[str] = None
    if intent.kind == EditKind.RETITLE:
        updated = _replace_line(display_text, "title", capitalize_first(" ".join(intent.text.split())))
    elif intent.kind == EditKind.REPLACE_DESCRIPTION:
        updated = _replace_value(display_text, "description", intent.text)
    elif intent.kind == EditKind.APPEND_DESCRIPTION:
        current = parse_fields(display_text)["description"]
        updated = _replace_value(display_text, "description", join_description(current, intent.text))
    if updated is None:
        return append_note(display_text, intent.text)
    return updated


def apply_edit(display_text: str, instruction: str) -> str:
    """Classify a free-text instruction and apply every resulting intent."""
    updated = display_text
    for intent in classify_edit(instruction):
        logger.info("Applying %s edit", intent.kind.value)
        updated = apply_intent(updated, intent)
    return updated


def _field_label(field: str) -> str:
    return FIELD_LABELS.get(field, field)


def set_field(target: Union[Ticket, str], field_name: str, value: str) -> EditResult:
    """Set ``title`` or ``description`` on a Ticket or on display text.

    System-derived fields are refused with a user-facing reason; an unknown
    field name is a programming error and raises KeyError.
    """
    field = (field_name or "").strip().lower()
    if field in LOCKED_FIELDS or field in SYSTEM_FIELDS:
        logger.info("Refused manual edit of locked field '%s'", field)
        return EditResult(target, applied=False, reason=FIELD_LOCKED.format(field=_field_label(field)))
    if field not in EDITABLE_FIELDS:
        raise KeyError(f"Unknown ticket field '{field_name}'")

    new_value = (value or "").strip()
    if field == "title":
        new_value = " ".join(new_value.split())
    if not new_value:
        return EditResult(target, applied=False, reason=EMPTY_FIELD_VALUE.format(field=_field_label(field)))

    if isinstance(target, Ticket):
        return EditResult(target.with_changes(**{field: new_value}), applied=True)

    if field == "title":
        updated = _replace_line(target, "title", new_value)
    else:
        updated = _replace_value(target, "description", new_value)
    if updated is None:
        return EditResult(target, applied=False, reason=FIELD_NOT_FOUND.format(field=_field_label(field)))
    return EditResult(updated, applied=True)


# --- full-document editing -------------------------------------------------

_LABEL_TO_FIELD: Dict[str, str] = {FIELD_LABELS[field].lower(): field for field in PARSED_FIELDS}
_LABEL_TO_FIELD.update({field.replace("_", " "): field for field in PARSED_FIELDS})
_DOCUMENT_LINE = re.compile(
    r"^\s*(" + "|".join(re.escape(label) for label in sorted(_LABEL_TO_FIELD, key=len, reverse=True)) + r")\s*:\s?(.*)$",
    re.I,
)
_DOCUMENT_MULTILINE = {"description", "additional_info"}


def flatten(display_text: str) -> str:
    """Plain 'Label: value' rendering that users can copy, edit and send back."""
    fields = parse_fields(display_text)
    lines = [f"{FIELD_LABELS[field]}: {fields[field]}" for field in PARSED_FIELDS if field != "additional_info"]
    if fields["additional_info"]:
        lines.append(f"{FIELD_LABELS['additional_info']}: {fields['additional_info']}")
    return "\n".join(lines)


def parse_document(document: str) -> Tuple[Dict[str, str], List[str]]:
    """Parse a flattened document into field values and unrecognised lines."""
    values: Dict[str, List[str]] = {}
    orphans: List[str] = []
    current: Optional[str] = None
    for line in (document or "").splitlines():
        match = _DOCUMENT_LINE.match(line)
        if match:
            current = _LABEL_TO_FIELD[match.group(1).lower()]
            values[current] = [match.group(2).strip()]
            continue
        if current in _DOCUMENT_MULTILINE:
            values[current].append(line.rstrip())
        elif line.strip():
            orphans.append(line.strip())
    parsed = {field: "\n".join(lines).strip() for field, lines in values.items()}
    return parsed, orphans


def apply_document_edit(display_text: str, document: str) -> str:
    """Merge a user-edited flattened document back into display text.

    Only editable fields and the additional information block are taken from
    the document; system-derived fields keep their current values. Lines that
    match no field label are preserved as additional information.
    """
    current = parse_fields(display_text)
    parsed, orphans = parse_document(document)

    merged = dict(current)
    for field in EDITABLE_FIELDS:
        value = parsed.get(field, "")
        if field == "title":
            value = " ".join(value.split())
        if value:
            merged[field] = value
    ignored = [field for field in parsed if field in LOCKED_FIELDS or field in SYSTEM_FIELDS]
    if ignored:
        logger.info("Ignored system fields in document edit: %s", ", ".join(sorted(ignored)))

    notes = [parsed["additional_info"]] if parsed.get("additional_info") else []
    notes.extend(orphans)
    merged["additional_info"] = "\n".join(notes)
    return render_fields(merged)


__all__ = [
    "EDITABLE_FIELDS",
    "LOCKED_FIELDS",
    "EditKind",
    "EditIntent",
    "EditResult",
    "append_note",
    "apply_document_edit",
    "apply_edit",
    "apply_intent",
    "classify_edit",
    "flatten",
    "join_description",
    "parse_document",
    "set_field",
]
