"""Canonical ticket label space and helpdesk id mapping."""

from __future__ import annotations

from typing import Dict, List, Tuple

DEPARTMENTS: List[str] = ["IT", "Legal", "HR"]
PRIORITIES: List[str] = ["Low", "Medium", "High"]
LANGUAGES: List[str] = ["Ukrainian", "Russian", "Mixed"]
STATUSES: List[str] = ["Open"]

DEFAULT_DEPARTMENT = "IT"
DEFAULT_PRIORITY = "Medium"
DEFAULT_CATEGORY = "Request"
DEFAULT_STATUS = "Open"

# Critical is never assigned by the classifier, only understood by the helpdesk.
SUBMISSION_PRIORITIES: List[str] = PRIORITIES + ["Critical"]

DEPARTMENT_SET = set(DEPARTMENTS)
PRIORITY_SET = set(PRIORITIES)
LANGUAGE_SET = set(LANGUAGES)
STATUS_SET = set(STATUSES)

_DEPARTMENT_LOWER_TO_LABEL: Dict[str, str] = {label.lower(): label for label in DEPARTMENTS}

# Map common variants into the canonical department space. All keys are lower-case.
DEPARTMENT_NORMALIZATION_MAP: Dict[str, str] = {
    "it": "IT",
    "айти": "IT",
    "іт": "IT",
    "ит": "IT",
    "tech": "IT",
    "technical support": "IT",
    "legal": "Legal",
    "law": "Legal",
    "юридичний": "Legal",
    "юридический": "Legal",
    "hr": "HR",
    "human resources": "HR",
    "кадри": "HR",
    "кадры": "HR",
    "персонал": "HR",
}

# Fixed contract of the helpdesk API.
HELPDESK_GROUP_IDS: Dict[str, int] = {
    "IT": 1,
    "HR": 2,
    "Finance": 3,
    "Support": 4,
}
DEFAULT_GROUP_ID = 1

HELPDESK_PRIORITY_IDS: Dict[str, int] = {name: index for index, name in enumerate(SUBMISSION_PRIORITIES, start=1)}
DEFAULT_PRIORITY_ID = HELPDESK_PRIORITY_IDS[DEFAULT_PRIORITY]

PRIORITY_ALIASES: Dict[str, Tuple[str, ...]] = {
    "Low": ("низький", "низкий"),
    "High": ("високий", "высокий"),
    "Critical": ("критичний", "критический"),
}
# Checked in order; the first matching substring decides.
_PRIORITY_ID_MARKERS = [
    ((name.lower(),) + aliases, HELPDESK_PRIORITY_IDS[name]) for name, aliases in PRIORITY_ALIASES.items()
]


def canonical_department(label: str | None) -> str:
    """Map a free-form department name into the canonical department space."""
    text = (label or "").strip()
    if not text:
        raise RuntimeError("Empty department encountered; provide one of the canonical departments.")
    normalized = " ".join(text.lower().replace("_", " ").split())
    if normalized in _DEPARTMENT_LOWER_TO_LABEL:
        return _DEPARTMENT_LOWER_TO_LABEL[normalized]
    if normalized in DEPARTMENT_NORMALIZATION_MAP:
        return DEPARTMENT_NORMALIZATION_MAP[normalized]
    raise RuntimeError(
        f"Unexpected department '{label}'. Extend DialogDesk/label_space.py DEPARTMENT_NORMALIZATION_MAP to map it."
    )


def group_id_for(department: str | None) -> int:
    """Helpdesk group id for a department, IT when unknown."""
    return HELPDESK_GROUP_IDS.get((department or "").strip(), DEFAULT_GROUP_ID)


def priority_id_for(priority: str | None) -> int:
    """Helpdesk priority id, matched by substring so localized labels work too."""
    lowered = (priority or "").strip().lower()
    for markers, priority_id in _PRIORITY_ID_MARKERS:
        if any(marker in lowered for marker in markers):
            return priority_id
    return DEFAULT_PRIORITY_ID


__all__ = [
    "DEPARTMENTS",
    "PRIORITIES",
    "LANGUAGES",
    "STATUSES",
    "SUBMISSION_PRIORITIES",
    "DEPARTMENT_SET",
    "PRIORITY_SET",
    "LANGUAGE_SET",
    "STATUS_SET",
    "DEFAULT_DEPARTMENT",
    "DEFAULT_PRIORITY",
    "DEFAULT_CATEGORY",
    "DEFAULT_STATUS",
    "DEPARTMENT_NORMALIZATION_MAP",
    "HELPDESK_GROUP_IDS",
    "HELPDESK_PRIORITY_IDS",
    "PRIORITY_ALIASES",
    "canonical_department",
    "group_id_for",
    "priority_id_for",
]
