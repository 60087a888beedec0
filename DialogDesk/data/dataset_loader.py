"""CSV loader for batches of user reports."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pandas as pd

from DialogDesk.label_space import canonical_department

OPTIONAL_COLUMNS = ["subject", "requester", "gold_department", "gold_priority"]
COLUMN_ALIASES: Dict[str, str] = {
    "message": "text",
    "report": "text",
    "title": "subject",
    "user_id": "requester",
    "telegram_id": "requester",
    "department": "gold_department",
    "priority": "gold_priority",
}


def load_reports(path: str | Path) -> pd.DataFrame:
    """Load reports CSV, standardize columns and drop rows without text."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset path does not exist: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    df.columns = [c.strip().lower().replace(" ", "_") for c in df.columns]
    renames = {alias: target for alias, target in COLUMN_ALIASES.items() if alias in df.columns and target not in df.columns}
    df = df.rename(columns=renames)

    if "text" not in df.columns:
        raise ValueError("Missing required column: text")
    for column in OPTIONAL_COLUMNS:
        if column not in df.columns:
            df[column] = ""

    df = df[df["text"].astype(str).str.strip() != ""]
    df = df.reset_index(drop=True)
    df["gold_department"] = df["gold_department"].map(lambda value: canonical_department(value) if str(value).strip() else "")
    return df


def load_batch(path: str | Path, limit: int | None = None) -> pd.DataFrame:
    df = load_reports(path)
    if limit is not None:
        df = df.head(limit)
    return df


def to_records(df: pd.DataFrame) -> List[Dict[str, str]]:
    return [
        {
            "text": str(row["text"]),
            "subject": str(row["subject"]),
            "requester": str(row["requester"]),
        }
        for _, row in df.iterrows()
    ]


__all__ = ["load_batch", "load_reports", "to_records"]
