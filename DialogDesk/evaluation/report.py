"""Batch classification results, confusion matrices and per-class accuracy."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from DialogDesk.routing.ticket_engine import TicketEngine
from DialogDesk.utils.logger import get_logger

logger = get_logger(__name__)

RESULT_COLUMNS = [
    "text",
    "is_valid",
    "rejection_code",
    "id",
    "department",
    "priority",
    "language",
    "title",
    "gold_department",
    "gold_priority",
]


def classify_frame(df: pd.DataFrame, engine: Optional[TicketEngine] = None) -> pd.DataFrame:
    """Run every report through validation and classification."""
    engine = engine or TicketEngine()
    rows: List[Dict[str, object]] = []
    for _, row in df.iterrows():
        text = str(row.get("text", ""))
        outcome = engine.create(text, str(row.get("requester", "")), str(row.get("subject", "")))
        result = outcome.as_dict()
        result["text"] = text
        result["gold_department"] = str(row.get("gold_department", "") or "")
        result["gold_priority"] = str(row.get("gold_priority", "") or "")
        rows.append(result)
    results = pd.DataFrame.from_records(rows)
    for column in RESULT_COLUMNS:
        if column not in results.columns:
            results[column] = ""
    rejected = int((~results["is_valid"].astype(bool)).sum()) if len(results) else 0
    logger.info("Classified %s reports, %s rejected", len(results), rejected)
    return results


def _labelled(results: pd.DataFrame, gold: str) -> pd.DataFrame:
    """Accepted rows that carry a gold label."""
    if results.empty:
        return results
    mask = results["is_valid"].astype(bool) & (results[gold].astype(str).str.strip() != "")
    return results[mask]


def _sorted_labels(series: pd.Series) -> List[str]:
    return sorted(series.dropna().astype(str).unique())


def build_confusion_matrix(results: pd.DataFrame, field: str = "department") -> pd.DataFrame:
    gold, predicted = f"gold_{field}", field
    subset = _labelled(results, gold)
    if subset.empty:
        matrix = pd.DataFrame(dtype=int)
    else:
        matrix = (
            pd.crosstab(subset[gold], subset[predicted])
            .reindex(index=_sorted_labels(subset[gold]), columns=_sorted_labels(subset[predicted]), fill_value=0)
            .astype(int)
        )
    matrix.index.name = gold
    matrix.columns.name = predicted
    return matrix


def compute_per_class_accuracy(results: pd.DataFrame, field: str = "department") -> pd.DataFrame:
    gold, predicted = f"gold_{field}", field
    subset = _labelled(results, gold)
    records = []
    for label in (_sorted_labels(subset[gold]) if not subset.empty else []):
        gold_mask = subset[gold] == label
        total = int(gold_mask.sum())
        correct = int((gold_mask & (subset[predicted] == label)).sum())
        records.append(
            {
                gold: label,
                "total": total,
                "correct": correct,
                "accuracy": correct / total if total > 0 else float("nan"),
            }
        )
    if not records:
        return pd.DataFrame(columns=["total", "correct", "accuracy"]).rename_axis(gold)
    return pd.DataFrame.from_records(records).set_index(gold)


def overall_accuracy(results: pd.DataFrame, field: str = "department") -> float:
    subset = _labelled(results, f"gold_{field}")
    if subset.empty:
        return float("nan")
    return float((subset[f"gold_{field}"] == subset[field]).mean())


def write_report(results: pd.DataFrame, output_dir: str | Path) -> Dict[str, Path]:
    """Write results, confusion and per-class CSVs for department and priority."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {"results": output_dir / "results.csv"}
    results.to_csv(paths["results"], index=False)
    for field in ("department", "priority"):
        confusion_path = output_dir / f"confusion_{field}.csv"
        per_class_path = output_dir / f"per_class_{field}.csv"
        build_confusion_matrix(results, field).to_csv(confusion_path)
        compute_per_class_accuracy(results, field).to_csv(per_class_path)
        paths[f"confusion_{field}"] = confusion_path
        paths[f"per_class_{field}"] = per_class_path
    return paths


__all__ = [
    "build_confusion_matrix",
    "classify_frame",
    "compute_per_class_accuracy",
    "overall_accuracy",
    "write_report",
]
