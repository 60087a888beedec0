"""Classify a CSV of user reports offline and write evaluation tables."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, List

import yaml

from DialogDesk.classifiers.keyword_classifier import KeywordTicketClassifier
from DialogDesk.data.dataset_loader import load_batch
from DialogDesk.evaluation.report import (
    classify_frame,
    compute_per_class_accuracy,
    overall_accuracy,
    write_report,
)
from DialogDesk.routing.ticket_engine import TicketEngine
from DialogDesk.tickets.validator import FILLER_WORDS, JUNK_TOKENS, ContentValidator
from DialogDesk.utils.config import load_settings
from DialogDesk.utils.logger import configure_logging

CLASSIFIER_KEYS = ("department_keywords", "priority_keywords", "ukrainian_markers", "russian_markers")


def _load_config(config_path: Path | None) -> Dict[str, Any]:
    """Load optional keyword overrides from YAML (or JSON, which YAML also reads)."""
    if config_path is None:
        return {}
    if not config_path.exists():
        raise FileNotFoundError(f"Config path does not exist: {config_path}")
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {config_path} must contain a mapping")
    return data


def build_engine(cfg: Dict[str, Any]) -> TicketEngine:
    classifier = KeywordTicketClassifier(**{key: cfg[key] for key in CLASSIFIER_KEYS if key in cfg})
    extra_junk: List[str] = cfg.get("junk_tokens") or []
    extra_filler: List[str] = cfg.get("filler_words") or []
    validator = ContentValidator(
        junk_tokens=JUNK_TOKENS | frozenset(token.lower() for token in extra_junk),
        filler_words=FILLER_WORDS | frozenset(word.lower() for word in extra_filler),
    )
    return TicketEngine(validator=validator, classifier=classifier)


def run_batch(input_path: Path, output_dir: Path, limit: int | None = None, cfg: Dict[str, Any] | None = None) -> Dict[str, Path]:
    df = load_batch(input_path, limit=limit)
    print(f"[Batch] Loaded {len(df)} reports from {input_path}")
    engine = build_engine(cfg or {})
    print(f"[Batch] Classifier: {engine.metadata.name} ({engine.metadata.mode})")
    results = classify_frame(df, engine)
    paths = write_report(results, output_dir)
    accepted = int(results["is_valid"].astype(bool).sum()) if len(results) else 0
    print(f"[Batch] Accepted {accepted}/{len(results)}")
    for field in ("department", "priority"):
        per_class = compute_per_class_accuracy(results, field)
        if per_class.empty:
            continue
        print(f"[Batch] {field} accuracy: {overall_accuracy(results, field):.3f}")
        print(per_class.to_string())
    print(f"[Batch] Wrote {paths['results']}")
    return paths


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classify helpdesk reports from a CSV file.")
    parser.add_argument("--input", required=True, help="CSV with a 'text' column (optional subject, requester, gold_department, gold_priority).")
    parser.add_argument("--output", default="results", help="Directory for results and confusion tables.")
    parser.add_argument("--limit", type=int, default=None, help="Limit number of reports.")
    parser.add_argument("--config", type=str, default=None, help="Keyword override config (yaml/json).")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = load_settings()
    configure_logging(settings.log_dir, settings.log_level)
    cfg = _load_config(Path(args.config)) if args.config else {}
    run_batch(Path(args.input), Path(args.output), limit=args.limit, cfg=cfg)


if __name__ == "__main__":
    main()
