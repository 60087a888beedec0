"""Data loading exports."""

from DialogDesk.data.dataset_loader import load_batch, load_reports

__all__ = ["load_batch", "load_reports"]
