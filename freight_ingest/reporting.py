"""Aggregation of per-record ingestion outcomes into a batch summary."""
from typing import Any, Dict, List, Optional

from .normalizers import parse_number
from .utils import logger

RULE = "-" * 50


class BatchReport:
    """Collects outcomes in input order and summarizes them.

    Confidence statistics cover only records that carried a numeric
    `confianza` value.
    """

    def __init__(self) -> None:
        self.results: List[Dict[str, Any]] = []
        self.succeeded = 0
        self.failed = 0
        self._confidences: List[float] = []

    def add(self, index: int, record: Any, outcome: Dict[str, Any]) -> None:
        self.results.append({"index": index + 1, "record": record, "result": outcome})
        if outcome.get("success"):
            self.succeeded += 1
        else:
            self.failed += 1
        if isinstance(record, dict):
            confidence = parse_number(record.get("confianza"))
            if confidence is not None:
                self._confidences.append(confidence)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success_rate(self) -> float:
        if not self.results:
            return 0.0
        return round(self.succeeded / self.total * 100, 1)

    def confidence_stats(self) -> Optional[Dict[str, Any]]:
        if not self._confidences:
            return None
        return {
            "average": round(sum(self._confidences) / len(self._confidences), 1),
            "with_confidence": len(self._confidences),
            "total": self.total,
        }

    def summary(self) -> Dict[str, Any]:
        return {
            "succeeded": self.succeeded,
            "failed": self.failed,
            "total": self.total,
            "success_rate": self.success_rate,
            "confidence": self.confidence_stats(),
            "results": self.results,
        }

    def log_summary(self) -> None:
        logger.info(RULE)
        logger.info("Ingestion finished: %d succeeded, %d failed, %d processed (%.1f%% success)",
                    self.succeeded, self.failed, self.total, self.success_rate)
        for item in self.results:
            outcome = item["result"]
            if outcome.get("success"):
                continue
            detail = outcome.get("error") or ", ".join(outcome.get("errors", []))
            logger.warning("Listing %d: %s", item["index"], detail)
        stats = self.confidence_stats()
        if stats:
            logger.info("Average AI confidence: %.1f%% (%d/%d listings)",
                        stats["average"], stats["with_confidence"], stats["total"])
        logger.info(RULE)
