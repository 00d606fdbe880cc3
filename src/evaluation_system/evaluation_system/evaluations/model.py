from __future__ import annotations

import math
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from ..common.records import record_from_row, record_to_row

# Rubric category -> (storage key stem, number of items)
RUBRIC = {
    "job_knowledge": ("jobKnowledgeScore", 3),
    "quality_of_work": ("qualityOfWorkScore", 5),
    "adaptability": ("adaptabilityScore", 3),
    "teamwork": ("teamworkScore", 3),
    "reliability": ("reliabilityScore", 4),
    "ethical": ("ethicalScore", 4),
    "customer_service": ("customerServiceScore", 5),
}


def _as_score(value: Any) -> Optional[float]:
    """Numbers and numeric strings count; blanks, junk, NaN and bools do not."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


@dataclass(frozen=True)
class EvaluationScores:
    """The 27 rubric items of an evaluation form, each optional."""

    job_knowledge_1: Optional[float] = None
    job_knowledge_2: Optional[float] = None
    job_knowledge_3: Optional[float] = None
    quality_of_work_1: Optional[float] = None
    quality_of_work_2: Optional[float] = None
    quality_of_work_3: Optional[float] = None
    quality_of_work_4: Optional[float] = None
    quality_of_work_5: Optional[float] = None
    adaptability_1: Optional[float] = None
    adaptability_2: Optional[float] = None
    adaptability_3: Optional[float] = None
    teamwork_1: Optional[float] = None
    teamwork_2: Optional[float] = None
    teamwork_3: Optional[float] = None
    reliability_1: Optional[float] = None
    reliability_2: Optional[float] = None
    reliability_3: Optional[float] = None
    reliability_4: Optional[float] = None
    ethical_1: Optional[float] = None
    ethical_2: Optional[float] = None
    ethical_3: Optional[float] = None
    ethical_4: Optional[float] = None
    customer_service_1: Optional[float] = None
    customer_service_2: Optional[float] = None
    customer_service_3: Optional[float] = None
    customer_service_4: Optional[float] = None
    customer_service_5: Optional[float] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "EvaluationScores":
        """Read `jobKnowledgeScore1`-style keys from an evaluationData bag."""
        if not data:
            return cls()
        kwargs = {}
        for category, (stem, count) in RUBRIC.items():
            for i in range(1, count + 1):
                kwargs[f"{category}_{i}"] = _as_score(data.get(f"{stem}{i}"))
        return cls(**kwargs)

    @classmethod
    def uniform(cls, value: float) -> "EvaluationScores":
        return cls(**{f.name: value for f in fields(cls)})

    def category_items(self, category: str) -> list[Optional[float]]:
        _, count = RUBRIC[category]
        return [getattr(self, f"{category}_{i}") for i in range(1, count + 1)]

    def to_mapping(self) -> dict[str, float]:
        out = {}
        for category, (stem, count) in RUBRIC.items():
            for i in range(1, count + 1):
                value = getattr(self, f"{category}_{i}")
                if value is not None:
                    out[f"{stem}{i}"] = value
        return out


@dataclass(frozen=True)
class Submission:
    """Evaluation record as kept under the submissions key.

    approval_status is advisory; readers derive the real status from the
    signatures.
    """

    id: int
    employee_name: str
    submitted_at: str
    employee_id: Optional[int] = None
    employee_email: Optional[str] = None
    evaluator_id: Optional[int] = None
    evaluator_name: Optional[str] = None
    evaluator: Optional[str] = None
    evaluation_data: dict[str, Any] = field(default_factory=dict)
    status: Optional[str] = None
    period: Optional[str] = None
    overall_rating: Optional[str] = None
    category: Optional[str] = None
    approval_status: Optional[str] = None
    employee_signature: Optional[str] = None
    employee_approved_at: Optional[str] = None
    evaluator_signature: Optional[str] = None
    evaluator_approved_at: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def scores(self) -> EvaluationScores:
        return EvaluationScores.from_mapping(self.evaluation_data)

    @property
    def evaluator_display_name(self) -> str:
        return self.evaluator_name or self.evaluator or ""

    @property
    def effective_evaluator_signature(self) -> Optional[str]:
        """Older records keep the evaluator signature inside evaluationData."""
        return self.evaluator_signature or (self.evaluation_data or {}).get("evaluatorSignature")

    @classmethod
    def from_dict(cls, row: dict) -> "Submission":
        data = row.get("evaluationData")
        return record_from_row(
            cls,
            row,
            employee_name=row.get("employeeName") or "",
            submitted_at=row.get("submittedAt") or "",
            evaluation_data=dict(data) if isinstance(data, dict) else {},
        )

    def to_dict(self) -> dict:
        return record_to_row(self)
