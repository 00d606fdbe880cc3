from __future__ import annotations

import itertools
import math

import pytest

from src.evaluation_system.evaluation_system.evaluations.model import EvaluationScores
from src.evaluation_system.evaluation_system.evaluations.scoring import (
    calculate_category_scores,
    calculate_overall_rating,
    rating_label,
    weighted_breakdown,
)


def test_empty_input_scores_zero():
    assert calculate_overall_rating(None) == 0
    assert calculate_overall_rating({}) == 0
    assert calculate_overall_rating(EvaluationScores()) == 0


def test_all_fives_and_all_zeros():
    assert calculate_overall_rating(EvaluationScores.uniform(5)) == 5.0
    assert calculate_overall_rating(EvaluationScores.uniform(0)) == 0.0


def test_out_of_range_values_are_clamped():
    assert calculate_overall_rating(EvaluationScores.uniform(9)) == 5.0
    assert calculate_overall_rating(EvaluationScores.uniform(-3)) == 0.0


@pytest.mark.parametrize("a,b,c", list(itertools.product([0, 1.5, 2, 3.3, 4, 5], repeat=3)))
def test_result_in_range_with_one_decimal(a, b, c):
    data = {
        "jobKnowledgeScore1": a,
        "jobKnowledgeScore2": b,
        "qualityOfWorkScore3": c,
        "teamworkScore1": b,
        "ethicalScore2": a,
        "customerServiceScore4": c,
    }
    result = calculate_overall_rating(data)
    assert 0 <= result <= 5
    assert round(result, 1) == result


def test_category_means_skip_missing_and_non_numeric():
    scores = calculate_category_scores(
        {
            "jobKnowledgeScore1": 4,
            "jobKnowledgeScore2": "2",
            "jobKnowledgeScore3": "",
            "teamworkScore1": "n/a",
            "teamworkScore2": float("nan"),
            "unknownScore": 5,
        }
    )
    assert scores["job_knowledge"] == 3.0
    assert scores["teamwork"] == 0.0
    assert scores["customer_service"] == 0.0


def test_weights_apply_per_category():
    only_customer_service = {f"customerServiceScore{i}": 5 for i in range(1, 6)}
    assert calculate_overall_rating(only_customer_service) == 1.5

    only_job_knowledge = {f"jobKnowledgeScore{i}": 5 for i in range(1, 4)}
    assert calculate_overall_rating(only_job_knowledge) == 1.0


def test_rounds_half_up():
    only_ethical = {f"ethicalScore{i}": 5 for i in range(1, 5)}
    assert calculate_overall_rating(only_ethical) == 0.3


def test_mapping_and_record_agree():
    data = {"adaptabilityScore1": 3, "adaptabilityScore2": 4, "reliabilityScore4": 2}
    assert calculate_overall_rating(data) == calculate_overall_rating(EvaluationScores.from_mapping(data))


def test_rating_labels():
    assert rating_label(4.8) == "Outstanding"
    assert rating_label(4.0) == "Exceeds Expectations"
    assert rating_label(3.5) == "Meets Expectations"
    assert rating_label(2.5) == "Needs Improvement"
    assert rating_label(1.0) == "Unsatisfactory"


def test_weighted_breakdown_covers_all_categories():
    breakdown = weighted_breakdown(EvaluationScores.uniform(4))
    assert [row["category"] for row in breakdown] == [
        "job_knowledge",
        "quality_of_work",
        "adaptability",
        "teamwork",
        "reliability",
        "ethical",
        "customer_service",
    ]
    assert math.isclose(sum(row["weight"] for row in breakdown), 1.0)
    assert all(row["average"] == 4.0 for row in breakdown)
