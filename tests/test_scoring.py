"""Tests for lead valuation and priority scoring.

Covers:
- Worked example (51-100, medium, two interests)
- Zero-interest value grid across every size/urgency pair
- Priority cap at 100
- Monotonicity in urgency
- Unrecognized labels fall back to neutral weights
"""

from decimal import ROUND_HALF_UP, Decimal

import pytest

from consultdesk.services.scoring import (
    MAX_PRIORITY_SCORE,
    SIZE_MULTIPLIERS,
    URGENCY_MULTIPLIERS,
    estimate_value,
    priority_score,
    score_form,
    size_key,
)

URGENCIES = ["low", "medium", "high"]


# ══════════════════════════════════════════════
#  ESTIMATED VALUE
# ══════════════════════════════════════════════

class TestEstimateValue:

    def test_worked_example(self):
        assert estimate_value("51-100", "medium", 2) == 60000

    def test_long_size_label_matches_short(self):
        assert estimate_value("51-100 employees", "medium", 2) == 60000

    @pytest.mark.parametrize("size", list(SIZE_MULTIPLIERS))
    @pytest.mark.parametrize("urgency", URGENCIES)
    def test_zero_interests_is_base_times_multipliers(self, size, urgency):
        expected = (
            Decimal(50000) * SIZE_MULTIPLIERS[size] * URGENCY_MULTIPLIERS[urgency]
        ).quantize(Decimal(1), rounding=ROUND_HALF_UP)
        assert estimate_value(size, urgency, 0) == int(expected)

    def test_large_high_urgency(self):
        # 50000 x 3.0 x 1.3 x 1.9
        assert estimate_value("1000+", "high", 9) == 370500

    def test_interest_multiplier_is_uncapped(self):
        assert estimate_value("51-100", "medium", 20) == 150000

    def test_unknown_size_and_urgency_default_to_one(self):
        assert estimate_value("lots", "whenever", 0) == 50000

    def test_returns_int(self):
        assert isinstance(estimate_value("1-10", "low", 1), int)


# ══════════════════════════════════════════════
#  PRIORITY SCORE
# ══════════════════════════════════════════════

class TestPriorityScore:

    def test_worked_example(self):
        assert priority_score("51-100", "medium", 2) == 89

    def test_capped_at_100(self):
        # 50 + 40 + 45 + 18 = 153
        assert priority_score("1000+", "high", 9) == MAX_PRIORITY_SCORE

    def test_smallest_lowest(self):
        assert priority_score("1-10", "low", 0) == 55

    def test_unknown_labels_add_nothing(self):
        assert priority_score("lots", "whenever", 0) == 50

    @pytest.mark.parametrize("size", list(SIZE_MULTIPLIERS))
    @pytest.mark.parametrize("interests", [0, 1, 5, 9, 50])
    def test_always_within_bounds(self, size, interests):
        for urgency in URGENCIES:
            assert 0 <= priority_score(size, urgency, interests) <= 100


# ══════════════════════════════════════════════
#  MONOTONICITY
# ══════════════════════════════════════════════

class TestMonotonicity:

    @pytest.mark.parametrize("size", list(SIZE_MULTIPLIERS))
    @pytest.mark.parametrize("interests", [0, 3, 9])
    def test_urgency_never_decreases_scores(self, size, interests):
        values = [estimate_value(size, u, interests) for u in URGENCIES]
        scores = [priority_score(size, u, interests) for u in URGENCIES]
        assert values == sorted(values)
        assert scores == sorted(scores)

    def test_size_never_decreases_scores(self):
        sizes = list(SIZE_MULTIPLIERS)
        values = [estimate_value(s, "medium", 1) for s in sizes]
        scores = [priority_score(s, "medium", 1) for s in sizes]
        assert values == sorted(values)
        assert scores == sorted(scores)


# ══════════════════════════════════════════════
#  FORM HELPERS
# ══════════════════════════════════════════════

class TestScoreForm:

    def test_score_form_counts_interests(self):
        form = {
            "company_size": "51-100 employees",
            "urgency": "medium",
            "specific_interests": ["Content Automation", "Personalization"],
        }
        assert score_form(form) == {"estimated_value": 60000, "priority_score": 89}

    def test_score_form_without_interests(self):
        form = {"company_size": "1000+ employees", "urgency": "high"}
        assert score_form(form) == {"estimated_value": 195000, "priority_score": 100}

    def test_size_key_strips_suffix(self):
        assert size_key("1000+ employees") == "1000+"
        assert size_key(" 11-50 ") == "11-50"
        assert size_key(None) == ""
