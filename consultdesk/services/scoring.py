"""Lead valuation and priority scoring.

Two independent weighting schemes applied to the same qualification
signals (company size, urgency, number of interest tags):

- estimate_value: multiplicative, produces a currency estimate.
- priority_score: additive, capped at MAX_PRIORITY_SCORE.

Both are pure functions. Unrecognized size/urgency labels fall back to
the neutral weight instead of raising.
"""

from decimal import ROUND_HALF_UP, Decimal

BASE_VALUE = 50000

SIZE_MULTIPLIERS = {
    "1-10": Decimal("0.5"),
    "11-50": Decimal("0.8"),
    "51-100": Decimal("1.0"),
    "101-500": Decimal("1.5"),
    "501-1000": Decimal("2.0"),
    "1000+": Decimal("3.0"),
}

URGENCY_MULTIPLIERS = {
    "low": Decimal("0.8"),
    "medium": Decimal("1.0"),
    "high": Decimal("1.3"),
}

INTEREST_STEP = Decimal("0.1")

BASE_SCORE = 50
MAX_PRIORITY_SCORE = 100

URGENCY_POINTS = {"low": 0, "medium": 20, "high": 40}

SIZE_POINTS = {
    "1-10": 5,
    "11-50": 10,
    "51-100": 15,
    "101-500": 25,
    "501-1000": 35,
    "1000+": 45,
}

INTEREST_POINTS = 2


def size_key(company_size):
    """Map a size label to its bucket key: "51-100 employees" -> "51-100"."""
    label = (company_size or "").strip()
    if label.endswith(" employees"):
        label = label[: -len(" employees")]
    return label


def estimate_value(company_size, urgency, interest_count):
    """Estimated opportunity value in whole currency units.

    round(BASE_VALUE x size x urgency x (1 + 0.1 x interests)), halves
    rounded away from zero.
    """
    size_multiplier = SIZE_MULTIPLIERS.get(size_key(company_size), Decimal("1.0"))
    urgency_multiplier = URGENCY_MULTIPLIERS.get(urgency, Decimal("1.0"))
    interest_multiplier = 1 + INTEREST_STEP * max(int(interest_count), 0)

    value = Decimal(BASE_VALUE) * size_multiplier * urgency_multiplier * interest_multiplier
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def priority_score(company_size, urgency, interest_count):
    """Lead priority in [0, 100]."""
    score = BASE_SCORE
    score += URGENCY_POINTS.get(urgency, 0)
    score += SIZE_POINTS.get(size_key(company_size), 0)
    score += INTEREST_POINTS * max(int(interest_count), 0)
    return min(MAX_PRIORITY_SCORE, score)


def score_form(form):
    """Both derived values for a normalized booking form."""
    interest_count = len(form.get("specific_interests") or [])
    return {
        "estimated_value": estimate_value(
            form.get("company_size"), form.get("urgency"), interest_count
        ),
        "priority_score": priority_score(
            form.get("company_size"), form.get("urgency"), interest_count
        ),
    }
