"""Nutri-Score classification of recipe nutrient vectors.

The aggregator treats classification as a black box: it builds a
NutriScoreInput and hands it to whatever NutriScoreClassifier was injected.
Two implementations ship here:

- NutriScoreTable: the points tables of the Nutri-Score for general foods
- RemoteNutriScoreClassifier: delegates to an HTTP scoring service and
  falls back to an unset grade on any failure
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

import requests

from recipe_nutrition.data_layer.models import NutriScoreInput
from recipe_nutrition.data_layer.settings import EngineSettings

logger = logging.getLogger(__name__)

NUTRISCORE_GRADES: Tuple[str, ...] = ("A", "B", "C", "D", "E")


# ============================================================================
# POINTS TABLES (general foods)
# ============================================================================
#
# A value strictly greater than the n-th threshold earns n points.
# Units follow NutriScoreInput: energy in kJ, sodium in mg, the rest in g
# (fruit_percentage in %).
# ============================================================================

ENERGY_THRESHOLDS_KJ = (335, 670, 1005, 1340, 1675, 2010, 2345, 2680, 3015, 3350)
SUGAR_THRESHOLDS_G = (4.5, 9, 13.5, 18, 22.5, 27, 31, 36, 40, 45)
SATURATED_FAT_THRESHOLDS_G = (1, 2, 3, 4, 5, 6, 7, 8, 9, 10)
SODIUM_THRESHOLDS_MG = (90, 180, 270, 360, 450, 540, 630, 720, 810, 900)

FIBER_THRESHOLDS_G = (0.9, 1.9, 2.8, 3.7, 4.7)
PROTEIN_THRESHOLDS_G = (1.6, 3.2, 4.8, 6.4, 8.0)
# Fruit/vegetable points jump from 2 to 5 above 80%
FRUIT_POINTS = ((80, 5), (60, 2), (40, 1))

# Protein is only credited below this many negative points (unless fruit maxes out)
PROTEIN_CAP_NEGATIVE_POINTS = 11

# Upper score bound per grade, checked in order
GRADE_UPPER_BOUNDS = ((-1, "A"), (2, "B"), (10, "C"), (18, "D"))


def _points(value: float, thresholds: Sequence[float]) -> int:
    return sum(1 for threshold in thresholds if value > threshold)


def _fruit_points(percentage: float) -> int:
    for threshold, points in FRUIT_POINTS:
        if percentage > threshold:
            return points
    return 0


class NutriScoreClassifier(ABC):
    """Abstraction for turning a nutrient vector into a Nutri-Score grade."""

    @abstractmethod
    def classify(self, vector: NutriScoreInput) -> Optional[str]:
        """Return a grade from NUTRISCORE_GRADES, or None if unavailable.

        Args:
            vector: Recipe nutrient vector

        Returns:
            Grade label ("A".."E") or None
        """
        ...


class NutriScoreTable(NutriScoreClassifier):
    """Table-driven Nutri-Score for general foods.

    Usage:
        grade = NutriScoreTable().classify(vector)
    """

    def score(self, vector: NutriScoreInput) -> int:
        """Compute the raw Nutri-Score (negative points minus positive points)."""
        negative = (
            _points(vector.energy, ENERGY_THRESHOLDS_KJ)
            + _points(vector.sugar, SUGAR_THRESHOLDS_G)
            + _points(vector.saturated_fats, SATURATED_FAT_THRESHOLDS_G)
            + _points(vector.sodium, SODIUM_THRESHOLDS_MG)
        )
        fruit = _fruit_points(vector.fruit_percentage)
        fiber = _points(vector.fibers, FIBER_THRESHOLDS_G)
        protein = _points(vector.proteins, PROTEIN_THRESHOLDS_G)

        if negative >= PROTEIN_CAP_NEGATIVE_POINTS and fruit < 5:
            return negative - (fruit + fiber)
        return negative - (fruit + fiber + protein)

    def classify(self, vector: NutriScoreInput) -> Optional[str]:
        total = self.score(vector)
        for upper_bound, grade in GRADE_UPPER_BOUNDS:
            if total <= upper_bound:
                return grade
        return "E"


class RemoteNutriScoreClassifier(NutriScoreClassifier):
    """Classifier backed by an HTTP scoring service.

    POSTs the vector as JSON and expects {"grade": "<A-E>"} back. Timeouts,
    connection errors, non-200 answers and unexpected payloads all yield
    None so the recipe is simply left unscored.

    Usage:
        classifier = RemoteNutriScoreClassifier("http://scoring.local/nutriscore")
        grade = classifier.classify(vector)
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 5.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize remote classifier.

        Args:
            url: Scoring endpoint URL
            timeout_seconds: Request timeout
            session: Optional requests session (defaults to module-level requests)

        Raises:
            ValueError: If url is empty
        """
        if not url or not url.strip():
            raise ValueError("Scoring service URL is required")
        self.url = url.strip()
        self.timeout_seconds = timeout_seconds
        self._http = session if session is not None else requests

    def classify(self, vector: NutriScoreInput) -> Optional[str]:
        try:
            response = self._http.post(self.url, json=vector.as_dict(), timeout=self.timeout_seconds)
        except requests.exceptions.Timeout:
            logger.warning("Nutri-Score service timed out after %ss", self.timeout_seconds)
            return None
        except requests.exceptions.RequestException as exc:
            logger.warning("Nutri-Score service request failed: %s", exc)
            return None

        if response.status_code != 200:
            logger.warning("Nutri-Score service returned status %s", response.status_code)
            return None

        try:
            grade = response.json().get("grade")
        except (ValueError, AttributeError):
            logger.warning("Nutri-Score service returned a malformed body")
            return None

        if grade not in NUTRISCORE_GRADES:
            logger.warning("Nutri-Score service returned unknown grade %r", grade)
            return None
        return grade


def build_classifier(settings: EngineSettings) -> NutriScoreClassifier:
    """Build the classifier selected by settings."""
    if settings.classifier_mode == "remote":
        return RemoteNutriScoreClassifier(
            url=settings.classifier_url,
            timeout_seconds=settings.classifier_timeout_seconds,
        )
    return NutriScoreTable()
