"""Scoring module for Nutri-Score classification of recipes."""

from .nutriscore import (
    NutriScoreClassifier,
    NutriScoreTable,
    RemoteNutriScoreClassifier,
    NUTRISCORE_GRADES,
    build_classifier,
)

__all__ = [
    "NutriScoreClassifier",
    "NutriScoreTable",
    "RemoteNutriScoreClassifier",
    "NUTRISCORE_GRADES",
    "build_classifier",
]
