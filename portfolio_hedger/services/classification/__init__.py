"""
Classification Module
=====================

Usage:
    from portfolio_hedger.services.classification import PositionClassifier

    classifier = PositionClassifier(config)
    classification = classifier.classify(position)
"""

from .position_classifier import (
    PositionClassifier,
    NAME_KEYWORD_RULES,
    match_name_keywords,
)

__all__ = [
    "PositionClassifier",
    "NAME_KEYWORD_RULES",
    "match_name_keywords",
]
