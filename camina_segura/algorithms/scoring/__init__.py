from .point_scorer import PointSafetyScorer, ScoringContext

__all__ = [
    'PointSafetyScorer',
    'ScoringContext'
]
