"""
Model modules initialization.
"""
from app.models.pronunciation_coach import Assessment, PronunciationCoach

__all__ = ['Assessment', 'PronunciationCoach']
