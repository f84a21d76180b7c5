from .words import Word, InvalidWordError, UNKNOWN, WORD_LENGTH, ALPHABET_SIZE
from .feedback import Feedback, Mark, all_feedbacks
from .scoring import score
from .state import KnowledgeState, LetterFacts, apply_feedback
from .constraints import matches, filter_candidates
from .validation import validate_guess
from .ranking import NO_SOLUTION, PENDING, UNBOUNDED, successors, worst_response

__all__ = [
    "Word", "InvalidWordError", "UNKNOWN", "WORD_LENGTH", "ALPHABET_SIZE",
    "Feedback", "Mark", "all_feedbacks", "score",
    "KnowledgeState", "LetterFacts", "apply_feedback",
    "matches", "filter_candidates", "validate_guess",
    "NO_SOLUTION", "PENDING", "UNBOUNDED", "successors", "worst_response",
]
