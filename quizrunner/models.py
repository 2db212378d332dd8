"""
Core data models for the timed quiz runner.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Problem:
    """Represents a single question/answer pair."""
    question: str
    answer: str

    def validate_answer(self, candidate: str) -> bool:
        """
        Check a candidate answer against the expected answer.

        Both sides are trimmed of surrounding whitespace and lower-cased
        before an exact comparison.
        """
        return candidate.strip().lower() == self.answer.strip().lower()


@dataclass
class Quiz:
    """Ordered problems plus the running score for one session."""
    problems: List[Problem] = field(default_factory=list)
    score_per_correct: int = 5
    score: int = 0

    def increment_score(self, amount: Optional[int] = None) -> int:
        """
        Add points to the running score.

        Args:
            amount: Points to add, defaults to the per-correct value

        Returns:
            The updated score

        Raises:
            ValueError: If amount is negative
        """
        if amount is None:
            amount = self.score_per_correct
        if amount < 0:
            raise ValueError(f"Score increment cannot be negative, got {amount}")
        self.score += amount
        return self.score

    @property
    def total_possible(self) -> int:
        return len(self.problems) * self.score_per_correct

    def score_message(self) -> str:
        return f"You scored {self.score} out of {self.total_possible}!"


@dataclass
class QuizSettings:
    """Configuration settings for a quiz session."""
    time_limit: int = 30
    filename: str = "./problems.csv"
    score_per_correct: int = 5
    skip_malformed_rows: bool = False


@dataclass
class SessionResult:
    """Outcome of a finished or timed-out session."""
    score: int
    total: int
    answered: int
    correct: int
    timed_out: bool
    state: str
