"""
Timed Quiz Runner

Loads question/answer pairs from a CSV file and runs a timed quiz on the terminal.
"""

from .models import Problem, Quiz, QuizSettings, SessionResult
from .data_manager import DataManager, QuizLoadError, MalformedRowError
from .config_manager import ConfigManager
from .quiz_engine import QuizTimer
from .session_runner import SessionRunner, SessionState

__version__ = "1.0.0"
__all__ = [
    # Core data structures
    "Problem",
    "Quiz",
    "QuizSettings",
    "SessionResult",
    # Loading and configuration
    "DataManager",
    "QuizLoadError",
    "MalformedRowError",
    "ConfigManager",
    # Session
    "QuizTimer",
    "SessionRunner",
    "SessionState",
]
