"""Local persistence and quiz-flow state for the quiz app."""
__version__ = "0.1.0"
