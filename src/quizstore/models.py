"""Data classes for in-memory quiz state and derived values."""
from dataclasses import dataclass, field


@dataclass
class ContinueChain:
    topic: str
    starting_grade_level: str
    continue_count: int = 0
    previous_questions: list = field(default_factory=list)  # prompt strings


@dataclass
class SampleQuiz:
    topic: str
    grade_level: str
    total_questions: int
    questions: list


@dataclass
class SampleBundle:
    version: str
    samples: list  # of SampleQuiz


@dataclass
class SampleLoadResult:
    version: str
    skipped: bool = False
    loaded: list = field(default_factory=list)  # session ids
    failed: list = field(default_factory=list)  # sample topics


@dataclass
class StorageBreakdown:
    settings: str
    quizzes: str
    total: str
    settings_bytes: int = 0
    quizzes_bytes: int = 0
    total_bytes: int = 0
