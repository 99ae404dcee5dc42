from pathlib import Path


class AnswerMemoryError(Exception):
    """Base class for errors raised by the question-answer memory."""


class AnswerStoreMissingError(AnswerMemoryError):
    """Raised when a backing file that must pre-exist is absent."""

    def __init__(self, path: Path):
        self.path = path
        self.message = (
            f"{path} file not found. Please ensure it exists and is in the correct location."
        )
        super().__init__(self.message)


class AnswerStoreCorruptError(AnswerMemoryError):
    """Raised when a backing file is not a flat JSON object of strings."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.message = f"Answer store {path} is unreadable: {reason}"
        super().__init__(self.message)


class AnswerStorePersistenceError(AnswerMemoryError):
    """Raised when a captured answer could not be written to disk."""

    def __init__(self, path: Path, question: str | None = None):
        self.path = path
        self.question = question
        self.message = f"Failed to write answer store {path}"
        if question is not None:
            self.message += f" after storing answer for: {question!r}"
        super().__init__(self.message)


class OperatorTimeoutError(AnswerMemoryError):
    """Raised when the operator did not answer an unknown question in time."""

    def __init__(self, question: str, category: str, timeout: float):
        self.question = question
        self.category = category
        self.timeout = timeout
        self.message = (
            f"No {category} answer provided for {question!r} within {timeout:g}s"
        )
        super().__init__(self.message)
