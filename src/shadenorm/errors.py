"""Custom exception hierarchy for shadenorm."""


class ShadenormError(Exception):
    """Base exception for all shadenorm errors."""


class ParseError(ShadenormError):
    """Raised when the top-level shader file cannot be read."""


class DiagnosticError(ShadenormError):
    """Raised when a recorded diagnostic is escalated to an error by policy."""
