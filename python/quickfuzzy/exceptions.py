"""Exception hierarchy for quickfuzzy."""


class QuickFuzzyError(Exception):
    """Base exception for all quickfuzzy errors."""


class ValidationError(QuickFuzzyError, ValueError):
    """Raised when input validation fails (invalid options, out of range values)."""


class FingerprintError(QuickFuzzyError, ValueError):
    """Raised for malformed fingerprints (wrong length, bad hex encoding)."""


__all__ = ["QuickFuzzyError", "ValidationError", "FingerprintError"]
