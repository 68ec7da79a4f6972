"""
Custom exceptions for the magnetic anomaly engine.

Input validation failures surface as pydantic ValidationError at model
construction; these exceptions cover semantic failures of the algorithms.
"""


class AnomalyDetectionError(Exception):
    """Base exception for anomaly detection failures."""
    pass


class EmptyInputError(AnomalyDetectionError):
    """
    Raised when a computation needs at least one value and got none.

    "No data collected" is not the same state as "calm ambient field", so
    callers must handle this instead of receiving a zero.
    """
    pass
