"""Domain exceptions for the pharmacy point-of-sale core.

The recalculation functions never raise; these are used by the caller-side
checks that run on a recalculated document before it is saved.
"""

from typing import Iterable, List


class PharmacyPosError(Exception):
    """Base exception for pharmacy POS errors."""
    pass


class DocumentValidationError(PharmacyPosError, ValueError):
    """Raised when a recalculated document breaks a business rule.

    All problems found in one pass are collected in ``errors`` so the UI can
    show them together.
    """

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors) or "Document is invalid.")
