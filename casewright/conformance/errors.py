"""Conformance-related exceptions."""

from ..errors import CasewrightError


class ProducerContractError(CasewrightError):
    """Raised when generated output is not a usable path -> content mapping."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
