from __future__ import annotations


class LinkedInImportError(Exception):
    """Base class for failures inside one import call."""


class ArchiveError(LinkedInImportError):
    pass


class DocumentError(LinkedInImportError):
    pass


class HandoffError(LinkedInImportError):
    pass


class ProfileFetchError(LinkedInImportError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
