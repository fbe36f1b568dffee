from __future__ import annotations


class MiplibError(Exception):
    """Base class for errors raised while gathering instance data."""


class InvalidIdentifierError(MiplibError):
    def __init__(self, name: str):
        super().__init__(f"Invalid instance name: {name!r}")
        self.name = name


class TransportError(MiplibError):
    """A request failed at the network level or returned a non-2xx status."""


class MalformedPageError(MiplibError):
    """The instance page lacks an element the extractor relies on."""


class CatalogError(MiplibError):
    def __init__(self, name: str, cause: BaseException):
        super().__init__(f'Failed to get information from instance "{name}".\nError: {cause}')
        self.name = name
        self.cause = cause
