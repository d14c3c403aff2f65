import os
from typing import Union

PathLike = Union[str, os.PathLike]


class CargoNextError(Exception):
    """Base class for every error the core reports to the CLI."""


class ManifestIOError(CargoNextError):
    """The manifest could not be read or written."""

    def __init__(self, path: PathLike, cause: OSError) -> None:
        self.path = os.fspath(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"an io error occurred: {self.path}: {reason}")


class ManifestParseError(CargoNextError):
    """The manifest is not syntactically valid TOML."""

    def __init__(self, path: PathLike, detail: str) -> None:
        self.path = os.fspath(path)
        self.detail = detail
        super().__init__(f"a toml parser error occurred: {detail}")


class InvalidFieldType(CargoNextError):
    """A field is missing or does not hold the expected TOML type."""

    def __init__(self, field: str, ty: str) -> None:
        self.field = field
        self.ty = ty
        super().__init__(f"the field {field!r} is not of type {ty!r}")


class VersionParseError(CargoNextError):
    """A string is not a valid semantic version."""

    def __init__(self, text: object, detail: str = "") -> None:
        self.text = text
        message = f"an error occurred during version parsing: {text!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class ValueEncodingError(CargoNextError):
    """A value cannot be stored as UTF-8 text."""

    def __init__(self, text: object, detail: str = "") -> None:
        self.text = text
        message = f"the value {text!r} is not valid utf-8"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
