"""Exception hierarchy for vectorcam."""


class VectorCamError(Exception):
    """Base exception for all vectorcam errors."""

    pass


class PathError(VectorCamError):
    """Errors raised while reading path data."""

    pass


class TokenizeError(PathError):
    """Unrecognized character in path data.

    Created for logging only; the interpreter skips the character and
    carries on.
    """

    def __init__(self, data: str, position: int, character: str) -> None:
        self.data = data
        self.position = position
        self.character = character
        super().__init__(
            f"Unexpected character {character!r} at offset {position} in path data"
        )


class NumericParseError(PathError):
    """A token could not be converted to a number."""

    def __init__(self, token: str, position: int) -> None:
        self.token = token
        self.position = position
        super().__init__(f"Invalid number {token!r} at offset {position}")


class GeometryError(VectorCamError):
    """Errors in geometric calculations."""

    pass


class GeometricDegeneracyError(GeometryError):
    """Degenerate geometric input resolved by a fallback."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Degenerate input to {operation}: {reason}")


class DocumentError(VectorCamError):
    """Errors related to loading or saving drawings."""

    pass


class DocumentParseError(DocumentError):
    """Error reading a drawing document."""

    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Failed to parse '{file_name}': {reason}")


class DocumentWriteError(DocumentError):
    """Error writing a drawing document."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write '{path}': {reason}")


class UnsupportedFormatError(DocumentError):
    """No parser could read the document."""

    def __init__(self, file_name: str, attempts: list[str]) -> None:
        self.file_name = file_name
        self.attempts = attempts
        tried = ", ".join(attempts) if attempts else "none"
        super().__init__(f"Conversion unsuccessful for '{file_name}' (tried: {tried})")
