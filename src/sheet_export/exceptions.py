"""Base exception for sheet-export."""


class SheetExportError(Exception):
    """Base exception for every failure in the export flow."""

    @property
    def kind(self) -> str:
        """Short name of the failure, e.g. ``ConfigReadError``."""
        return type(self).__name__


class OutputWriteError(SheetExportError):
    """Raised when the CSV output file cannot be created or written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot write output file {path}: {reason}")


class DataShapeError(SheetExportError):
    """Raised when a cell value is not text."""

    def __init__(self, row: int, column: int, value: object):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(
            f"Cell at row {row}, column {column} is {type(value).__name__}, expected text"
        )


class EnvFileError(SheetExportError):
    """Raised when a ``.env`` file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read environment file {path}: {reason}")
