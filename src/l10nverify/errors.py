class TranslationFileError(OSError):
    """A translation file could not be opened, read or loaded."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class ResolutionError(Exception):
    """The symbol resolver backend failed while answering a query."""
