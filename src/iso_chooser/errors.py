"""
Exception hierarchy for iso-chooser-menu.
"""


class ISOChooserError(Exception):
    """Base exception for iso-chooser-menu errors."""

    pass


class UsageError(ISOChooserError):
    """Raised when the program is invoked with bad arguments."""

    pass


class FeedError(ISOChooserError):
    """Base class for errors reading a SimpleStreams feed."""

    pass


class ParseError(FeedError):
    """Raised when a feed document cannot be read or decoded."""

    pass


class NoMatchError(FeedError):
    """Raised when a feed has no image for the requested architecture."""

    def __init__(self, architecture: str, source: str = "feed"):
        self.architecture = architecture
        self.source = source
        super().__init__(f"no ISO for architecture '{architecture}' in {source}")


class IncompleteRecordError(FeedError):
    """Raised when a matching feed entry lacks a required field."""

    def __init__(self, field_name: str, where: str = "image record"):
        self.field_name = field_name
        self.where = where
        super().__init__(f"{where} is missing required field '{field_name}'")


class ChoiceSetError(ISOChooserError):
    """Raised when a choice set would be empty."""

    pass


class TerminalInitError(ISOChooserError):
    """Raised when the terminal cannot provide the required capabilities."""

    pass


class WriteError(ISOChooserError):
    """Raised when the output file cannot be written."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to open output file [{path}]: {reason}")
