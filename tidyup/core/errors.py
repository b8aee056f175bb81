"""
Domain-specific exception hierarchy for TidyUp.

All predictable, user-facing failures should raise subclasses of TidyUpError.
The CLI layer catches TidyUpError and prints friendly messages instead of raw
stack traces.

Per-file I/O problems during a move or an undo are NOT raised: they are
reported in-band on MoveResult / UndoFileResult so one bad file never aborts
a batch.
"""

class TidyUpError(Exception):
    """Base class for all known, user-facing errors in TidyUp.

    Any exception that should result in a friendly CLI message (rather than
    a full stack trace) should inherit from this.
    """

# ---------------------------------------------------------------------------
# Path / filesystem related errors
# ---------------------------------------------------------------------------

class PathError(TidyUpError):
    """Base class for errors related to input paths and filesystem layout."""


class PathNotFoundError(PathError):
    """Raised when the provided folder does not exist.

    Example: user runs `tidyup organize /not/a/real/path`, or a move batch is
    started against a base folder that has since been removed.
    """


class PathNotDirectoryError(PathError):
    """Raised when the provided path exists but is not a directory."""


class NoFilesFoundError(PathError):
    """Raised when a folder was listed successfully but holds no files.

    Scanning an empty folder is a user-visible error, not a silent no-op.
    """


class ScanError(PathError):
    """Raised when the folder could not be enumerated at all.

    The scanner itself never raises this; it returns a ScanResult carrying the
    error. The service turns a failed ScanResult into ScanError so callers can
    tell "empty" apart from "unreadable".
    """


# ---------------------------------------------------------------------------
# Configuration / settings errors
# ---------------------------------------------------------------------------

class ConfigError(TidyUpError):
    """Base class for configuration problems."""


class MissingApiKeyError(ConfigError):
    """Raised when classification is requested without a configured API key.

    Neither the settings file nor OPENAI_API_KEY provides a key.
    """


class InvalidApiKeyError(ConfigError):
    """Raised when a key passed to `set-key` is obviously not an OpenAI key."""


class SettingsError(ConfigError):
    """Raised when the settings document cannot be written.

    Example: the application directory is read-only.
    """


# ---------------------------------------------------------------------------
# LLM / classification related errors
# ---------------------------------------------------------------------------

class LlmError(TidyUpError):
    """Base class for errors that occur while calling or using the LLM API."""


class LlmUnavailableError(LlmError):
    """Raised when the LLM service cannot be reached or the call fails.

    Examples:
    - Network timeout or connection error.
    - Provider returns an authentication or server error.
    """


class LlmResponseParseError(LlmError):
    """Raised when the LLM response cannot be parsed into the expected JSON array.

    Nothing is salvaged from a malformed response: the whole analysis fails.
    """


# ---------------------------------------------------------------------------
# Execution errors
# ---------------------------------------------------------------------------

class ExecutionError(TidyUpError):
    """Base class for batch-level errors while applying moves."""


class NothingSelectedError(ExecutionError):
    """Raised when the accepted subset of suggestions is empty."""
