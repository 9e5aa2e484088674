"""Exception hierarchy for hapticscope."""


class HapticscopeError(Exception):
    """Base class for every recoverable hapticscope failure."""


class PatternParseError(HapticscopeError):
    """The pattern document is not valid JSON or has the wrong shape."""


class UnsupportedFileTypeError(HapticscopeError):
    """An upload was rejected before decoding because of its extension."""


class AudioDecodeError(HapticscopeError):
    """The audio decoder could not turn the uploaded bytes into samples."""


class ConfigError(HapticscopeError):
    """Invalid configuration values."""
