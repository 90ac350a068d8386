"""Custom Exceptions for the BeatScript application."""

class BeatScriptError(Exception):
    """Base class for exceptions in this module."""
    pass

class ConfigurationError(BeatScriptError):
    """Exception raised for errors in configuration loading."""
    pass

class ScriptSourceError(BeatScriptError):
    """Exception raised when a call script cannot be read from disk."""
    pass

class FormattingError(BeatScriptError):
    """Exception raised for errors while rendering or writing a parsed script."""
    pass

class FileSystemError(BeatScriptError):
    """Exception raised for file system related errors (permissions, not found etc)."""
    pass
