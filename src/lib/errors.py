"""
Exception types raised by mdplayscript

Malformed play-script input never raises: it degrades to plain paragraphs,
literal parentheses and passthrough comments. The exceptions below signal
broken programming contracts or unusable metadata files.
"""


class EngineInvariantError(RuntimeError):
    """Raised when an internal engine invariant is violated (an engine bug)"""
    pass


class ParamsError(Exception):
    """Raised when a document metadata file cannot be used"""
    pass
