# core/errors.py


class HostError(Exception):
    """Base for errors the host API raises into script code."""


class ArgumentError(HostError):
    """A host API function was called with the wrong arity or argument types."""


class HostIOError(HostError):
    """An include or file write could not be completed."""


class ScriptExit(BaseException):
    """
    Raised by exit() to unwind the running script.

    Derives from BaseException, like SystemExit, so an `except Exception`
    in script code does not swallow it.
    """

    def __init__(self, code: int = 0):
        super().__init__(code)
        self.code = code
