"""
SSR Bridge: Errors

Everything the bridge raises is one of three kinds:

  RenderError      the component tree itself failed (user code threw)
  ExecutionFault   the script engine failed in any other way
  FormattingError  the render succeeded but the page or JSON could not be built

Callers use the kind to pick an HTTP status and decide whether the message
is safe to show.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for rendering bridge failures."""
    pass


class ExecutionFault(BridgeError):
    """The script context failed for a reason other than a render error."""
    pass


class BridgeStartupError(ExecutionFault):
    """The script context could not be started or its exports are malformed."""
    pass


class ScriptError(ExecutionFault):
    """An exception thrown inside the script environment."""

    def __init__(self, message: str, stack: str = "", render_error: bool = False):
        super().__init__(message)
        self.message = message
        self.stack = stack
        self.render_error = render_error


class RenderError(BridgeError):
    """A failure raised by component code during a render."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class FormattingError(BridgeError):
    """The page template or JSON encoder failed after a successful render."""
    pass
