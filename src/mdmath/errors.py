"""Exception classes for mdmath.

A rule that does not match is never an error: it declines by returning
None and the host moves on. Exceptions are reserved for broken engine
output and misuse of the extension bundle. Failures raised by the
typesetting engine itself propagate unchanged.
"""

from __future__ import annotations


class MdMathError(Exception):
    """Base exception for all mdmath errors.

    Subclass this for specific error categories.
    """

    pass


class RenderError(MdMathError):
    """Error while turning engine output into markup.

    Raised when the typesetting engine returns markup without a root
    element to restyle.
    """

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize render error.

        Args:
            message: Error description
            source: Math source text being rendered (optional)
        """
        self.message = message
        self.source = source

        suffix = f" (source: {source!r})" if source is not None else ""
        super().__init__(f"{message}{suffix}")


class PluginError(MdMathError):
    """Error looking up rules in an extension bundle.

    Raised for unknown rule names or registration levels.
    """

    def __init__(self, rule_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            rule_name: Name of the rule or level that was requested
            message: Description of the error
        """
        self.rule_name = rule_name
        super().__init__(f"Rule '{rule_name}': {message}")
