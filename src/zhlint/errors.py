"""Exception classes for zhlint.

Provides standardized exceptions for error handling throughout zhlint.
"""

from __future__ import annotations


class ZhlintError(Exception):
    """Base exception for all zhlint errors.

    Subclass this for specific error categories.
    """

    pass


class MaskingError(ZhlintError):
    """A masking pass changed the length of the text it masked.

    Every offset computed after masking indexes into the original text, so a
    pass that shifts offsets corrupts all later stages. This is a defect in
    the pass, not a property of the input, and is never recovered from.
    """

    def __init__(self, pass_name: str, expected: int, actual: int) -> None:
        """Initialize masking error.

        Args:
            pass_name: Name of the offending masking pass
            expected: Length of the text handed to the pass
            actual: Length of the text the pass returned
        """
        self.pass_name = pass_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Masking pass '{pass_name}' changed text length "
            f"from {expected} to {actual}"
        )


class ConfigError(ZhlintError):
    """A rejected configuration entry.

    Configuration errors are reported, not raised: normalization collects
    them and continues with the remaining valid entries.
    """

    def __init__(self, key: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            key: The offending configuration entry (rule name, pass name,
                case-ignore pattern)
            message: Description of the problem
        """
        self.key = key
        self.message = message
        super().__init__(f"{key!r}: {message}")
