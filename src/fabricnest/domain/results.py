"""Result and error types for nesting runs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .layout import LayoutResult


class NestingErrorKind(str, Enum):
    """Categories of nesting failures.

    The first four are detected before packing starts; the last two are
    infeasibility errors raised while placing pieces.
    """

    INVALID_FABRIC_WIDTH = "invalid_fabric_width"
    INVALID_MARGINS = "invalid_margins"
    NO_PIECES = "no_pieces"
    MARGINS_EXCEED_WIDTH = "margins_exceed_width"
    PIECE_TOO_WIDE = "piece_too_wide"
    PIECE_UNPLACEABLE = "piece_unplaceable"

    @property
    def is_input_error(self) -> bool:
        """True for errors detected before any placement is attempted."""
        return self not in (
            NestingErrorKind.PIECE_TOO_WIDE,
            NestingErrorKind.PIECE_UNPLACEABLE,
        )


@dataclass(frozen=True)
class NestingError:
    """A single human-readable failure of a nesting run.

    Attributes:
        kind: Failure category.
        message: Status text suitable for display.
        piece_id: Unit id of the offending piece, for infeasibility errors.
    """

    kind: NestingErrorKind
    message: str
    piece_id: str | None = None

    def __str__(self) -> str:
        return self.message


class NestingFailure(Exception):
    """Raised inside the engine to abort a run.

    Never escapes ``NestingEngine.run``; it is converted to a failed
    NestingResult there.
    """

    def __init__(self, error: NestingError) -> None:
        self.error = error
        super().__init__(error.message)


@dataclass(frozen=True)
class NestingResult:
    """Tagged outcome of a nesting run: either a layout or an error.

    Attributes:
        layout: The complete layout when the run succeeded.
        error: The failure when the run aborted.
    """

    layout: LayoutResult | None = None
    error: NestingError | None = None

    def __post_init__(self) -> None:
        if (self.layout is None) == (self.error is None):
            raise ValueError("NestingResult needs exactly one of layout or error")

    @property
    def is_ok(self) -> bool:
        """Check if the run produced a layout."""
        return self.error is None

    @classmethod
    def ok(cls, layout: LayoutResult) -> NestingResult:
        """Create a successful result."""
        return cls(layout=layout)

    @classmethod
    def fail(cls, error: NestingError) -> NestingResult:
        """Create a failed result."""
        return cls(error=error)

    def unwrap(self) -> LayoutResult:
        """Return the layout or raise NestingFailure with the error.

        Raises:
            NestingFailure: If the run failed.
        """
        if self.error is not None:
            raise NestingFailure(self.error)
        assert self.layout is not None
        return self.layout
