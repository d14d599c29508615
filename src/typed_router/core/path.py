"""Path value passed into a router.

A typed wrapper around ``str``. Nothing is normalized: ``"home"``,
``"/home"`` and ``"home/"`` are three different paths.
"""

from dataclasses import dataclass

SEPARATOR = "/"


@dataclass(frozen=True)
class Path:
    """A concrete ``/``-separated path to be matched or produced.

    Attributes:
        path: The wrapped string, kept exactly as given.
    """

    path: str

    def __post_init__(self) -> None:
        if not isinstance(self.path, str):
            raise TypeError(f"Path must wrap a str, got {type(self.path).__name__}")

    @classmethod
    def of(cls, value: "Path | str") -> "Path":
        """Return *value* as a Path, wrapping plain strings."""
        if isinstance(value, Path):
            return value
        return cls(value)

    @property
    def segments(self) -> list[str]:
        """The path split on the separator, empty segments included."""
        return self.path.split(SEPARATOR)

    def __str__(self) -> str:
        return self.path
