"""Byte sizes with binary-unit display formatting."""

from __future__ import annotations

from dataclasses import dataclass

SIZE_UNITS: tuple[str, ...] = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")
MAX_BYTES = 1024 ** len(SIZE_UNITS) - 1


class SizeError(ValueError):
    pass


@dataclass(frozen=True, order=True)
class Size:
    in_bytes: int

    @classmethod
    def from_bytes(cls, value: int) -> Size:
        """Validate a raw byte count. Negative values and values beyond the pebibyte range are rejected."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise SizeError(f"size must be an integer, got {type(value).__name__}")
        if value < 0:
            raise SizeError("size cannot be negative")
        if value > MAX_BYTES:
            raise SizeError("size must be within max value of pebi byte")
        return cls(value)

    def human_readable(self) -> str:
        """Format as whole units of the largest fitting binary unit, e.g. ``256KiB``.

        Values beyond the pebibyte range raise ``SizeError``.
        """
        if self.in_bytes > MAX_BYTES:
            raise SizeError("size must be within max value of pebi byte")
        amount = self.in_bytes
        unit_index = 0
        while amount >= 1024 and unit_index < len(SIZE_UNITS) - 1:
            amount //= 1024
            unit_index += 1
        return f"{amount}{SIZE_UNITS[unit_index]}"

    def __str__(self) -> str:
        return self.human_readable()
