"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens:
single printable characters, ``CTRL_<X>``, ``ALT_<x>``, the navigation keys
``UP``/``DOWN``/``LEFT``/``RIGHT``, ``ENTER``, ``ESC``, ``BACKSPACE``,
``TAB`` and ``UNKNOWN``. An empty string means no key arrived in time.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> bytes:
    """Collect continuation bytes of a multi-byte UTF-8 character."""
    first = lead[0]
    if first >= 0xF0:
        missing = 3
    elif first >= 0xE0:
        missing = 2
    elif first >= 0xC0:
        missing = 1
    else:
        missing = 0
    out = lead
    for _ in range(missing):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        out += nxt
    return out


def decode_control_byte(ch: bytes) -> str | None:
    """Map single control bytes to tokens, or ``None`` for other bytes."""
    if ch in {b"\r", b"\n"}:
        return "ENTER"
    if ch == b"\t":
        return "TAB"
    if ch in {b"\x08", b"\x7f"}:
        return "BACKSPACE"
    code = ch[0]
    if 1 <= code <= 26:
        return f"CTRL_{chr(code + 0x40)}"
    if code < 0x20:
        return "UNKNOWN"
    return None


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch != b"\x1b":
        control = decode_control_byte(ch)
        if control is not None:
            return control
        return _read_utf8_tail(fd, ch).decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        if seq == b"\x1b":
            _PENDING_BYTES.append(seq)
            return "ESC"
        text = seq.decode("utf-8", errors="replace")
        if text.isprintable():
            return f"ALT_{text}"
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq in _CSI_FINAL_KEYS:
        return _CSI_FINAL_KEYS[seq]
    # Swallow the rest of an unsupported CSI sequence (parameters then a final byte).
    for _ in range(16):
        if 0x40 <= seq[0] <= 0x7E:
            break
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            break
    return "UNKNOWN"


def key_label(key: str) -> str:
    """Human-readable key name for the debug panel."""
    if key == " ":
        return "<Space>"
    if key.startswith("CTRL_"):
        return f"<Ctrl+{key[5:].lower()}>"
    if key.startswith("ALT_") and len(key) > 4:
        return f"<Alt+{key[4:]}>"
    if len(key) == 1:
        return key
    return f"<{key.capitalize()}>"
