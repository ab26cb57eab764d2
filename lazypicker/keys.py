"""Low-level terminal input decoding.

Reads raw bytes from a tty and translates them into normalized key tokens:
printable characters, named keys (``ENTER``, ``UP``, ``PAGE_DOWN``...) and
``CTRL_<letter>`` combos. Escape sequences are timed so a lone Esc still
arrives as ``ESC``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25

_SINGLE_BYTE_KEYS: dict[bytes, str] = {
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x00": "CTRL_SPACE",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "BACKTAB",
}

_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"7": "HOME",
    b"3": "DELETE",
    b"4": "END",
    b"8": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


class KeyReader:
    """Decode key tokens from ``fd``, keeping bytes read ahead of a lone Esc."""

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        return ch or None

    def _read_utf8_tail(self, lead: bytes) -> str:
        first = lead[0]
        if first >= 0xF0:
            needed = 3
        elif first >= 0xE0:
            needed = 2
        elif first >= 0xC0:
            needed = 1
        else:
            needed = 0
        data = lead
        for _ in range(needed):
            nxt = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                break
            data += nxt
        return data.decode("utf-8", errors="replace")

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Return the next key token, or ``""`` on timeout or end of input."""
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return ""

        named = _SINGLE_BYTE_KEYS.get(ch)
        if named is not None:
            return named
        if ch == b"\x1b":
            return self._read_escape_sequence()
        code = ch[0]
        if 1 <= code <= 26:
            return f"CTRL_{chr(code + 64)}"
        if code < 32:
            return "ESC"
        return self._read_utf8_tail(ch)

    def _read_escape_sequence(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq not in {b"[", b"O"}:
            if seq.isalpha() or seq.isdigit():
                return f"ALT_{seq.decode('ascii').upper()}"
            self._pending.append(seq)
            return "ESC"
        final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        named = _CSI_FINAL_KEYS.get(final)
        if named is not None:
            return named
        if final.isdigit():
            params = final
            while True:
                part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
                if part is None:
                    return "ESC"
                if part == b"~":
                    break
                params += part
                if len(params) > 8:
                    return "ESC"
            return _CSI_TILDE_KEYS.get(params.split(b";")[0], "ESC")
        return "ESC"
