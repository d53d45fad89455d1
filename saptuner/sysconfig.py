"""
Sysconfig text editor.

SysconfigEditor — in-memory parse/query/edit of sysconfig-style files.
Verdict         — the decision a scan visitor returns for each matching line.

Handles plain keys (KEY="value") and arrays, where an array element is a key
with a numeric suffix (KEY_0="a", KEY_1="b"). Every other line (comments,
blanks, anything malformed) is kept verbatim and never matched by a query.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Optional, Pattern, Union


# ── Line grammar ──────────────────────────────────────────────────────────────
# Array form is tried first: FOO_12="x" is element 12 of FOO, never a scalar.

_ARRAY_LINE = re.compile(r'^([A-Za-z0-9_]+)_([0-9]+)="?([^"]*)"?$')
_SCALAR_LINE = re.compile(r'^([A-Za-z0-9_]+)="?([^"]*)"?$')

_SCALAR_NAME = re.compile(r"[A-Za-z0-9_]+")
_ARRAY_NAME = re.compile(r"[A-Za-z0-9_]+_[0-9]+")

_ANY_KEY = re.compile(r".*")


def _parse(line: str) -> Optional[tuple[str, Optional[int], str]]:
    """Return (key, index-or-None, value) for a key line, None for an inert line."""
    stripped = line.strip()
    m = _ARRAY_LINE.match(stripped)
    if m:
        return m.group(1), int(m.group(2)), m.group(3)
    m = _SCALAR_LINE.match(stripped)
    if m:
        return m.group(1), None, m.group(2)
    return None


def _format(key: str, index: Optional[int], value: str) -> str:
    if index is None:
        return f'{key}="{value}"'
    return f'{key}_{index}="{value}"'


def _exact(key: str) -> Pattern[str]:
    return re.compile(re.escape(key))


# ── Scan verdicts ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Verdict:
    """
    What scan() should do with the line it just showed the visitor.

    Use the shared instances Verdict.STOP, Verdict.CONTINUE,
    Verdict.DELETE_STOP, Verdict.DELETE_CONTINUE, or Verdict.set(value)
    to rewrite the line's value and stop.
    """

    action: Literal["stop", "continue", "delete_stop", "delete_continue", "set"]
    value: Optional[str] = None

    @classmethod
    def set(cls, value: str) -> "Verdict":
        return cls("set", value)

    @property
    def deletes(self) -> bool:
        return self.action in ("delete_stop", "delete_continue")

    @property
    def stops(self) -> bool:
        return self.action not in ("continue", "delete_continue")


Verdict.STOP = Verdict("stop")
Verdict.CONTINUE = Verdict("continue")
Verdict.DELETE_STOP = Verdict("delete_stop")
Verdict.DELETE_CONTINUE = Verdict("delete_continue")

Visitor = Callable[[str, Optional[int], str], Verdict]


# ── Editor ────────────────────────────────────────────────────────────────────

class SysconfigEditor:
    """
    Edit sysconfig text in memory.

    Nothing here touches the disk except the from_file()/save() helpers;
    callers decide when to load and when to write back.
    """

    def __init__(self, text: str = "") -> None:
        # Only "\n" ends a line; a trailing "\r" or form feed stays part of it
        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()
        self._lines: list[str] = lines

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "SysconfigEditor":
        """Load a file. Undecodable bytes survive a save() unchanged."""
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as fh:
            return cls(fh.read())

    def save(self, path: Union[str, Path]) -> None:
        Path(path).write_text(
            self.to_text(), encoding="utf-8", errors="surrogateescape", newline=""
        )

    # ── Scalar keys ───────────────────────────────────────────────────────────

    def keys(self) -> list[str]:
        """
        Return every distinct key name in order of first appearance.

        An array contributes its bare name once, not once per element.
        """
        seen: dict[str, None] = {}

        def visit(key: str, index: Optional[int], value: str) -> Verdict:
            seen.setdefault(key, None)
            return Verdict.CONTINUE

        self.scan(_ANY_KEY, visit)
        return list(seen)

    def get(self, key: str) -> str:
        """Return the value of a plain key; '' if absent or if key is an array."""
        found = ""

        def visit(_key: str, index: Optional[int], value: str) -> Verdict:
            nonlocal found
            if index is None:
                found = value
                return Verdict.STOP
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        return found

    def set(self, key: str, value: str) -> bool:
        """
        Overwrite the first line holding key, or append a new one.

        Returns True if an existing key was overwritten, False if it was created.
        Raises ValueError for a name that would not read back as a plain key
        (FOO_1 is an array element, "A B" is no key at all).
        """
        if not _SCALAR_NAME.fullmatch(key) or _ARRAY_NAME.fullmatch(key):
            raise ValueError(f"not a plain sysconfig key name: {key!r}")
        found = False

        def visit(_key: str, index: Optional[int], _value: str) -> Verdict:
            nonlocal found
            if index is None:
                found = True
                return Verdict.set(value)
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        if not found:
            self._lines.append(_format(key, None, value))
        return found

    # ── Array keys ────────────────────────────────────────────────────────────

    def array_len(self, key: str) -> int:
        """Highest index present + 1, or 0. Gaps count toward the length."""
        max_idx = -1

        def visit(_key: str, index: Optional[int], _value: str) -> Verdict:
            nonlocal max_idx
            if index is not None and index > max_idx:
                max_idx = index
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        return max_idx + 1

    def array_get(self, key: str, index: int) -> str:
        """Return element index of array key, or '' if it does not exist."""
        found = ""

        def visit(_key: str, idx: Optional[int], value: str) -> Verdict:
            nonlocal found
            if idx is not None and idx == index:
                found = value
                return Verdict.STOP
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        return found

    def array_set(self, key: str, index: int, value: str) -> bool:
        """Update element index in place or append it. True only if it existed."""
        found = False

        def visit(_key: str, idx: Optional[int], _value: str) -> Verdict:
            nonlocal found
            if idx is not None and idx == index:
                found = True
                return Verdict.set(value)
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        if not found:
            self._lines.append(_format(key, index, value))
        return found

    def array_resize(self, key: str, new_len: int) -> None:
        """
        Shrink or grow array key to exactly new_len elements.

        Elements at index >= new_len are removed. Every missing index below
        new_len is appended with an empty value, in ascending order.
        new_len == 0 erases the array.
        """
        if new_len < 0:
            raise ValueError(f"array length must not be negative: {new_len}")

        present: set[int] = set()

        def visit(_key: str, idx: Optional[int], _value: str) -> Verdict:
            if idx is None:
                return Verdict.CONTINUE
            if idx >= new_len:
                return Verdict.DELETE_CONTINUE
            present.add(idx)
            return Verdict.CONTINUE

        self.scan(_exact(key), visit)
        for idx in range(new_len):
            if idx not in present:
                self._lines.append(_format(key, idx, ""))

    # ── Whole document ────────────────────────────────────────────────────────

    def entries(self) -> dict[tuple[Optional[int], str], str]:
        """Map (index-or-None, key) to value for every key line in the document."""
        mapping: dict[tuple[Optional[int], str], str] = {}

        def visit(key: str, index: Optional[int], value: str) -> Verdict:
            mapping[(index, key)] = value
            return Verdict.CONTINUE

        self.scan(_ANY_KEY, visit)
        return mapping

    def to_text(self) -> str:
        """Serialise the document, one line each, newline-terminated."""
        return "".join(f"{line}\n" for line in self._lines)

    def scan(self, key_pattern: Union[str, Pattern[str]], visit: Visitor) -> None:
        """
        Walk the document once, top to bottom, calling visit on key lines.

        Args:
            key_pattern: Regex matched in full against the bare key name
                         (without array index).
            visit:       Called as visit(key, index-or-None, value); returns
                         a Verdict deciding what happens to the line.

        Deletions are applied only once the walk is over, last line first,
        so line numbers stay valid while scanning.
        """
        pattern = re.compile(key_pattern) if isinstance(key_pattern, str) else key_pattern
        doomed: list[int] = []

        for lineno, line in enumerate(self._lines):
            parsed = _parse(line)
            if parsed is None:
                continue
            key, index, value = parsed
            if not pattern.fullmatch(key):
                continue

            verdict = visit(key, index, value)
            if verdict.deletes:
                doomed.append(lineno)
            elif verdict.action == "set":
                eol = "\r" if line.endswith("\r") else ""
                self._lines[lineno] = _format(key, index, verdict.value or "") + eol
            if verdict.stops:
                break

        for lineno in reversed(doomed):
            del self._lines[lineno]
