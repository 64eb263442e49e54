"""Counterparty whitelist loading."""

from __future__ import annotations

from pathlib import Path


def parse_whitelist(text: str) -> frozenset[str]:
    """One party ID per line. Blank lines and '#' comments are ignored."""
    parties = set()
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            parties.add(line)
    return frozenset(parties)


def load_whitelist(path: str | Path | None) -> frozenset[str]:
    """Read whitelist file. No path configured means nobody is whitelisted."""
    if path is None:
        return frozenset()
    return parse_whitelist(Path(path).read_text(encoding="utf-8"))
