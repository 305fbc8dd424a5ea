"""
Append-only conversation transcript. No framework dependencies.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from mindmate.domain.entities.transcript_entry import TranscriptEntry


@dataclass
class Transcript:
    _entries: List[TranscriptEntry] = field(default_factory=list)

    def append(self, entry: TranscriptEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> Tuple[TranscriptEntry, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[TranscriptEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> TranscriptEntry:
        return self._entries[index]

__all__ = ["Transcript"]
