from __future__ import annotations

from typing import Protocol, Sequence

from .model import MoneyPreset


class MoneyPresetRepository(Protocol):
    def list_all(self) -> Sequence[MoneyPreset]:
        raise NotImplementedError

    def save_all(self, presets: Sequence[MoneyPreset], *, changed_by: str = "") -> None:
        raise NotImplementedError
