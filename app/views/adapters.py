"""展示槽位的写入端（每种展示介质实现一次）"""
from __future__ import annotations

from typing import Dict, List, Protocol, Tuple


class SlotWriter(Protocol):
    def write(self, slot: str, value: str) -> None:
        ...


class SlotBoard:
    """内存中的“页面”：只保存每个槽位的最新内容，未写入的槽位保留旧值。"""

    def __init__(self) -> None:
        self.slots: Dict[str, str] = {}

    def write(self, slot: str, value: str) -> None:
        self.slots[slot] = value

    def get(self, slot: str, default: str = "") -> str:
        return self.slots.get(slot, default)

    def snapshot(self) -> Dict[str, str]:
        return dict(self.slots)


class RecordingSlotWriter(SlotBoard):
    """测试替身：除了当前内容，还按顺序记录每一次写入。"""

    def __init__(self) -> None:
        super().__init__()
        self.writes: List[Tuple[str, str]] = []

    def write(self, slot: str, value: str) -> None:
        self.writes.append((slot, value))
        super().write(slot, value)

    def reset(self) -> None:
        self.writes.clear()
