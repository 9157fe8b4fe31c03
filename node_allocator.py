from __future__ import annotations

import random
from typing import Optional

from models import ListElement


class NodeAllocator:
    """
    要素（ListElement）と Queue ハンドルの確保・解放を一か所に集める

    fail_probability（%）、fail_next()、fail_next_copy() で確保失敗を再現できる。
    失敗時はカウンタを一切変更しない（部分的な確保を残さない）。
    """

    def __init__(self, fail_probability: int = 0, seed: Optional[int] = None) -> None:
        self.fail_probability = fail_probability
        self._rng = random.Random(seed)
        self._forced_failures = 0
        self._forced_copy_failures = 0
        self.allocated = 0
        self.freed = 0
        self.queues = 0

    @property
    def fail_probability(self) -> int:
        return self._fail_probability

    @fail_probability.setter
    def fail_probability(self, percent: int) -> None:
        if percent < 0 or percent > 100:
            raise ValueError("fail_probability must be within 0..100")
        self._fail_probability = percent

    @property
    def live(self) -> int:
        return self.allocated - self.freed

    def fail_next(self, count: int = 1) -> None:
        """次の count 回の確保を必ず失敗させる"""
        self._forced_failures += count

    def fail_next_copy(self, count: int = 1) -> None:
        """次の count 回、要素は確保できても文字列のコピーで失敗させる"""
        self._forced_copy_failures += count

    def _should_fail(self) -> bool:
        if self._forced_failures > 0:
            self._forced_failures -= 1
            return True
        if self._fail_probability == 0:
            return False
        return self._rng.random() * 100 < self._fail_probability

    def new_node(self, value: str, next: Optional[ListElement] = None) -> Optional[ListElement]:
        # 要素本体
        if self._should_fail():
            return None
        # 文字列のコピー（失敗したら要素も捨てる）
        if self._forced_copy_failures > 0:
            self._forced_copy_failures -= 1
            return None
        if self._should_fail():
            return None
        node = ListElement(value=str(value), next=next)
        self.allocated += 1
        return node

    def free_node(self, node: ListElement) -> None:
        node.next = None
        self.freed += 1

    def allocate_queue(self) -> bool:
        if self._should_fail():
            return False
        self.queues += 1
        return True

    def release_queue(self) -> None:
        self.queues -= 1

    def stats(self) -> dict[str, int]:
        return {
            "allocated": self.allocated,
            "freed": self.freed,
            "live": self.live,
            "queues": self.queues,
            "fail_probability": self._fail_probability,
        }
