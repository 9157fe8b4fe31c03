from __future__ import annotations

import logging
import shlex
from collections import deque
from typing import Callable, Dict, List, Optional, Tuple

import config
from models import Command
from node_allocator import NodeAllocator
from string_queue import (
    StringQueue,
    free_queue,
    insert_head,
    insert_tail,
    new_queue,
    queue_size,
    remove_head,
    reverse,
    sort,
)

logger = logging.getLogger(__name__)

Result = Tuple[bool, str]

HELP_TEXT = (
    "new | free | ih <str> [n] | it <str> [n] | rh [expected] | rhq | "
    "size | reverse | sort | show | option malloc <percent> | option length <n> | help"
)


class QueueConsole:
    """
    文字列 Queue を操作するコマンド処理の中枢

    - 現在の Queue は 1 つだけ（free 後は None）
    - 結果はすべて (ok, message) で返し、例外は外に出さない
    """

    def __init__(
        self,
        bufsize: int = config.BUFSIZE,
        fail_probability: int = config.FAIL_PROBABILITY,
        history_limit: int = config.HISTORY_LIMIT,
        allocator: Optional[NodeAllocator] = None,
    ) -> None:
        self.allocator = allocator if allocator is not None else NodeAllocator(fail_probability)
        self.queue: Optional[StringQueue] = None
        self.bufsize = bufsize
        self.history: deque[str] = deque(maxlen=history_limit)

        self._handlers: Dict[Command, Callable[[List[str]], Result]] = {
            Command.NEW: self._cmd_new,
            Command.FREE: self._cmd_free,
            Command.INSERT_HEAD: lambda args: self._cmd_insert(args, at_head=True),
            Command.INSERT_TAIL: lambda args: self._cmd_insert(args, at_head=False),
            Command.REMOVE_HEAD: lambda args: self._cmd_remove(args, quiet=False),
            Command.REMOVE_HEAD_QUIET: lambda args: self._cmd_remove(args, quiet=True),
            Command.SIZE: self._cmd_size,
            Command.REVERSE: self._cmd_reverse,
            Command.SORT: self._cmd_sort,
            Command.SHOW: self._cmd_show,
            Command.OPTION: self._cmd_option,
            Command.HELP: lambda args: (True, HELP_TEXT),
        }

    # -------------------------
    # 実行
    # -------------------------
    def execute(self, line: str) -> Result:
        try:
            tokens = shlex.split(line or "")
        except ValueError as e:
            return False, f"コマンドを解釈できません: {e}"
        if not tokens:
            return False, "コマンドが空です"

        try:
            cmd = Command(tokens[0])
        except ValueError:
            return False, f"未知のコマンドです: {tokens[0]}"

        self.history.append(line.strip())
        logger.debug("execute %s %s", cmd.value, tokens[1:])

        ok, msg = self._handlers[cmd](tokens[1:])
        if not ok:
            logger.info("command failed: %s -> %s", line.strip(), msg)
        return ok, msg

    def reset(self) -> None:
        free_queue(self.queue)
        self.queue = None
        self.allocator = NodeAllocator(self.allocator.fail_probability)
        self.history.clear()

    # -------------------------
    # 表示用
    # -------------------------
    def snapshot(self) -> dict:
        return {
            "exists": self.queue is not None,
            "size": queue_size(self.queue),
            "values": [] if self.queue is None else self.queue.values(),
            "allocator": self.allocator.stats(),
            "bufsize": self.bufsize,
        }

    def describe(self) -> str:
        if self.queue is None:
            return "q = NULL"
        return "q = [" + " ".join(self.queue.values()) + "]"

    # -------------------------
    # 各コマンド
    # -------------------------
    def _cmd_new(self, args: List[str]) -> Result:
        if self.queue is not None:
            free_queue(self.queue)
            self.queue = None

        q = new_queue(self.allocator)
        if q is None:
            return False, "Queue の確保に失敗しました"
        self.queue = q
        return True, self.describe()

    def _cmd_free(self, args: List[str]) -> Result:
        free_queue(self.queue)
        self.queue = None
        if self.allocator.live != 0:
            logger.warning("%d elements still allocated after free", self.allocator.live)
            return False, f"解放漏れがあります（{self.allocator.live} 要素）"
        return True, self.describe()

    def _cmd_insert(self, args: List[str], at_head: bool) -> Result:
        if not args:
            return False, "挿入する文字列を指定してください"
        count = 1
        if len(args) > 1:
            parsed = _parse_int(args[1])
            if parsed is None or parsed < 1:
                return False, f"回数が不正です: {args[1]}"
            count = parsed

        if self.queue is None:
            return False, "Queue がありません（new してください）"

        op = insert_head if at_head else insert_tail
        for i in range(count):
            if not op(self.queue, args[0]):
                return False, f"挿入に失敗しました（{i}/{count} 件成功）"
        return True, self.describe()

    def _cmd_remove(self, args: List[str], quiet: bool) -> Result:
        if self.queue is None:
            return False, "Queue がありません（new してください）"
        if self.queue.is_empty():
            return False, "Queue が空です"

        ok, value = remove_head(self.queue, None if quiet else self.bufsize)
        if not ok:
            return False, "取り出しに失敗しました"

        if quiet:
            return True, self.describe()

        if args and value != args[0]:
            return False, f"取り出した値が違います: 期待 {args[0]!r}、実際 {value!r}"
        return True, f"Removed {value} from queue / {self.describe()}"

    def _cmd_size(self, args: List[str]) -> Result:
        if self.queue is None:
            return False, "Queue がありません"
        return True, f"size = {queue_size(self.queue)}"

    def _cmd_reverse(self, args: List[str]) -> Result:
        if self.queue is None:
            return False, "Queue がありません"
        reverse(self.queue)
        return True, self.describe()

    def _cmd_sort(self, args: List[str]) -> Result:
        if self.queue is None:
            return False, "Queue がありません"
        sort(self.queue)

        values = self.queue.values()
        for a, b in zip(values, values[1:]):
            if a > b:
                logger.warning("queue not sorted after sort: %r > %r", a, b)
                return False, "ソート結果が昇順になっていません"
        return True, self.describe()

    def _cmd_show(self, args: List[str]) -> Result:
        return True, self.describe()

    def _cmd_option(self, args: List[str]) -> Result:
        if len(args) != 2:
            return False, "使い方: option malloc <percent> | option length <n>"

        name, raw = args
        value = _parse_int(raw)
        if value is None:
            return False, f"数値が不正です: {raw}"

        if name == "malloc":
            if value < 0 or value > 100:
                return False, "malloc は 0..100 で指定してください"
            self.allocator.fail_probability = value
            return True, f"malloc = {value}"
        if name == "length":
            if value < 1:
                return False, "length は 1 以上で指定してください"
            self.bufsize = value
            return True, f"length = {value}"
        return False, f"未知のオプションです: {name}"


def _parse_int(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None
