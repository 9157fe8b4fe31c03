from __future__ import annotations

from typing import List, Optional, Tuple

from models import ListElement
from node_allocator import NodeAllocator


class StringQueue:
    """
    単方向リンクで実装した文字列 Queue
    insert_head / insert_tail / remove_head / size: O(1)
    reverse: O(n)、sort: O(n log n)（安定マージソート）

    ※ reverse / sort は要素の確保・解放をせず、リンクの付け替えだけで行う
    """

    def __init__(self, allocator: Optional[NodeAllocator] = None) -> None:
        self._allocator = allocator if allocator is not None else NodeAllocator()
        self._head: Optional[ListElement] = None
        self._tail: Optional[ListElement] = None
        self._size: int = 0
        # new_queue で確保したハンドルを持っているか
        self._holds_handle = False
        self._freed = False

    @property
    def allocator(self) -> NodeAllocator:
        return self._allocator

    @property
    def is_freed(self) -> bool:
        return self._freed

    def free(self) -> None:
        """
        全要素とハンドルを解放する
        2 回目以降は何もしない。解放後の操作はすべて失敗扱い
        """
        if self._freed:
            return
        node = self._head
        while node is not None:
            nxt = node.next
            self._allocator.free_node(node)
            node = nxt
        self._head = None
        self._tail = None
        self._size = 0

        if self._holds_handle:
            self._allocator.release_queue()
            self._holds_handle = False
        self._freed = True

    def insert_head(self, s: Optional[str]) -> bool:
        if self._freed or not isinstance(s, str):
            return False

        node = self._allocator.new_node(s, self._head)
        if node is None:
            return False

        if self._size == 0:
            self._tail = node
        self._head = node
        self._size += 1
        return True

    def insert_tail(self, s: Optional[str]) -> bool:
        if self._freed or not isinstance(s, str):
            return False

        node = self._allocator.new_node(s, None)
        if node is None:
            return False

        if self._size == 0:
            self._head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        return True

    def remove_head(self, bufsize: Optional[int] = None) -> Tuple[bool, Optional[str]]:
        """
        先頭を取り出す
        bufsize を渡すと最大 bufsize-1 文字までを返す（長い値は黙って切り詰める）
        bufsize=None はバッファなし扱いで、値は捨てて None を返す
        """
        if self._freed or self._head is None:
            return False, None

        node = self._head
        copied: Optional[str] = None
        if bufsize is not None:
            copied = node.value[:max(0, bufsize - 1)]

        if self._tail is node:
            self._tail = None
        self._head = node.next
        self._size -= 1

        self._allocator.free_node(node)
        return True, copied

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def reverse(self) -> None:
        if self._freed or self._size < 2:
            return

        prev: Optional[ListElement] = None
        cur = self._head
        self._tail = cur
        while cur is not None:
            nxt = cur.next
            cur.next = prev
            prev = cur
            cur = nxt
        self._head = prev

    def sort(self) -> None:
        """文字列の昇順に並べ替える（同値は元の順序を保つ）"""
        if self._freed or self._size < 2:
            return

        self._head = _merge_sort(self._head)

        # 末尾を付け直す
        node = self._head
        while node.next is not None:
            node = node.next
        self._tail = node

    def values(self) -> List[str]:
        items: List[str] = []
        node = self._head
        while node is not None:
            items.append(node.value)
            node = node.next
        return items

    def peek(self) -> Optional[str]:
        return None if self._head is None else self._head.value

    def last(self) -> Optional[str]:
        return None if self._tail is None else self._tail.value


def _split(head: ListElement) -> Optional[ListElement]:
    # slow/fast で中央を探し、後半の先頭を切り離して返す
    slow = head
    fast = head.next
    while fast is not None and fast.next is not None:
        slow = slow.next
        fast = fast.next.next
    second = slow.next
    slow.next = None
    return second


def _merge(left: Optional[ListElement], right: Optional[ListElement]) -> Optional[ListElement]:
    head: Optional[ListElement] = None
    tail: Optional[ListElement] = None
    while left is not None and right is not None:
        # 同値なら左側を先に（安定性）
        if left.value <= right.value:
            picked = left
            left = left.next
        else:
            picked = right
            right = right.next
        if tail is None:
            head = picked
        else:
            tail.next = picked
        tail = picked

    rest = left if left is not None else right
    if tail is None:
        return rest
    tail.next = rest
    return head


def _merge_sort(head: Optional[ListElement]) -> Optional[ListElement]:
    if head is None or head.next is None:
        return head
    second = _split(head)
    return _merge(_merge_sort(head), _merge_sort(second))


# -------------------------
# Queue が無い（None）場合も扱う関数群
# -------------------------
def new_queue(allocator: Optional[NodeAllocator] = None) -> Optional[StringQueue]:
    allocator = allocator if allocator is not None else NodeAllocator()
    if not allocator.allocate_queue():
        return None
    q = StringQueue(allocator)
    q._holds_handle = True
    return q


def free_queue(q: Optional[StringQueue]) -> None:
    if q is None:
        return
    q.free()


def insert_head(q: Optional[StringQueue], s: Optional[str]) -> bool:
    if q is None:
        return False
    return q.insert_head(s)


def insert_tail(q: Optional[StringQueue], s: Optional[str]) -> bool:
    if q is None:
        return False
    return q.insert_tail(s)


def remove_head(q: Optional[StringQueue], bufsize: Optional[int] = None) -> Tuple[bool, Optional[str]]:
    if q is None:
        return False, None
    return q.remove_head(bufsize)


def queue_size(q: Optional[StringQueue]) -> int:
    if q is None:
        return 0
    return q.size()


def reverse(q: Optional[StringQueue]) -> None:
    if q is not None:
        q.reverse()


def sort(q: Optional[StringQueue]) -> None:
    if q is not None:
        q.sort()
