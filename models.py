from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(eq=False, repr=False)
class ListElement:
    value: str
    next: Optional["ListElement"] = None

    def __repr__(self) -> str:
        return f"ListElement({self.value!r})"


class Command(Enum):
    NEW = "new"
    FREE = "free"
    INSERT_HEAD = "ih"
    INSERT_TAIL = "it"
    REMOVE_HEAD = "rh"
    REMOVE_HEAD_QUIET = "rhq"
    SIZE = "size"
    REVERSE = "reverse"
    SORT = "sort"
    SHOW = "show"
    OPTION = "option"
    HELP = "help"
