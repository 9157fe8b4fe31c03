import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from node_allocator import NodeAllocator
from string_queue import StringQueue


@pytest.fixture
def allocator():
    return NodeAllocator(seed=0)


@pytest.fixture
def queue(allocator):
    return StringQueue(allocator)
