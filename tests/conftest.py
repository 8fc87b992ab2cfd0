import logging

import pytest

from dispatchr import Dispatcher


@pytest.fixture(autouse=True)
def restore_package_logger():
    root = logging.getLogger("dispatchr")
    saved = (list(root.handlers), root.level, root.propagate)
    yield root
    for h in root.handlers:
        if h not in saved[0]:
            h.close()
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    root.propagate = saved[2]


@pytest.fixture
def dispatcher():
    return Dispatcher()
