import os
import sys


def pytest_configure():
    # Ensure `src/` is importable as top-level for `common.*` imports,
    # and `tests/` for the shared fakes module
    root = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    for path in (os.path.join(root, "src"), os.path.join(root, "tests")):
        if path not in sys.path:
            sys.path.insert(0, path)
