import sys
from typing import Callable


OutputFunc = Callable[[str], None]


def output_to_stdout(buffer: str) -> None:
    """Default output callback: writes the rendered text to stdout."""
    sys.stdout.write(buffer + "\n")
    sys.stdout.flush()


def assert_with_message(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)
