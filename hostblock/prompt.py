"""Continue-or-abort confirmation for failed sources."""

import sys
from typing import Callable, Optional, TextIO

from .config import PromptPolicy

Confirm = Callable[[str], bool]


def make_confirm(
    policy: PromptPolicy,
    input_func: Callable[[str], str] = input,
    output: Optional[TextIO] = None,
) -> Confirm:
    """
    Build a confirmation callback for a prompt policy.

    Args:
        policy: ``yes`` always confirms, ``no`` always declines, ``ask``
            asks on the terminal
        input_func: Function used to read the answer
        output: Stream for the question (default: stderr)

    Returns:
        A ``confirm(message) -> bool`` callable
    """
    if policy is PromptPolicy.YES:
        return lambda message: True
    if policy is PromptPolicy.NO:
        return lambda message: False

    def confirm(message: str) -> bool:
        stream = output or sys.stderr
        stream.write(f"{message} [y/N] ")
        stream.flush()
        try:
            answer = input_func("")
        except EOFError:
            return False
        return answer.strip().lower() in ("y", "yes")

    return confirm
