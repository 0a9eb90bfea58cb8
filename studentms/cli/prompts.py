"""
Console prompt helpers.

Every prompt understands the same control words:
    back: "0", "b", "B"
    exit: "x", "X", "q", "Q"
"""

from enum import Enum
from typing import Callable, Optional, Tuple

BACK_WORDS = {"0", "b", "B"}
EXIT_WORDS = {"x", "X", "q", "Q"}


class MenuSignal(Enum):
    OK = "OK"
    BACK = "BACK"
    EXIT = "EXIT"


def read_line(label: str) -> str:
    return input(label).strip()


def _control(value: str) -> Optional[MenuSignal]:
    if value in BACK_WORDS:
        return MenuSignal.BACK
    if value in EXIT_WORDS:
        return MenuSignal.EXIT
    return None


def prompt_until_valid(
    label: str,
    validator: Callable[[str], bool],
    error_msg: str,
) -> Tuple[MenuSignal, Optional[str]]:
    """
    Asks for a value until it passes ``validator`` or the user backs out.

    Returns:
        (MenuSignal.OK, value) on valid input, otherwise (BACK or EXIT, None)
    """
    while True:
        value = read_line(f"{label} (0=Back, x=Exit): ")
        signal = _control(value)
        if signal is not None:
            return signal, None
        if validator(value):
            return MenuSignal.OK, value
        print(f"  -> {error_msg}")


def prompt_number(label: str, lo: float, hi: float) -> Tuple[MenuSignal, Optional[float]]:
    # "0" means back here as everywhere else, so a mark of zero is typed as 0.0
    while True:
        value = read_line(f"{label} [{lo:g}-{hi:g}] (0=Back, x=Exit): ")
        signal = _control(value)
        if signal is not None:
            return signal, None
        try:
            number = float(value)
        except ValueError:
            print("  -> Please enter a number.")
            continue
        if not lo <= number <= hi:
            print(f"  -> Must be between {lo:g} and {hi:g}.")
            continue
        return MenuSignal.OK, number


def prompt_edit(
    label: str,
    current: str,
    validator: Callable[[str], bool],
    error_msg: str,
) -> Tuple[MenuSignal, Optional[str]]:
    """Like ``prompt_until_valid`` but an empty answer keeps ``current``."""
    while True:
        value = read_line(f"{label} [{current}] (Enter=keep, 0=Back, x=Exit): ")
        if not value:
            return MenuSignal.OK, current
        signal = _control(value)
        if signal is not None:
            return signal, None
        if validator(value):
            return MenuSignal.OK, value
        print(f"  -> {error_msg}")


def confirm(message: str) -> MenuSignal:
    """Yes/no question; an empty answer or "n" counts as backing out."""
    while True:
        value = read_line(f"{message} [y/N] (0=Back, x=Exit): ")
        if value in ("", "n", "N"):
            return MenuSignal.BACK
        signal = _control(value)
        if signal is not None:
            return signal
        if value in ("y", "Y"):
            return MenuSignal.OK
        print("  -> Please enter y or n.")
