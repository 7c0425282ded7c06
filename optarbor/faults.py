"""
optarbor faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing parse
  error. Codes are grouped by domain to keep copy consistent and make logs and
  searches predictable.
- CommandException: base type that carries message + options and knows how to
  render itself in a short, lowercased and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/colorful).

Policy
- every fault is fatal to the whole invocation. In shell mode (default) the
  fault is printed to stderr, optionally followed by the active command's help,
  and the process exits with status 1. With shell disabled the fault is raised
  to the caller instead; nothing is ever silently swallowed.

Integration
- the parser builds a fault with code/title/hint and calls trigger(fault, **ctx).
- hosts may remap codes (__codes__), restyle output (__styles__) and rename the
  program (__prog__) from their __main__ module.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True, highlight=False, soft_wrap=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - routing (1110x)
      • UNKNOWN_COMMAND
    - options (1111x)
      • UNKNOWN_OPTION, MISSING_ARGUMENT, UNWANTED_ARGUMENT, EXCLUSIVE_OPTIONS
    - arguments (1112x)
      • INVALID_ARGUMENT, ARGUMENT_OUT_OF_RANGE

    normalize() lets the host remap codes to its own labels.
    """
    # --- routing errors ---
    UNKNOWN_COMMAND       = 11101

    # --- option errors ---
    UNKNOWN_OPTION        = 11111
    MISSING_ARGUMENT      = 11112
    UNWANTED_ARGUMENT     = 11113
    EXCLUSIVE_OPTIONS     = 11114

    # --- argument conversion errors ---
    INVALID_ARGUMENT      = 11121
    ARGUMENT_OUT_OF_RANGE = 11122

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), style)

        try:
            name = self.options["tool"].root.name
        except KeyError:
            name = "optarbor"
        prog = text(getattr(main, "__prog__", name), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message or "", styler("error-message"))

        if not self.options.get("hint"):
            return Group(header, message)

        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))
        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", True):
            raise self from None
        console.print(self)
        if helper := self.options.get("helper"):
            helper()
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownOptionError(CommandException): ...
class MissingArgumentError(CommandException): ...
class UnwantedArgumentError(CommandException): ...
class InvalidArgumentError(CommandException): ...
class ArgumentRangeError(CommandException): ...
class ExclusiveOptionsError(CommandException): ...
class UnknownCommandError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode the fault is rendered to stderr and the process exits;
      otherwise the fault is raised.

    typical options
    - tool, shell, colorful, title, code, hint, helper, and any other context
      the reporter may want to keep (e.g., option/argument/token).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "UnknownOptionError",
    "MissingArgumentError",
    "UnwantedArgumentError",
    "InvalidArgumentError",
    "ArgumentRangeError",
    "ExclusiveOptionsError",
    "UnknownCommandError",
    "FaultCode",
    "trigger",
)
