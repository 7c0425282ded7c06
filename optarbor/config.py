"""
Parser and help-screen configuration.

Config gathers every knob of the engine in one immutable record. The defaults
reproduce the classic layout: two-space indentation, descriptions aligned at
most at column 32, 80-column word wrapping, "Usage:"/"Options:"/"Commands:"
headings, and fatal errors that print the active command's help and exit.

Host applications can override defaults without threading a Config through
their code by defining a mapping named __config__ in __main__:

    __config__ = {"line_width": 100, "usage_style": UsageStyle.VERBOSE}

Explicit Config values passed to parse()/print_help() win over __config__.
"""
from enum import Enum, IntEnum
from typing import NamedTuple

from .utils import Unset

# Deepest command tree accepted by parse(), the root included.
MAX_DEPTH = 4
# Valid mutual-exclusivity group ids are 1 .. MAX_GROUPS - 1.
MAX_GROUPS = 8


class UsageStyle(IntEnum):
    SHORT = 0    # "[OPTIONS]" placeholder
    VERBOSE = 1  # every visible option, exclusive groups joined with "|"


class LetterCase(IntEnum):
    CAPITALIZED = 0
    LOWER = 1
    UPPER = 2

    def apply(self, text, /):
        match self:
            case LetterCase.LOWER:
                return text.lower()
            case LetterCase.UPPER:
                return text.upper()
        return text


class GroupScope(Enum):
    """
    lifetime of mutual-exclusivity claims.

    - COMMAND: claims are dropped whenever parsing descends into a subcommand,
      so group ids only conflict among options of the same command.
    - PARSE: claims survive subcommand descent for the whole parse() call.
    """
    COMMAND = "command"
    PARSE = "parse"


class Config(NamedTuple):
    indent: int = 2
    max_divider: int = 32
    floating: bool = True
    line_width: int = 80
    word_wrap: bool = True
    usage_style: UsageStyle = UsageStyle.SHORT
    usage_placeholder: str = "OPTIONS"
    letter_case: LetterCase = LetterCase.CAPITALIZED
    long_column: bool = True
    help_on_error: bool = True
    group_scope: GroupScope = GroupScope.COMMAND
    shell: bool = True
    colorful: bool = False


def resolve(config=Unset, /):
    """
    return the effective Config.

    - an explicit Config is returned as-is.
    - otherwise defaults are combined with __main__.__config__ (if any);
      unknown keys raise TypeError like any bad keyword would.
    """
    if isinstance(config, Config):
        return config
    if config is not Unset:
        raise TypeError("config must be a Config instance")
    overrides = getattr(__import__("__main__"), "__config__", {})
    return Config(**overrides)


__all__ = (
    "MAX_DEPTH",
    "MAX_GROUPS",
    "UsageStyle",
    "LetterCase",
    "GroupScope",
    "Config",
    "resolve",
)
