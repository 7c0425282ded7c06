"""
Text layout for help screens.

wrap() is the line breaker used by every help fragment; the label helpers and
divider()/entry() align option and command lists into two columns:

    ··-v, --verbose··········print more details
    ··    --level[=LEVEL]····set the log level
    ··-o FILE················write output to FILE

Labels include the leading indentation and a trailing gap of the same width.
The divider is the widest label, clamped to config.max_divider; labels wider
than the divider either float their description on the same line or push it
to the next line at the divider column.
"""
import re

_BREAK = re.compile(r"[ \n]")


def wrap(text, first_line_indent, indent, end, /, *, enabled=True):
    """
    break `text` into lines that end at column `end` at the latest.

    behavior
    - the first line starts at column `first_line_indent`, which the caller has
      already filled; continuation lines are prefixed with `indent` spaces.
    - lines break at the last space within the budget; embedded newlines are
      hard breaks; leading spaces of continuation lines are dropped.
    - a single word longer than the budget is emitted whole, on a line of its own.
    - empty or missing text renders as a single "\\n"; the result always ends
      with exactly one newline coming from the text's last line.
    - enabled=False returns the text unwrapped (plus the final newline).
    """
    if not text:
        return "\n"
    if not enabled:
        return text if text.endswith("\n") else text + "\n"

    chunks = []
    width = max(end - first_line_indent, 0)

    while True:
        newline = text.find("\n", 0, width + 1)
        if newline >= 0:
            chunks.append(text[:newline + 1])
            text = text[newline + 1:].lstrip(" ")
        elif len(text) <= width:
            chunks.append(text + "\n")
            return "".join(chunks)
        else:
            n = text.rfind(" ", 1, width + 1)
            if n < 0:
                match = _BREAK.search(text, 1)
                n = match.start() if match else len(text)
            chunks.append(text[:n] + "\n")
            text = text[n:].lstrip(" ")
            if text.startswith("\n"):
                text = text[1:]

        if not text:
            return "".join(chunks)
        chunks.append(" " * indent)
        width = max(end - indent, 0)


def option_label(option, config, /):
    """
    printed label of an option: "  -s, --long ARG  ".

    - short-only options keep the long column empty only when
      config.long_column is set ("  -s  " vs "  -s ARG  ").
    - long-only options are shifted into the long column ("      --long  ")
      when config.long_column is set.
    - optional arguments render as "--long[=ARG]" or, short-only, "-s[ARG]".
    """
    label = " " * config.indent

    if option.short:
        label += option.short
        if option.long:
            label += ", "
    elif config.long_column:
        label += "    "

    if option.long:
        label += option.long

    if option.metavar:
        if option.optional:
            label += "[=" + option.metavar[1:] if option.long else option.metavar
        else:
            label += " " + option.metavar

    return label + " " * config.indent


def command_label(command, config, /):
    """printed label of a subcommand: "  name OPERANDS  "."""
    label = " " * config.indent + command.name
    if command.operands:
        label += " " + command.operands
    return label + " " * config.indent


def divider(labels, config, /):
    """column at which descriptions start: widest label, at most config.max_divider."""
    return min(max(map(len, labels), default=0), config.max_divider)


def entry(label, descr, divider, config, /):
    """
    one help list entry: label, padding up to the divider, description.

    entries without description end right after the label.
    """
    line = label.ljust(divider)

    if not descr:
        return line.rstrip() + "\n"

    def block(start):
        return wrap(descr, start, divider, config.line_width, enabled=config.word_wrap)

    if len(line) > divider:
        if config.floating:
            return line + block(len(line))
        return line + "\n" + " " * divider + block(divider)
    return line + block(divider)


__all__ = (
    "wrap",
    "option_label",
    "command_label",
    "divider",
    "entry",
)
