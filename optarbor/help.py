"""
Help and usage screens.

A help screen is assembled from the command tree alone:

    <about>                       (skipped on the error stream)
    Usage: app sub [OPTIONS] FILE...

    <description>

    Options:
      -h, --help  print this help and exit

    Commands:
      add FILE    add a file

format_usage()/format_help() build rich Text (styled only when
config.colorful is set; colors come from __main__.__styles__), print_help()
and print_usage() write it out. print_help() terminates the process, so it
can be attached directly as an option callback:

    Option("-h", "--help", callback=print_help, descr="print this help and exit")
"""
import logging
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from . import cursor
from .config import UsageStyle, resolve
from .faults import FaultCode, UnknownCommandError
from .layout import command_label, divider, entry, option_label, wrap
from .utils import Unset

logger = logging.getLogger(__name__)


def _styles(config, /):
    styles = defaultdict(str, {
        "heading": "bold #E6E6F0",  # near-white section headings
        "option-label": "#9CE19C",  # gentle green option names
        "command-label": "#FF4DA6",  # friendly pinky command names
        "about": "italic #C8C8D0",  # soft light gray summary
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if config.colorful else ""

    return styler


def _usage(option, /):
    # "-s ARG", "--long ARG", "-s[ARG]" or "--long[=ARG]"
    usage = option.short or option.long
    if option.metavar:
        if not option.optional:
            usage += " " + option.metavar
        elif option.short:
            usage += option.metavar
        else:
            usage += "[=" + option.metavar[1:]
    return usage


def format_usage(command, config=Unset, /):
    """
    usage line of `command`, wrapped with continuation lines at the label width + 1.

    - the command's literal usage override wins when set.
    - otherwise: command path, then "[OPTIONS]" (short style) or one bracket
      per visible option (verbose style, each exclusive group once as
      "[-a|-b ARG]"), then the operand usage.
    """
    config = resolve(config)
    styler = _styles(config)
    label = config.letter_case.apply("Usage:")

    if command.usage is not None:
        buffer = " " + command.usage
    else:
        buffer = "".join(" " + step.name for step in command.path)

        if options := [option for option in command.options if not option.hidden]:
            if config.usage_style is UsageStyle.SHORT:
                buffer += " [%s]" % config.usage_placeholder
            else:
                printed = set()
                for option in options:
                    if not option.group:
                        buffer += " [%s]" % _usage(option)
                    elif option.group not in printed:
                        printed.add(option.group)
                        members = (member for member in options if member.group == option.group)
                        buffer += " [%s]" % "|".join(map(_usage, members))

        if command.operands:
            buffer += " " + command.operands

    text = Text(label, styler("heading"))
    text.append(wrap(buffer, len(label), len(label) + 1, config.line_width, enabled=config.word_wrap))
    return text


def format_help(command, config=Unset, /, *, about=True):
    """
    full help screen of `command`.

    sections: about (when `about` is true), usage, description, options
    (hidden ones skipped), subcommands. Headings follow config.letter_case.
    """
    config = resolve(config)
    styler = _styles(config)
    text = Text()

    if about and command.about:
        text.append(wrap(command.about, 0, 0, config.line_width, enabled=config.word_wrap), styler("about"))

    text.append(format_usage(command, config))

    if command.descr:
        text.append("\n")
        text.append(wrap(command.descr, 0, 0, config.line_width, enabled=config.word_wrap))

    if options := [option for option in command.options if not option.hidden]:
        text.append("\n")
        text.append(config.letter_case.apply("Options:"), styler("heading"))
        text.append("\n")
        labels = [option_label(option, config) for option in options]
        column = divider(labels, config)
        for option, label in zip(options, labels):
            line = Text(entry(label, option.descr, column, config))
            line.stylize(styler("option-label"), 0, len(label.rstrip()))
            text.append(line)

    if command.children:
        text.append("\n")
        text.append(config.letter_case.apply("Commands:"), styler("heading"))
        text.append("\n")
        labels = [command_label(child, config) for child in command.children]
        column = divider(labels, config)
        for child, label in zip(command.children, labels):
            line = Text(entry(label, child.about, column, config))
            line.stylize(styler("command-label"), config.indent, config.indent + len(child.name))
            text.append(line)

    return text


def _target(command, config, /):
    # default to the command being parsed and the configuration it runs with
    if command is not Unset:
        return command, resolve(config)
    if (parser := cursor.active()) is None:
        raise RuntimeError("a command is required outside of parse()")
    return parser.command, parser.config if config is Unset else resolve(config)


def _console(stderr, /):
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        highlight=False,
        soft_wrap=True,
        markup=False,
        emoji=False,
    )


def print_usage(command=Unset, /, *, stderr=False, config=Unset):
    """print the usage line of `command` (default: the active command)."""
    command, config = _target(command, config)
    _console(stderr).print(format_usage(command, config), end="")


def print_help(command=Unset, /, *, status=0, stderr=False, config=Unset):
    """
    print the help screen of `command` (default: the active command) and exit.

    the about line is left out on the error stream, where help follows a
    diagnostic. the process terminates with `status`.
    """
    command, config = _target(command, config)
    logger.debug("help of %r requested (status %d)", command.name, status)
    _console(stderr).print(format_help(command, config, about=not stderr), end="")
    sys.exit(status)


def print_help_subcommand(operands, /):
    """
    operand callback of a "help" subcommand.

    operands[1:] name a command chain starting below the root ("app help
    remote add" -> help of "app remote add"); no operand prints the root's
    help. An unknown name is an UnknownCommandError.
    """
    if (parser := cursor.active()) is None:
        raise RuntimeError("print_help_subcommand() can only run inside parse()")

    command = parser.root
    for name in operands[1:]:
        if not command.children:
            break
        if (child := command.find_child(name)) is None:
            parser.trigger(UnknownCommandError(
                'unknown command "%s"' % name,
                title="unknown command",
                code=FaultCode.UNKNOWN_COMMAND,
                hint="available commands: %s" % ", ".join(candidate.name for candidate in command.children),
                token=name,
            ))
        command = child

    print_help(command, config=parser.config)


__all__ = (
    "format_usage",
    "format_help",
    "print_usage",
    "print_help",
    "print_help_subcommand",
)
