"""
Parsing and dispatch engine.

parse() walks argv left to right, starting after argv[0] (always kept):

- "--" turns every later token of the current command into an operand.
- "--name" / "--name=value" is a long option; a required argument that is
  not attached is taken from the next token.
- "-abc" is a cluster of short options. The rest of the cluster after an
  option is its tentative attached argument ("-ofile"); it is dropped and
  scanning continues when the option takes no argument. Once an option
  consumed an argument the rest of the cluster is done.
- any other token (a lone "-" included) is a subcommand name when the
  current command has children (an unknown name is fatal), or an operand.
  A subcommand match keeps the operands collected so far, drops the name and
  restarts the scan in the subcommand with the remaining tokens.

When the scan of the innermost command ends, its callback receives the list
of operands (argv[0] first) with the cursor reset to 0. Every error is fatal
(see optarbor.faults).
"""
import functools
import logging
import shlex
import sys
from collections.abc import Iterable

from . import cursor
from .commands import Command
from .config import MAX_DEPTH, MAX_GROUPS, GroupScope, resolve
from .executor import Claims, execute
from .faults import (
    ExclusiveOptionsError,
    FaultCode,
    MissingArgumentError,
    UnknownCommandError,
    UnknownOptionError,
    UnwantedArgumentError,
    trigger,
)
from .help import print_help
from .utils import Unset

logger = logging.getLogger(__name__)


class Parser:
    """
    state of one running parse.

    - root: command the parse started from.
    - command: command whose options are being scanned (the active command).
    - argv/index: token vector being scanned and the cursor into it. While an
      operand callback runs, argv is the operand list and index starts at 0.
    - claims: mutual-exclusivity table, cleared on every command level when
      config.group_scope is GroupScope.COMMAND.
    """

    def __init__(self, root, argv, config, /):
        self.root = root
        self.command = root
        self.argv = argv
        self.index = 0
        self.config = config
        self.claims = Claims(MAX_GROUPS)

    def shift(self):
        if self.index >= len(self.argv):
            return None
        self.index += 1
        logger.debug("cursor shifted to %d", self.index)
        return self.argv[self.index] if self.index < len(self.argv) else None

    def unshift(self):
        if self.index <= 0:
            return None
        self.index -= 1
        logger.debug("cursor unshifted to %d", self.index)
        return self.argv[self.index]

    def trigger(self, fault, /, **options):
        """
        surface `fault` in the context of the active command.

        the active command's help is appended on stderr when
        config.help_on_error is set.
        """
        if self.config.help_on_error:
            options.setdefault("helper", functools.partial(
                print_help,
                self.command,
                status=1,
                stderr=True,
                config=self.config,
            ))
        trigger(
            fault,
            tool=self.command,
            shell=self.config.shell,
            colorful=self.config.colorful,
            **options
        )

    def run(self):
        return self._parse(self.root, self.argv)

    def _parse(self, command, argv, /):
        self.command = command
        self.argv = argv
        self.index = 1
        if self.config.group_scope is GroupScope.COMMAND:
            self.claims.clear()

        operands = argv[:1]
        terminated = False

        while self.index < len(self.argv):
            token = self.argv[self.index]

            if not terminated and token.startswith("-") and token != "-":
                if token == "--":
                    logger.debug("%r: options terminated at %d", command.name, self.index)
                    terminated = True
                elif token.startswith("--"):
                    self._long(token)
                else:
                    self._short(token)
            elif command.children:
                if (child := command.find_child(token)) is None:
                    self.trigger(UnknownCommandError(
                        'unknown command "%s"' % token,
                        title="unknown command",
                        code=FaultCode.UNKNOWN_COMMAND,
                        hint="available commands: %s" % ", ".join(candidate.name for candidate in command.children),
                        token=token,
                    ))
                logger.debug("%r: descending into %r", command.name, child.name)
                return self._parse(child, operands + self.argv[self.index + 1:])
            else:
                operands.append(token)

            if self.index < len(self.argv):
                self.index += 1

        logger.debug("%r: operands %r", command.name, operands)
        if command.callback is not None:
            self.argv = operands
            self.index = 0
            command.callback(operands)
        return operands

    def _claim(self, option, /):
        if (holder := self.claims.claim(option)) is not None:
            self.trigger(ExclusiveOptionsError(
                "options %s and %s are mutually exclusive" % (", ".join(holder.names), ", ".join(option.names)),
                title="mutually exclusive options",
                code=FaultCode.EXCLUSIVE_OPTIONS,
                hint="use only one of them",
                option=option,
                holder=holder,
            ))

    def _long(self, token, /):
        name, equals, argument = token[2:].partition("=")
        if not equals:
            argument = None

        if (option := self.command.find_long(name)) is None:
            self.trigger(UnknownOptionError(
                'unknown option "--%s"' % name,
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint="try '%s --help' to see all available options" % " ".join(step.name for step in self.command.path),
                token=token,
            ))
        logger.debug("long option --%s (argument %r)", name, argument)
        self._claim(option)

        if argument is not None:
            if option.metavar is None:
                self.trigger(UnwantedArgumentError(
                    'unwanted option-argument "%s"' % argument,
                    title="unwanted argument",
                    code=FaultCode.UNWANTED_ARGUMENT,
                    hint="--%s takes no argument" % name,
                    option=option,
                    argument=argument,
                ))
        elif option.required and (argument := self.shift()) is None:
            self.trigger(MissingArgumentError(
                'option "--%s" requires an argument' % name,
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                hint="use --%s=%s or --%s %s" % (name, option.metavar, name, option.metavar),
                option=option,
            ))

        execute(option, argument, self)

    def _short(self, token, /):
        for position in range(1, len(token)):
            char = token[position]

            if (option := self.command.find_short(char)) is None:
                if len(token) > 2:
                    message = 'unknown option "-%s" (in sequence "%s")' % (char, token)
                else:
                    message = 'unknown option "%s"' % token
                self.trigger(UnknownOptionError(
                    message,
                    title="unknown option",
                    code=FaultCode.UNKNOWN_OPTION,
                    hint="try '%s --help' to see all available options" % " ".join(step.name for step in self.command.path),
                    token=token,
                ))
            self._claim(option)

            argument = token[position + 1:] or None
            if argument is not None:
                if option.metavar is None:
                    argument = None
            elif option.required and (argument := self.shift()) is None:
                self.trigger(MissingArgumentError(
                    'option "-%s" requires an argument' % char,
                    title="missing argument",
                    code=FaultCode.MISSING_ARGUMENT,
                    hint="use -%s%s or -%s %s" % (char, option.metavar, char, option.metavar),
                    option=option,
                ))
            logger.debug("short option -%s (argument %r)", char, argument)

            execute(option, argument, self)
            if argument is not None:
                return


def _vector(command, argv, /):
    if argv is Unset:
        return sys.argv
    if isinstance(argv, str):
        return [command.name, *shlex.split(argv)]
    if isinstance(argv, list):
        vector = argv
    elif isinstance(argv, Iterable):
        vector = list(argv)
    else:
        raise TypeError("parse() argument must be a string or an iterable of strings")
    if not all(isinstance(token, str) for token in vector):
        raise TypeError("parse() argument must be a string or an iterable of strings")
    return vector


def parse(command, argv=Unset, /, *, config=Unset):
    """
    parse `argv` against the command tree rooted at `command`.

    parameters
    - argv:
      • Unset: sys.argv (rewritten in place).
      • list[str]: rewritten in place.
      • Iterable[str]: copied.
      • str: shell-like string, split with shlex; the command name becomes argv[0].
    - config: Config; defaults merge __main__.__config__ (see optarbor.config).

    returns
    - the surviving operands of the innermost command reached, argv[0] first,
      in their original order (the argv list itself when one was passed).

    raises
    - RuntimeError when another parse is already running.
    - CommandException subclasses when config.shell is disabled; in shell
      mode errors terminate the process instead.
    """
    if not isinstance(command, Command):
        raise TypeError("parse() first argument must be a command")
    assert command.height < MAX_DEPTH, "command tree is deeper than %d levels" % MAX_DEPTH

    config = resolve(config)
    vector = _vector(command, argv)
    if not vector:
        raise ValueError("parse() argument must contain at least the program name")

    parser = Parser(command, list(vector), config)
    with cursor.activate(parser):
        operands = parser.run()

    if vector is argv or vector is sys.argv:
        vector[:] = operands
        return vector
    return operands


__all__ = (
    "Parser",
    "parse",
)
