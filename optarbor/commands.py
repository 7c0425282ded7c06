"""
optarbor command descriptors.

Overview
- Command: one node of a command tree. It owns its options and child
  commands, and optionally an operand callback run once parsing of that
  command finishes.
- command(): decorator (or direct call) turning a function into a Command
  whose callback is that function.

Tree shape
- children are attached at construction: constructing a Command sets the
  parent back-reference of each child exactly once. A command that already
  has a parent cannot be attached again, so a tree is always a tree.
- names of children and option names must be unique within one command.
- trees are read-only after construction; the parser never mutates them.

Help metadata
- about: one-line summary shown above the usage line and in the parent's
  command list.
- descr: long description shown below the usage line.
- operands: operand usage ("FILE...") appended to usage lines and labels.
- usage: literal override for the generated usage line.

Quick example:
    >>> from optarbor import Command, Option, command
    >>> @command(about="remove files", operands="FILE...")
    ... def rm(operands): ...
    >>> app = Command("app", children=[rm], options=[Option("-q", "--quiet")])
"""
import inspect
import os
import re
import sys
from collections.abc import Iterable

from .arguments import Option
from .internals import DescriptorType
from .utils import Unset, coalesce, rename


def _sanitize_strings(cls, metadata, /):
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name or re.search(r"\s", name):
        raise ValueError(f"{cls.__typename__} 'name' must be a non-empty word")

    for field in ("about", "descr", "operands", "usage"):
        if not isinstance(value := metadata[field], str | Unset):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
        elif isinstance(value, str) and not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        metadata[field] = coalesce(value)

    if not callable(callback := metadata["callback"]) and callback is not Unset:
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")
    metadata["callback"] = coalesce(callback)


def _sanitize_options(cls, metadata, /):
    if not isinstance(metadata["options"], Iterable):
        raise TypeError(f"{cls.__typename__} 'options' must be iterable")

    options = []
    names = set()
    for option in metadata["options"]:
        if not isinstance(option, Option):
            raise TypeError(f"{cls.__typename__} 'options' must contain options only")
        for name in option.names:
            if name in names:
                raise ValueError(f"{cls.__typename__} option name {name!r} is already in use")
            names.add(name)
        options.append(option)
    metadata["options"] = options


def _sanitize_children(cls, metadata, /):
    if not isinstance(metadata["children"], Iterable):
        raise TypeError(f"{cls.__typename__} 'children' must be iterable")

    children = []
    names = set()
    for child in metadata["children"]:
        if not isinstance(child, Command):
            raise TypeError(f"{cls.__typename__} 'children' must contain commands only")
        if child.parent is not None:
            raise ValueError(f"{cls.__typename__} {child.name!r} is already attached to {child.parent.name!r}")
        if child.name in names:
            raise ValueError(f"{cls.__typename__} subcommand name {child.name!r} is already in use")
        names.add(child.name)
        children.append(child)
    metadata["children"] = children


class Command(metaclass=DescriptorType):
    """
    Node of a command tree.

    Properties
    - name, about, descr, operands, usage, callback, options, children,
      parent: read-only views of the construction arguments (options and
      children are exposed as tuples).
    - root: topmost ancestor (self for a root command).
    - path: commands from the root down to self.
    - height: number of levels below self (0 for a leaf).

    Lookup
    - find_short(char) / find_long(name): option by short character or long
      name (both without dashes), None when absent.
    - find_child(name): child command by exact name, None when absent.
    """

    __introspectable__ = (
        "name",
        "about",
        "descr",
        "operands",
        "usage",
        "callback",
        "options",
        "children",
        "parent",
    )
    __displayable__ = (
        "name",
        "about",
        "operands",
        "options",
        "children",
    )

    def __new__(
            cls,
            name,
            /,
            *,
            about=Unset,
            descr=Unset,
            operands=Unset,
            usage=Unset,
            callback=Unset,
            options=(),
            children=()
    ):
        metadata = {
            "name": name,
            "about": about,
            "descr": descr,
            "operands": operands,
            "usage": usage,
            "callback": callback,
            "options": options,
            "children": children,
        }
        _sanitize_strings(cls, metadata)
        _sanitize_options(cls, metadata)
        _sanitize_children(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._parent = None

        for child in self._children:
            child._parent = self
        return self

    @property
    def root(self):
        command = self
        while command._parent is not None:
            command = command._parent
        return command

    @property
    def path(self):
        path = []
        command = self
        while command is not None:
            path.append(command)
            command = command._parent
        return tuple(reversed(path))

    @property
    def height(self):
        return max((child.height + 1 for child in self._children), default=0)

    def find_short(self, char, /):
        for option in self._options:
            if option.short is not None and option.short[1:] == char:
                return option
        return None

    def find_long(self, name, /):
        for option in self._options:
            if option.long is not None and option.long[2:] == name:
                return option
        return None

    def find_child(self, name, /):
        for child in self._children:
            if child.name == name:
                return child
        return None


def command(source=Unset, /, **metadata):
    """
    Create a Command from a callback function, or return a decorator doing so.

    Invocation modes
    - command(function, **metadata) -> Command
    - @command / @command(**metadata) applied to a function

    The command name defaults to the function name (or the script name for
    lambdas) and the description to the function docstring.
    """
    @rename("command")
    def wrapper(source, /):
        if not callable(source):
            raise TypeError("@command() must be applied to a callable")
        options = {"descr": inspect.getdoc(source) or Unset} | metadata
        name = getattr(source, "__name__", "<lambda>")
        if name == "<lambda>":
            name = os.path.basename(sys.argv[0])
        return Command(options.pop("name", name), callback=source, **options)

    if source is Unset:
        return wrapper
    return wrapper(source)


__all__ = (
    "Command",
    "command",
)
