r"""
optarbor option descriptors.

Overview
- Option: declarative description of one dash-prefixed switch: its names,
  its argument (none, required or optional), the scalar kind the argument is
  converted to, and where the result goes (slots, flag mutation, callback).
- Slot: caller-owned mutable cell the executor writes results into.
- Action: what happens to an option's flag slot whenever the option is seen.
- Calling: how an option's callback is invoked.
- option(): decorator building an Option around a callback function.

Names
- short: "-x", exactly one character after the dash (the dash itself is not
  a valid short name).
- long: "--name", no "=" and no whitespace.
- an option has at least one name and at most one of each kind.

Argument specification (metavar)
- absent: the option takes no argument.
- "[LEVEL]": the argument is optional and only accepted attached
  ("--level=3", "-l3").
- anything else: the argument is required (attached or as the next token).

Validation highlights
- a non-STR type, a delimiter or a dest requires a metavar.
- a count slot requires a delimiter (it receives the number of list items).
- group ids live in 0 .. MAX_GROUPS - 1; 0 means "not exclusive".

Quick example:
    >>> from optarbor import Option, Slot, DataType
    >>> jobs = Slot(1)
    >>> Option("-j", "--jobs", metavar="N", type=DataType.UINT, dest=jobs,
    ...        descr="run N jobs in parallel")
"""
import inspect
import re
from enum import Enum

from .config import MAX_GROUPS
from .conversions import DataType
from .internals import DescriptorType
from .utils import Unset, coalesce


class Action(Enum):
    SET_TRUE = "set-true"
    SET_FALSE = "set-false"
    INCREMENT = "increment"
    DECREMENT = "decrement"


class Calling(Enum):
    """
    callback calling conventions.

    - VOID: callback()
    - RAW: callback(argument) with the raw string (None when an optional
      argument is absent).
    - CONVERTED: callback(value) with the converted value (a list when the
      option declares a delimiter).
    - AUTO: picked by resolve_calling() from the option's metavar and type.
    """
    AUTO = "auto"
    VOID = "void"
    RAW = "raw"
    CONVERTED = "converted"


class Slot:
    """
    caller-owned mutable cell.

    the engine only ever assigns `value`; reading it back after parse() is up
    to the caller.
    """
    __slots__ = ("value",)

    def __init__(self, value=None, /):
        self.value = value

    def __repr__(self):
        return f"slot({self.value!r})"

    def __rich_repr__(self):
        yield self.value


def _sanitize_names(cls, metadata, /):
    short = long = None

    if not metadata["names"]:
        raise TypeError(f"{cls.__typename__} must specify at least one name")

    for name in metadata["names"]:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} names must be strings")
        elif re.fullmatch(r"-[^-\s]", name):
            if short is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one short name")
            short = name
        elif re.fullmatch(r"--[^=\s]+", name):
            if long is not None:
                raise ValueError(f"{cls.__typename__} cannot have more than one long name")
            long = name
        else:
            raise ValueError(f"{cls.__typename__} name {name!r} is neither '-x' nor '--name' shaped")

    del metadata["names"]
    metadata["short"] = short
    metadata["long"] = long


def _sanitize_argument(cls, metadata, /):
    if not isinstance(metavar := metadata["metavar"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    elif isinstance(metavar, str) and not (metavar := metavar.strip()):
        raise ValueError(f"{cls.__typename__} 'metavar' cannot be empty")
    metadata["metavar"] = coalesce(metavar)

    if not isinstance(metadata["type"], DataType):
        raise TypeError(f"{cls.__typename__} 'type' must be a data-type")
    if metadata["type"] is not DataType.STR and metavar is Unset:
        raise TypeError(f"{cls.__typename__} with a {metadata["type"].name} type requires a 'metavar'")

    if not isinstance(delimiter := metadata["delimiter"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'delimiter' must be a string")
    elif isinstance(delimiter, str):
        if not delimiter:
            raise ValueError(f"{cls.__typename__} 'delimiter' cannot be empty")
        if metavar is Unset:
            raise TypeError(f"{cls.__typename__} with a 'delimiter' requires a 'metavar'")
    metadata["delimiter"] = coalesce(delimiter)


def _sanitize_targets(cls, metadata, /):
    for name in ("dest", "count", "flag"):
        if not isinstance(metadata[name], Slot | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a slot")
        metadata[name] = coalesce(metadata[name])

    if metadata["dest"] is not None and metadata["metavar"] is None:
        raise TypeError(f"{cls.__typename__} with a 'dest' requires a 'metavar'")
    if metadata["count"] is not None and metadata["delimiter"] is None:
        raise TypeError(f"{cls.__typename__} with a 'count' requires a 'delimiter'")

    if not isinstance(metadata["action"], Action):
        raise TypeError(f"{cls.__typename__} 'action' must be an action")

    if not callable(callback := metadata["callback"]) and callback is not Unset:
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")
    metadata["callback"] = coalesce(callback)

    if not isinstance(metadata["calling"], Calling):
        raise TypeError(f"{cls.__typename__} 'calling' must be a calling convention")


def _sanitize_display(cls, metadata, /):
    if not isinstance(group := metadata["group"], int) or isinstance(group, bool):
        raise TypeError(f"{cls.__typename__} 'group' must be an integer")
    if not 0 <= group < MAX_GROUPS:
        raise ValueError(f"{cls.__typename__} 'group' must be between 0 and {MAX_GROUPS - 1}")

    if not isinstance(descr := metadata["descr"], str | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = coalesce(descr)


class Option(metaclass=DescriptorType):
    """
    Named command-line switch.

    Construction validates every field and the instance is read-only
    afterwards: the names listed in __introspectable__ are exposed as
    properties mirroring private fields.

    Derived properties
    - optional: the option accepts an argument but does not require one.
    - required: the option requires an argument.
    - names: the declared names, short first ("-a", "--all").
    """

    __introspectable__ = (
        "short",
        "long",
        "metavar",
        "type",
        "delimiter",
        "dest",
        "count",
        "flag",
        "action",
        "callback",
        "calling",
        "group",
        "hidden",
        "descr",
    )
    __displayable__ = (
        "short",
        "long",
        "metavar",
        "type",
        "group",
        "hidden",
    )

    def __new__(
            cls,
            *names,
            metavar=Unset,
            type=DataType.STR,
            delimiter=Unset,
            dest=Unset,
            count=Unset,
            flag=Unset,
            action=Action.SET_TRUE,
            callback=Unset,
            calling=Calling.AUTO,
            group=0,
            hidden=False,
            descr=Unset
    ):
        metadata = {
            "names": names,
            "metavar": metavar,
            "type": type,
            "delimiter": delimiter,
            "dest": dest,
            "count": count,
            "flag": flag,
            "action": action,
            "callback": callback,
            "calling": calling,
            "group": group,
            "hidden": bool(hidden),
            "descr": descr,
        }
        _sanitize_names(cls, metadata)
        _sanitize_argument(cls, metadata)
        _sanitize_targets(cls, metadata)
        _sanitize_display(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def names(self):
        return tuple(name for name in (self._short, self._long) if name)

    @property
    def optional(self):
        return self._metavar is not None and self._metavar.startswith("[")

    @property
    def required(self):
        return self._metavar is not None and not self._metavar.startswith("[")


def resolve_calling(option, /):
    """
    effective calling convention of an option's callback.

    an explicit convention is kept; AUTO becomes CONVERTED for a typed
    argument, RAW for a plain string argument and VOID without argument.
    """
    if option.calling is not Calling.AUTO:
        return option.calling
    if option.metavar is None:
        return Calling.VOID
    if option.type is DataType.STR:
        return Calling.RAW
    return Calling.CONVERTED


def option(*names, **metadata):
    """
    Build an Option around the decorated callback.

    The docstring of the callback becomes the description unless `descr` is
    given explicitly.

        @option("-v", "--verbose", action=Action.INCREMENT, flag=verbosity)
        def verbose():
            "print more details"
    """
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        metadata.setdefault("descr", inspect.getdoc(callback) or Unset)
        return Option(*names, callback=callback, **metadata)
    return wrapper


__all__ = (
    "Action",
    "Calling",
    "Slot",
    "Option",
    "resolve_calling",
    "option",
)
