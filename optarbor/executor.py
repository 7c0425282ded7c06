"""
Option executor and mutual-exclusivity bookkeeping.

execute() runs every task of one matched option, in this order:
1. flag mutation (SET_TRUE -> 1, SET_FALSE -> 0, INCREMENT -> +1,
   DECREMENT -> -1), unconditionally;
2. conversion of the argument (per item when a delimiter is declared),
   skipped when an optional argument is absent;
3. storage into the dest/count slots (a plain string dest receives None
   when its optional argument is absent);
4. the callback, invoked per its calling convention.

A failed conversion is fatal: it is reported through the parser's trigger()
and nothing is stored. Claims is the group table consulted by the parser
before execute() runs.
"""
import logging
import re

from .arguments import Action, Calling, resolve_calling
from .conversions import DataType, Outcome, convert
from .faults import ArgumentRangeError, FaultCode, InvalidArgumentError

logger = logging.getLogger(__name__)


class Claims:
    """
    mutual-exclusivity table: group id -> first option seen in that group.
    """

    def __init__(self, size, /):
        self._holders = [None] * size

    def claim(self, option, /):
        """
        record `option` as the holder of its group.

        returns the option already holding the group when it is a different
        option (a violation), None otherwise. group 0 is never claimed.
        """
        if not option.group:
            return None
        holder = self._holders[option.group]
        if holder is None:
            self._holders[option.group] = option
            return None
        if holder is option:
            return None
        return holder

    def clear(self):
        self._holders = [None] * len(self._holders)


def _split(option, argument, /):
    if option.delimiter is None:
        return [argument]
    pattern = "|".join(map(re.escape, option.delimiter))
    return [item for item in re.split(pattern, argument) if item]


def _convert(option, argument, parser, /):
    values = []
    for item in _split(option, argument):
        outcome, value = convert(item, option.type)
        if outcome is Outcome.INCONVERTIBLE:
            parser.trigger(InvalidArgumentError(
                'argument not valid: "%s"' % item,
                title="invalid argument",
                code=FaultCode.INVALID_ARGUMENT,
                hint="expected a value of type %s for %s" % (option.type.name.lower(), ", ".join(option.names)),
                option=option,
                argument=item,
            ))
        elif outcome is Outcome.OUT_OF_RANGE:
            parser.trigger(ArgumentRangeError(
                'value out of range: "%s"' % item,
                title="argument out of range",
                code=FaultCode.ARGUMENT_OUT_OF_RANGE,
                hint="%s does not fit in type %s" % (item, option.type.name.lower()),
                option=option,
                argument=item,
            ))
        values.append(value)

    if option.delimiter is None:
        return values[0]
    return values


def execute(option, argument, parser, /):
    """
    run the tasks of a matched option.

    `argument` is the attached or next-token argument, or None when the
    option takes none or an optional argument was omitted.
    """
    logger.debug("execute %s with argument %r", "/".join(option.names), argument)

    if (flag := option.flag) is not None:
        match option.action:
            case Action.SET_TRUE:
                flag.value = 1
            case Action.SET_FALSE:
                flag.value = 0
            case Action.INCREMENT:
                flag.value = (flag.value or 0) + 1
            case Action.DECREMENT:
                flag.value = (flag.value or 0) - 1

    value = None
    if option.metavar is not None and argument is not None:
        value = _convert(option, argument, parser)
        if option.dest is not None:
            option.dest.value = value
        if option.count is not None:
            option.count.value = len(value)
    elif option.dest is not None and option.type is DataType.STR and option.delimiter is None:
        # a bare optional string option resets its slot to None
        option.dest.value = None

    if option.callback is not None:
        match resolve_calling(option):
            case Calling.VOID:
                option.callback()
            case Calling.RAW:
                option.callback(argument)
            case Calling.CONVERTED:
                option.callback(value)


__all__ = (
    "Claims",
    "execute",
)
