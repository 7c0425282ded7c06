"""
Cursor API: the parser's position in argv, exposed to callbacks.

Exactly one parse may be active per process. While it runs, option and
operand callbacks can move its cursor to consume (shift) or give back
(unshift) arguments:

    def on_pair(_):
        second = cursor.shift()   # consume the token after the option argument

Outside of a parse both functions return None.
"""
import contextlib
import logging

logger = logging.getLogger(__name__)

_parser = None


@contextlib.contextmanager
def activate(parser, /):
    """
    make `parser` the active parse for the duration of the with-block.

    raises RuntimeError when another parse is already active; the active
    state is cleared however the block exits (SystemExit included).
    """
    global _parser
    if _parser is not None:
        raise RuntimeError("parse() is not reentrant: another parse is already active")
    _parser = parser
    logger.debug("parse of %r activated", parser.root.name)
    try:
        yield parser
    finally:
        _parser = None


def active():
    """return the running parser, or None outside of a parse."""
    return _parser


def shift():
    """
    advance the cursor by one and return the token it now points to.

    returns None when no parse is active or the end of argv is reached.
    """
    if _parser is None:
        return None
    return _parser.shift()


def unshift():
    """
    move the cursor back by one and return that token.

    returns None when no parse is active or the cursor is at position zero.
    """
    if _parser is None:
        return None
    return _parser.unshift()


__all__ = (
    "active",
    "shift",
    "unshift",
)
