"""
Descriptor plumbing shared by Option and Command.

DescriptorType is the metaclass behind every declarative node of a command
tree. It keeps those nodes read-only and printable:
- __typename__ is derived from the class name ("Option" -> "option") and is
  used as the subject of construction errors.
- every name listed in __introspectable__ becomes a read-only property backed
  by "_{name}" (see utils.mirror).
- __repr__/__rich_repr__ show the fields listed in __displayable__ (or all
  introspectable fields when __displayable__ is Unset).
"""
import functools
import operator
import re

from .utils import Unset, coalesce, mirror, rename


class DescriptorType(type):
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


__all__ = ("DescriptorType",)
