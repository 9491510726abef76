"""
cmdtree execution context.

A Context is the only state threaded through a dispatch. It is created once
per top-level run() and extended, never mutated, at every routing step:

    Context()                              names=()
    └─ extend("set")                       names=("set",)
       └─ extend("user")                   names=("set", "user")
          └─ extend("add")                 names=("set", "user", "add")

Each extend() returns a new value, so contexts held by different branches
of a dispatch (or by concurrent dispatches over the same tree) never see
each other's names.

The optional `signal` is an opaque object supplied by the caller (a
threading.Event, a deadline, anything). The dispatcher never looks at it;
it is handed to every handler untouched.
"""
from typing import NamedTuple


class Context(NamedTuple):
    """
    Immutable resolution state for a single dispatch.

    Fields
    - names: tuple[str, ...]
      Unit names accumulated from the root down to the unit being run.
    - signal: object
      Caller-supplied cancellation/deadline marker, passed through unexamined.
    """
    names: tuple = ()
    signal: object = None

    def extend(self, name, /):
        """
        Return a copy of this context with `name` appended to the name-path.
        """
        if not isinstance(name, str):
            raise TypeError("extend() argument must be a string")
        return self._replace(names=(*self.names, name))


def names(context, /):
    """
    Return the name-path recorded in `context`.

    Anything that is not a Context (None included) has no recorded path and
    yields an empty tuple.
    """
    if isinstance(context, Context):
        return context.names
    return ()


__all__ = (
    "Context",
    "names",
)
