"""
cmdtree command layer: build and dispatch command trees.

What this module provides
- Command: a named, described leaf bound to a handler callback.
- CommandSet: a named, described, ordered collection of Commands and nested
  CommandSets that routes on its first argument.
- Factories: command(...), commandset(...), rootset(...).
- Runners: run(unit, *args) for programmatic dispatch, invoke(unit, prompt)
  as the shell entry point (faults rendered with rich, exit status 1).
- rootname()/stripexe(): derive a root set name from the running executable.

Quick start
    from cmdtree import command, commandset, rootset, invoke, names

    @command("add", "add a new user")
    def add(context, args):
        print(names(context), args)      # ('tool', 'user', 'add') ['-email', 'x']

    tool = rootset(
        commandset("user", "manage users", add),
    )

    if __name__ == "__main__":
        invoke(tool)                     # e.g. `tool user add -email x`

Routing
- A set consumes one argument (the selector) and hands the rest to the first
  child whose name equals it, in definition order. Duplicate names are not
  rejected; the earlier child shadows the later one.
- Every step extends the context's name-path: a set appends its own name once
  a child is found, a command appends its own name before calling the handler.
- Faults from deeper levels are never wrapped: what a handler raises reaches
  the caller of run() as-is.

Design notes
- The two unit kinds are sealed; _dispatch() matches on them exhaustively.
- Trees are built bottom-up and read-only afterwards, so one tree may be
  dispatched from several threads at once.
"""
import logging
import os
import shlex
import sys
from collections.abc import Iterable

from .context import Context
from .faults import *
from .utils import *

logger = logging.getLogger(__name__)


@sealed
class Command:
    """
    Leaf of a command tree: a terminal action bound to a handler.

    Fields (read-only)
    - name: str — the selector a parent set matches against.
    - descr: str — one-line description shown in sibling listings.
    - callback: Callable[[Context, list[str]], Any] | None — the handler. A
      command without one fails with MissingHandlerError when reached.
    """
    __slots__ = ("_name", "_descr", "_callback")

    def __init__(self, name, descr="", callback=None, /):
        if not isinstance(name, str):
            raise TypeError("command 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError("command 'descr' must be a string")
        if callback is not None and not callable(callback):
            raise TypeError("command 'callback' must be callable")
        self._name = name
        self._descr = descr
        self._callback = callback

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def callback(self):
        return self._callback

    def run(self, context, args, /):
        """
        Run this command under `context` (None starts a fresh one) with `args`.
        """
        return _dispatch(self, _coerce(context), list(args))

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "callback", self._callback

    def __repr__(self):
        return "command(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


@sealed
class CommandSet:
    """
    Inner node of a command tree: routes to one child by name.

    Fields (read-only)
    - name: str
    - descr: str
    - children: tuple[Command | CommandSet, ...] — lookup order and listing
      order are the same sequence, the one given at construction.
    """
    __slots__ = ("_name", "_descr", "_children")

    def __init__(self, name, descr="", /, *children):
        if not isinstance(name, str):
            raise TypeError("command-set 'name' must be a string")
        if not isinstance(descr, str):
            raise TypeError("command-set 'descr' must be a string")
        for child in children:
            if not isinstance(child, Command | CommandSet):
                raise TypeError(f"command-set child must be a command or a command-set, not {type(child).__name__!r}")
        self._name = name
        self._descr = descr
        self._children = children

    @property
    def name(self):
        return self._name

    @property
    def descr(self):
        return self._descr

    @property
    def children(self):
        return self._children

    def child(self, name, /):
        """
        Return the first child named `name`, or None.
        """
        for child in self._children:
            if child.name == name:
                return child
        return None

    def run(self, context, args, /):
        """
        Route `args` under `context` (None starts a fresh one) to one child.
        """
        return _dispatch(self, _coerce(context), list(args))

    def __rich_repr__(self):
        yield "name", self._name
        yield "descr", self._descr
        yield "children", tuple(child.name for child in self._children)

    def __repr__(self):
        return "command-set(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def _coerce(context):
    if context is None:
        return Context()
    if not isinstance(context, Context):
        raise TypeError("run() 'context' must be a Context or None")
    return context


def _dispatch(unit, context, args):
    """
    Resolve `args` against `unit` and run the command they select.

    Commands append their name and call the handler; sets append theirs once
    the selector matched and recurse with the selector consumed.
    """
    match unit:
        case Command():
            context = context.extend(unit.name)
            if unit.callback is None:
                raise MissingHandlerError(context.names)
            logger.debug("running %r with %d argument(s)", " ".join(context.names), len(args))
            return unit.callback(context, args)
        case CommandSet():
            if not args:
                raise ResolutionError(unit, FaultCode.NO_COMMANDS_SELECTED, names=(*context.names, unit.name))
            if (child := unit.child(args[0])) is None:
                raise ResolutionError(unit, FaultCode.COMMAND_NOT_FOUND, names=(*context.names, unit.name))
            logger.debug("routing %r through %r", args[0], unit.name)
            return _dispatch(child, context.extend(unit.name), args[1:])
        case _:
            raise TypeError(f"cannot run {type(unit).__name__!r}, expected a command or a command-set")


def stripexe(path, /):
    """
    Return the final segment of `path` without a trailing ".exe".

    Matching is exact and case-sensitive; any other extension is kept.

    >>> stripexe("/usr/local/bin/tool.exe")
    'tool'
    >>> stripexe("bar.txt")
    'bar.txt'
    """
    _, tail = os.path.split(path)
    if tail.endswith(".exe"):
        return tail[:-len(".exe")]
    return tail


def _executable():
    # The running program is the script or entry point, not the interpreter.
    return sys.argv[0] if sys.argv else ""


def rootname(executable=_executable, /):
    """
    Derive a root command-set name from the running program.

    Parameters
    - executable: Callable[[], str | os.PathLike]
      Query returning the program path. Defaults to sys.argv[0]; tests pass
      their own.

    Raises
    - ExecutableNameError: when the query fails or yields nothing.
    """
    try:
        path = executable()
    except (OSError, LookupError) as error:
        raise ExecutableNameError(f"failed to obtain executable name: {error}") from error
    if not path:
        raise ExecutableNameError("failed to obtain executable name")
    return stripexe(os.fspath(path))


def command(name, descr="", callback=Unset, /):
    """
    Create a Command, or return a decorator that builds one.

    Invocation modes
    - Direct: command("add", "add a user", add_user) -> Command
    - Without handler: command("add", "add a user", None) -> Command that
      fails with MissingHandlerError when run.
    - Decorator:
        @command("add", "add a user")
        def add(context, args): ...
      `add` is then the Command itself.
    """
    @rename("command")
    def wrapper(callback, /):
        return Command(name, descr, callback)

    return wrapper(callback) if callback is not Unset else wrapper


def commandset(name, descr="", /, *children):
    """
    Create a CommandSet named `name` over `children`, in the given order.
    """
    return CommandSet(name, descr, *children)


def rootset(*children, executable=_executable):
    """
    Create the root CommandSet of a program, named after its executable.

    The name comes from rootname(executable). When it cannot be determined
    the fault is rendered to stderr and the process exits with status 1:
    without a root name no usage listing could ever be produced.
    """
    try:
        name = rootname(executable)
    except ExecutableNameError as fault:
        trigger(fault, shell=True)
    return CommandSet(name, "", *children)


def run(unit, /, *args, signal=None):
    """
    Dispatch `args` through `unit` with a fresh context.

    Parameters
    - unit: Command | CommandSet
    - *args: str — the argument list, typically sys.argv[1:].
    - signal: object — opaque cancellation/deadline marker forwarded to the
      handler as context.signal.

    Returns
    - Whatever the selected handler returns.

    Raises
    - ResolutionError, MissingHandlerError, or anything the handler raises.
    """
    return _dispatch(unit, Context((), signal), list(args))


def invoke(unit, prompt=Unset, /, *, signal=None, shell=True, fancy=False, colorful=True):
    """
    Shell entry point: dispatch a prompt and surface faults for humans.

    Parameters
    - prompt:
      • Unset: use sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized sequence, passed verbatim.
    - shell: when True, faults are printed to stderr and the process exits
      with status 1; when False they are raised.
    - fancy, colorful: rich rendering options for printed faults.

    Returns
    - Whatever the selected handler returns.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    """
    if prompt is Unset:
        tokens = sys.argv[1:]
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    try:
        return run(unit, *tokens, signal=signal)
    except CommandException as fault:
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful)


__all__ = (
    "Command",
    "CommandSet",
    "command",
    "commandset",
    "rootset",
    "rootname",
    "stripexe",
    "run",
    "invoke",
)
