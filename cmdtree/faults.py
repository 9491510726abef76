"""
cmdtree faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing fault.
- CommandException: base type that carries message + options and knows how to
  render itself for a terminal (rich) and how to surface itself (raise or exit).
- MissingHandlerError / ResolutionError / ExecutableNameError: the concrete faults
  raised while building or dispatching a command tree.
- columns() / listing(): the sibling listing shown for a ResolutionError. Kept
  apart from the error type so the data captured at failure time (the set and
  the reason) can be inspected independently of how it is printed.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).

Rendering
- str(fault) is the plain message (what tests and non-shell callers see).
- fault.__rich__() decorates that message with a header and a hint:

      [ tool — 11102 | Command Not Found ]
      command not found.
      ...
       → pick one of the sub-commands of 'tool user'

Integration
- The dispatcher raises faults directly; invoke() catches them and calls
  trigger(fault, shell=..., ...). In non-shell mode the fault is re-raised;
  in shell mode it is printed to stderr and the process exits with status 1.
- Hosts may set __prog__, __styles__ and __codes__ on their __main__ module to
  adjust the program label, the colors and the code labels.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the dispatcher (stable identifiers).

    grouping (by high-level domain)
    - routing (111xx)
      • NO_COMMANDS_SELECTED, COMMAND_NOT_FOUND
    - commands (112xx)
      • MISSING_HANDLER
    - environment (113xx)
      • EXECUTABLE_UNAVAILABLE
    """
    # --- routing errors (111xx) ---
    NO_COMMANDS_SELECTED   = 11101
    COMMAND_NOT_FOUND      = 11102

    # --- command errors (112xx) ---
    MISSING_HANDLER        = 11201

    # --- environment errors (113xx) ---
    EXECUTABLE_UNAVAILABLE = 11301

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


# short reasons shown on the first line of a resolution listing
_REASONS = MappingProxyType({
    FaultCode.NO_COMMANDS_SELECTED: "no commands selected",
    FaultCode.COMMAND_NOT_FOUND: "command not found",
})


def columns(children, /, minimum=12):
    """
    Compute the width of the name column for a sibling listing.

    The width starts at `minimum`; any name that does not fit with one space
    to spare grows it to the next multiple of four. It never shrinks.

    >>> columns([])
    12
    >>> columns([type("unit", (), {"name": "verylongname"})()])
    16
    """
    width = minimum
    for child in children:
        if (candidate := len(child.name) + 1) > width:
            width = (candidate + 3) // 4 * 4
    return width


def listing(source, reason, /):
    """
    Render the message for a failed resolution at command set `source`.

    Layout (no trailing newline):

        <reason>.

        Available sub-commands are:

        <TAB><name padded to columns()><descr>
        ...
    """
    width = columns(source.children)
    lines = ["%s.\n\nAvailable sub-commands are:\n" % reason]
    for child in source.children:
        lines.append("\t%-*s%s" % (width, child.name, child.descr))
    return "\n".join(lines)


class CommandException(Exception):
    """
    Base class of every fault raised by cmdtree.

    Class attributes
    - code: FaultCode identifying the fault.
    - title: short, lowercase headline used in the rich header.

    Options
    - shell: bool — when True, __trigger__ prints and exits instead of raising.
    - fancy: bool — wrap the rich rendering in a Panel.
    - colorful: bool — apply styles (True by default).
    - names: tuple[str, ...] — the command path the fault relates to.
    """
    code = Unset
    title = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self._message = message
        self.options = MappingProxyType(options)

    @property
    def message(self):
        return coalesce(self._message, "")

    @property
    def hint(self):
        return self.options.get("hint", "")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        names = self.options.get("names", ())
        prog = text(getattr(main, "__prog__", names[0] if names else "cmdtree"), "prog-name")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), "code"),
            " | ",
            text(coalesce(self.title, "").title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")

        if not self.hint:
            body = (message,)
        else:
            body = (message, Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self._message, **{**self.options, **overrides})


class MissingHandlerError(CommandException):
    """
    A command was reached but no callback was ever declared for it.

    The message embeds the full command path, the command's own name included.
    """
    code = FaultCode.MISSING_HANDLER
    title = "missing handler"

    def __init__(self, names, /, **options):
        self.names = tuple(names)
        super().__init__(
            "no function declared for command: %s" % " ".join(self.names),
            **{"names": self.names} | options
        )

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.names, **{**self.options, **overrides})


class ResolutionError(CommandException):
    """
    A command set could not route its arguments to a child.

    Only the failing set and the fault code are captured here; the listing of
    its children is rendered by listing() every time the message is read.

    Attributes
    - source: the CommandSet at which resolution failed.
    - code: FaultCode.NO_COMMANDS_SELECTED or FaultCode.COMMAND_NOT_FOUND.
    - reason: the short reason matching `code`.
    """

    def __init__(self, source, code, /, **options):
        if code not in _REASONS:
            raise ValueError(f"{code!r} is not a resolution fault code")
        self.source = source
        self.code = FaultCode(code)
        super().__init__(**options)

    @property
    def reason(self):
        return _REASONS[self.code]

    @property
    def title(self):
        return self.reason

    @property
    def message(self):
        return listing(self.source, self.reason)

    @property
    def hint(self):
        if names := self.options.get("names", ()):
            return "pick one of the sub-commands of '%s'" % " ".join(names)
        return ""

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.source, self.code, **{**self.options, **overrides})


class ExecutableNameError(CommandException):
    """
    The running program's executable name could not be determined, so a root
    command set cannot be named.
    """
    code = FaultCode.EXECUTABLE_UNAVAILABLE
    title = "executable unavailable"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "CommandException",
    "MissingHandlerError",
    "ResolutionError",
    "ExecutableNameError",
    "FaultCode",
    "columns",
    "listing",
    "trigger",
)
