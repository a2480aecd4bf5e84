"""
Flagline faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain (definitions, parsing/validation, usage).
- ArgumentException: base type carrying a message + options; knows how to render
  itself with rich.
- IllegalArgumentDefinitionError / IllegalArgumentError / UsageError: the three
  fault kinds raised by the definitions and parser layers.
- trigger(): entry point for the presentation layer to surface a fault
  (re-raise it, or print it and exit in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- The core raises faults directly and never prints nor exits.
- A CLI catches ArgumentException and hands it to trigger(fault, shell=True, ...),
  which renders the fault via rich on stderr and terminates with status 1.
"""
import copy
import inspect
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - definitions (211xx)
      • MALFORMED_DEFINITION, ILLEGAL_SHORT_NAME, ILLEGAL_LONG_NAME, ILLEGAL_BOOLEAN
    - parsing (221xx)
      • UNDEFINED_ARGUMENT, MISSING_VALUE, FLAG_LIKE_VALUE, UNDEFINED_KEY
    - validation (222xx)
      • VALUE_FOR_BARE_ARGUMENT, MANDATORY_MISSING, INVALID_CHOICE
    - usage (231xx)
      • NOT_PARSED

    normalize() lets the host remap codes to custom labels while keeping them stable.
    """
    # --- definition errors (21xxx) ---
    MALFORMED_DEFINITION        = 21101
    ILLEGAL_SHORT_NAME          = 21102
    ILLEGAL_LONG_NAME           = 21103
    ILLEGAL_BOOLEAN             = 21104

    # --- parsing errors (22xxx) ---
    UNDEFINED_ARGUMENT          = 22101
    MISSING_VALUE               = 22102
    FLAG_LIKE_VALUE             = 22103
    UNDEFINED_KEY               = 22104

    # --- validation errors (22xxx) ---
    VALUE_FOR_BARE_ARGUMENT     = 22201
    MANDATORY_MISSING           = 22202
    INVALID_CHOICE              = 22203

    # --- usage errors (23xxx) ---
    NOT_PARSED                  = 23101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgumentException(Exception):
    """
    Base fault: a message plus read-only options.

    Common options
    - code: FaultCode identifying the failure.
    - title: short heading used by the renderer.
    - hint: one actionable sentence shown under the message.
    - prog: program name for the header (overridden by __main__.__prog__).
    - shell/fancy/colorful/deferred: presentation flags consumed by trigger().
    """
    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({
            "shell": False,
            "fancy": False,
            "colorful": True,
            "deferred": False,
        } | options)

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")

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

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            return Text(str(fragment), style)

        code = self.options.get("code")
        prog = text(getattr(main, "__prog__", self.options.get("prog", "flagline")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "-", styler("code")),
            " | ",
            text(self.options.get("title", type(self).__name__).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        parts = [message]
        if hint := self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

        if self.options["fancy"]:
            return Panel(Group(*parts), title=header, title_align="left", width=console.width - 4)

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if not self.options["shell"]:
            raise self from None
        console.print(self)
        if self.options["deferred"]:
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IllegalArgumentDefinitionError(ArgumentException):
    """Malformed definition line (field count, name prefixes, boolean tokens)."""


class IllegalArgumentError(ArgumentException):
    """Command line rejected while scanning or validating, or lookup of an undefined key."""


class UsageError(ArgumentException):
    """The parser API was used out of order (e.g. queried before parsing)."""


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgumentException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the stderr rich console followed by exit(1)
      (or nothing more when deferred); otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    returns None when not found.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return inspect.cleandoc(doc) if (doc := getattr(__import__("__main__"), "__docs__", {}).get(code)) else None


__all__ = (
    "ArgumentException",
    "IllegalArgumentDefinitionError",
    "IllegalArgumentError",
    "UsageError",
    "FaultCode",
    "trigger",
    "getdoc",
)
