"""
Flagline argument parser.

Overview
- ArgumentParser owns a registry of ArgumentDefinition objects indexed twice,
  by short name and by long name. Both indexes reference the same instances, so a
  value recorded through one name is visible through the other.
- parse(args) scans an argv-like vector (program name first) left to right with
  one token of lookahead, records values, then validates every definition that is
  supplied or mandatory.
- get_argument_value()/is_argument_supplied() query the result by either name.

Lifecycle
- define every argument, call parse() once, then query.
- registrations are last-write-wins per index; colliding names are not rejected.

Quick example
    >>> parser = ArgumentParser((
    ...     "-a,--action,true,create|update|delete,true",
    ...     "-v,--verbose,false",
    ... ))
    >>> parser.parse(["prog", "-v", "-a", "create"])
    >>> parser.get_argument_value("--action")
    'create'
"""
import copy
import difflib
import shlex
import sys
from collections.abc import Iterable

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .definitions import ArgumentDefinition
from .faults import FaultCode, IllegalArgumentError, UsageError
from .utils import *


class ArgumentParser:
    """
    Registry of argument definitions plus the parsing/validation engine.

    Parameters
    - definitions: iterable of definition lines, defined in order.
    - args: when given, parse(args) runs right after the definitions.
    """

    def __init__(self, definitions=(), args=Unset, /):
        if isinstance(definitions, str):
            raise TypeError("ArgumentParser() definitions must be an iterable of strings, not a string")

        self._shorts = {}
        self._longs = {}
        self._parsed = False
        self._prog = Unset

        for definition in definitions:
            self.define_argument(definition)

        if args is not Unset:
            self.parse(args)

    @property
    def parsed(self):
        """Whether parse() has been invoked (even if it failed)."""
        return self._parsed

    @property
    def prog(self):
        """Program name taken from the first token of the parsed vector, if any."""
        return coalesce(self._prog)

    @property
    def definitions(self):
        """Registered definitions, as held by the short name index."""
        return tuple(self._shorts.values())

    def define_argument(self, text, /):
        """
        Parse one definition line and register it under both of its names.

        Raises
        - IllegalArgumentDefinitionError when the line is malformed.
        """
        argument = ArgumentDefinition.parse(text)
        self._shorts[argument.short_name] = argument
        self._longs[argument.long_name] = argument

    def _lookup(self, key):
        # Short names take precedence over long names.
        try:
            return self._shorts[key]
        except KeyError:
            return self._longs.get(key)

    def _suggest(self, token):
        suggestions = difflib.get_close_matches(token, [*self._shorts, *self._longs], 5)
        if suggestions:
            return suggestions, "did you mean %r?" % suggestions[0]
        return suggestions, "defined arguments are: %s" % (", ".join(
            argument.name for argument in self._shorts.values()
        ) or "(none)")

    def _undefined(self, token):
        suggestions, hint = self._suggest(token)
        return IllegalArgumentError(
            "%s not defined" % token,
            title="undefined argument",
            code=FaultCode.UNDEFINED_ARGUMENT,
            hint=hint,
            prog=coalesce(self._prog, "flagline"),
            input=token,
            suggestions=suggestions,
        )

    def parse(self, args=Unset, /):
        """
        Scan an argument vector and validate the result.

        Parameters
        - args:
          • Unset: sys.argv.
          • str: a shell-like command line, split via shlex.split.
          • Iterable[str]: the vector itself.
          In every form the first token is the program name and is skipped.

        Raises
        - IllegalArgumentError on the first unknown token, missing value, flag-like
          value, or failed validation.
        """
        self._parsed = True

        if args is Unset:
            tokens = list(sys.argv)
        elif isinstance(args, str):
            tokens = shlex.split(args)
        elif isinstance(args, Iterable):
            tokens = list(args)
            if not all(isinstance(token, str) for token in tokens):
                raise TypeError("parse() argument must be a string or an iterable of strings")
        else:
            raise TypeError("parse() argument must be a string or an iterable of strings")

        iterator = iter(tokens)
        self._prog = next(iterator, Unset)
        prog = coalesce(self._prog, "flagline")

        for token in iterator:
            if not token.startswith("-"):
                raise self._undefined(token)

            if (argument := self._lookup(token)) is None:
                raise self._undefined(token)

            if not argument.has_value:
                argument.value = ""
                continue

            if (value := next(iterator, Unset)) is Unset:
                raise IllegalArgumentError(
                    "Argument value not supplied for: %s" % token,
                    title="missing value",
                    code=FaultCode.MISSING_VALUE,
                    hint="pass a value after %s (for example: %s <value>)" % (token, token),
                    prog=prog,
                    input=token,
                    argument=argument,
                )

            if value.startswith("-"):
                raise IllegalArgumentError(
                    "Wrong argument value '%s' for argument %s" % (value, token),
                    title="flag-like value",
                    code=FaultCode.FLAG_LIKE_VALUE,
                    hint="values cannot start with '-', %s expects a value right after it" % token,
                    prog=prog,
                    input=token,
                    value=value,
                    argument=argument,
                )

            argument.value = value

        for argument in self._shorts.values():
            if argument.is_supplied() or argument.mandatory:
                try:
                    argument.validate()
                except IllegalArgumentError as exception:
                    raise copy.replace(exception, prog=prog) from None

    def get_argument_value(self, key, /):
        """
        Return the value recorded for a short or long name (None if not supplied).

        Raises
        - UsageError before parse() has been called.
        - IllegalArgumentError when the key names no definition.
        """
        if not self._parsed:
            raise UsageError(
                "Command line arguments hasn't been parsed.",
                title="not parsed",
                code=FaultCode.NOT_PARSED,
                hint="call parse() before querying argument values",
            )

        if (argument := self._lookup(key)) is None:
            suggestions, hint = self._suggest(key)
            raise IllegalArgumentError(
                "Argument %s not defined" % key,
                title="undefined argument",
                code=FaultCode.UNDEFINED_KEY,
                hint=hint,
                prog=coalesce(self._prog, "flagline"),
                input=key,
                suggestions=suggestions,
            )

        return argument.value

    def is_argument_supplied(self, key, /):
        return self.get_argument_value(key) is not None

    def __contains__(self, key):
        return self._lookup(key) is not None

    def __len__(self):
        return len(self._shorts)

    def __str__(self):
        return "".join("%s\n" % argument for argument in self._shorts.values())

    def __repr__(self):
        return "argument-parser(definitions=%r, parsed=%r)" % (self.definitions, self._parsed)

    def __rich__(self):
        table = Table(
            "short", "long", "value", "choices", "mandatory",
            title=Text(coalesce(self._prog, "flagline"), "bold #FF4D94"),
            box=ROUNDED,
            header_style="bold #FFFFFF",
        )
        for argument in self._shorts.values():
            table.add_row(
                Text(argument.short_name, "bold #00E6FF"),
                Text(argument.long_name, "bold #00E6FF"),
                "yes" if argument.has_value else "no",
                Text(argument.enum_values_as_string(), "bold #FF4D94"),
                "yes" if argument.mandatory else "no",
            )
        return table


__all__ = (
    "ArgumentParser",
)
