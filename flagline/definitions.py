r"""
Flagline argument definitions.

Overview
- ArgumentDefinition: one recognized flag (short/long name pair, value-bearing or
  bare, optional set of permitted values, mandatory or not) plus the value recorded
  for it while parsing.
- to_bool(token): boolean grammar used by the definition fields.

Definition grammar (one line, comma separated, 3 to 5 fields)
    short name,long name,has value[,enum values][,mandatory]

    -a,--action,true,create|update|delete
    -t,--type,true,CLOB|BLOB,true
    -v,--verbose,false

- every space and tab inside a field is removed (other whitespace is kept).
- short name starts with a single '-', long name with '--'.
- booleans accept TRUE/Y/YES/T and FALSE/N/NO/F (case-insensitive).
- enum values are separated by '|'; an empty or blank field means unconstrained.

State
- value is Unset until the parser records one; a bare flag records "" when present.
  The public `value` property materializes Unset as None.
"""
from .faults import FaultCode, IllegalArgumentDefinitionError, IllegalArgumentError
from .utils import *

_BLANKS = str.maketrans("", "", " \t")
_TRUTHY = frozenset({"TRUE", "Y", "YES", "T"})
_FALSY = frozenset({"FALSE", "N", "NO", "F"})


def _unblank(field):
    # Every space and tab is dropped, not only the surrounding ones.
    return field.translate(_BLANKS)


def to_bool(token, /):
    """
    Parse a definition boolean (case-insensitive).

    Accepted
    - true:  TRUE, Y, YES, T
    - false: FALSE, N, NO, F

    Raises
    - IllegalArgumentDefinitionError carrying the offending token for anything else.
    """
    if not isinstance(token, str):
        raise TypeError("to_bool() argument must be a string")
    if (upper := token.upper()) in _TRUTHY:
        return True
    if upper in _FALSY:
        return False
    raise IllegalArgumentDefinitionError(
        token,
        title="illegal boolean",
        code=FaultCode.ILLEGAL_BOOLEAN,
        hint="use one of true/false, y/n, yes/no or t/f",
        token=token,
    )


class ArgumentDefinition:
    """
    A recognized command line flag.

    Fields (read-only)
    - short_name: '-x' style name.
    - long_name: '--name' style name.
    - has_value: whether the flag consumes the following token.
    - enum_values: frozenset of permitted values (empty means unconstrained).
    - mandatory: whether parsing fails when the flag is absent.

    Runtime state
    - value: None until supplied, "" for a supplied bare flag, otherwise the
      consumed token.
    """
    short_name = mirror("short_name")
    long_name = mirror("long_name")
    has_value = mirror("has_value")
    enum_values = mirror("enum_values")
    mandatory = mirror("mandatory")

    def __init__(self, short_name, long_name, /, has_value=False, enum_values=(), mandatory=False):
        if not isinstance(short_name, str) or not isinstance(long_name, str):
            raise TypeError("argument definition names must be strings")
        if not isinstance(has_value, bool) or not isinstance(mandatory, bool):
            raise TypeError("argument definition 'has_value' and 'mandatory' must be booleans")
        if isinstance(enum_values, str):
            raise TypeError("argument definition 'enum_values' must be an iterable of strings, not a string")

        self._short_name = short_name
        self._long_name = long_name
        self._has_value = has_value
        self._enum_values = frozenset(enum_values)
        self._mandatory = mandatory
        self._value = Unset

    @classmethod
    def parse(cls, text, /):
        """
        Build a definition from one line of the definition grammar.

        Raises
        - IllegalArgumentDefinitionError(text) when the field count is not 3 to 5,
          a name has the wrong prefix, or a boolean field is not recognized.
        """
        if not isinstance(text, str):
            raise TypeError("ArgumentDefinition.parse() argument must be a string")

        fields = text.split(",", 5)
        if not 3 <= len(fields) <= 5:
            raise IllegalArgumentDefinitionError(
                text,
                title="malformed definition",
                code=FaultCode.MALFORMED_DEFINITION,
                hint="expected 'short name,long name,has value[,enum values][,mandatory]' (got %d fields)" % len(fields),
                definition=text,
            )

        short_name = _unblank(fields[0])
        long_name = _unblank(fields[1])

        if not short_name.startswith("-") or short_name.startswith("--"):
            raise IllegalArgumentDefinitionError(
                text,
                title="illegal short name",
                code=FaultCode.ILLEGAL_SHORT_NAME,
                hint="short name %r must start with a single '-' (for example: -a)" % short_name,
                definition=text,
            )
        if not long_name.startswith("--"):
            raise IllegalArgumentDefinitionError(
                text,
                title="illegal long name",
                code=FaultCode.ILLEGAL_LONG_NAME,
                hint="long name %r must start with '--' (for example: --action)" % long_name,
                definition=text,
            )

        enum_values = set()
        if len(fields) > 3 and _unblank(fields[3]):
            enum_values.update(map(_unblank, fields[3].split("|")))

        try:
            has_value = to_bool(_unblank(fields[2]))
            mandatory = to_bool(_unblank(fields[4])) if len(fields) > 4 else False
        except IllegalArgumentDefinitionError as exception:
            raise IllegalArgumentDefinitionError(
                text,
                title="illegal boolean",
                code=FaultCode.ILLEGAL_BOOLEAN,
                hint="%r is not a boolean, use one of true/false, y/n, yes/no or t/f" % exception.message,
                definition=text,
            ) from None

        return cls(short_name, long_name, has_value=has_value, enum_values=enum_values, mandatory=mandatory)

    @property
    def name(self):
        """Canonical identity "<short>|<long>" used in messages."""
        return self._short_name + "|" + self._long_name

    @property
    def value(self):
        return coalesce(self._value)

    @value.setter
    def value(self, value):
        if not isinstance(value, str):
            raise TypeError("argument definition value must be a string")
        self._value = value

    def is_enum_constrained(self):
        return bool(self._enum_values)

    def is_supplied(self):
        return self._value is not Unset

    def enum_values_as_string(self):
        # Sorted so repeated messages list the choices identically.
        return "|".join(sorted(self._enum_values))

    def validate(self):
        """
        Check the recorded state against the declaration.

        Checks, in order (first failure raises IllegalArgumentError)
        1. a bare flag carrying a value while declaring enum values;
        2. a mandatory flag that was never supplied;
        3. a supplied value outside the enum values.
        """
        if not self._has_value and self.is_supplied() and self._enum_values:
            raise IllegalArgumentError(
                "%s is no value argument but set a value: %s" % (self.name, self._value),
                title="value for bare argument",
                code=FaultCode.VALUE_FOR_BARE_ARGUMENT,
                hint="%s takes no value, its enum values cannot be satisfied" % self.name,
                argument=self,
            )

        if self._mandatory and not self.is_supplied():
            raise IllegalArgumentError(
                "%s is mandatory argument, but has not been supplied" % self.name,
                title="mandatory argument missing",
                code=FaultCode.MANDATORY_MISSING,
                hint="add %s (or %s) to the command line" % (self._short_name, self._long_name),
                argument=self,
            )

        if self.is_enum_constrained() and self.is_supplied() and self._value not in self._enum_values:
            raise IllegalArgumentError(
                "%s value (%s) is not permit, it can be: %s" % (self.name, self._value, self.enum_values_as_string()),
                title="invalid choice",
                code=FaultCode.INVALID_CHOICE,
                hint="pick one of %s" % ", ".join(map(repr, sorted(self._enum_values))),
                argument=self,
            )

    def __str__(self):
        return "%s,%s,%s,%s" % (
            self._short_name,
            self._long_name,
            "true" if self._has_value else "false",
            self.enum_values_as_string(),
        )

    def __repr__(self):
        return "argument-definition(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "short_name", self._short_name
        yield "long_name", self._long_name
        yield "has_value", self._has_value
        yield "enum_values", self._enum_values
        yield "mandatory", self._mandatory
        yield "value", self._value


__all__ = (
    "ArgumentDefinition",
    "to_bool",
)
