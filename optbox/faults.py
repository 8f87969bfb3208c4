"""
Optbox faults (errors and warnings) and rendering.

Scope
- ErrorCode: canonical, stable numeric identifiers for every user-facing issue
  raised while registering options, parsing tokens, or validating the result.
  Codes are grouped by domain to keep searches predictable.
- OptionsFault / OptionError: base error types. OptionError carries the option
  name(s) involved and renders the fixed, historical message for its code.
- OptionsWarning: soft problems surfaced through the warnings module.
- OptionsExit: an exception group bundling every fault of one parse.
- report() / check(): the two ways a program surfaces accumulated faults.

Message contract
- Messages are fixed strings (see _MESSAGES); programs and tests may compare them.
- Token-level faults cite the option as typed ("--name" / "-n"); validator
  faults cite the bare long name.

Integration
- Options.parse() never raises; it returns the full list of faults.
- A program then calls report(errors, exit=True) to print them on stderr via
  rich and stop, or check(errors) to raise an OptionsExit.
- Presentation is configurable from the host application: __prog__, __styles__
  and __codes__ in __main__.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class ErrorCode(IntEnum):
    """
    canonical fault codes used across optbox (stable identifiers).

    grouping (by high-level domain)
    - registration (101xx)
      • EMPTY_NAME, OPTION_IS_NIL, DUPLICATE_LONGNAME, DUPLICATE_SHORTNAME,
        UNSUPPORTED_ALIAS_LIST_FORMAT, NIL_MAP, NIL_OPTIONS
    - parsing (102xx)
      • UNSUPPORTED, EMPTY_VALUE, WRONG_FORMAT
    - validation (103xx)
      • REQUIRED_NOT_SET, CONFLICT, BOUND_NOT_SET, UNSUPPORTED_VALUE,
        UNSUPPORTED_CONFLICT_LIST_FORMAT, UNSUPPORTED_BOUND_LIST_FORMAT
    - warnings (109xx)
      • SHADOWED_ALIAS
    """
    # --- registration errors (101xx) ---
    EMPTY_NAME                       = 10101
    OPTION_IS_NIL                    = 10102
    DUPLICATE_LONGNAME               = 10103
    DUPLICATE_SHORTNAME              = 10104
    UNSUPPORTED_ALIAS_LIST_FORMAT    = 10105
    NIL_MAP                          = 10106
    NIL_OPTIONS                      = 10107

    # --- parsing errors (102xx) ---
    UNSUPPORTED                      = 10201
    EMPTY_VALUE                      = 10202
    WRONG_FORMAT                     = 10203

    # --- validation errors (103xx) ---
    REQUIRED_NOT_SET                 = 10301
    CONFLICT                         = 10302
    BOUND_NOT_SET                    = 10303
    UNSUPPORTED_VALUE                = 10304
    UNSUPPORTED_CONFLICT_LIST_FORMAT = 10305
    UNSUPPORTED_BOUND_LIST_FORMAT    = 10306

    # --- warnings (109xx) ---
    SHADOWED_ALIAS                   = 10901

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))

    @property
    def title(self):
        return _TITLES[self]

    @property
    def hint(self):
        return _HINTS.get(self, "")


_TITLES = {
    ErrorCode.EMPTY_NAME: "option without name",
    ErrorCode.OPTION_IS_NIL: "option without descriptor",
    ErrorCode.DUPLICATE_LONGNAME: "duplicated option",
    ErrorCode.DUPLICATE_SHORTNAME: "duplicated option",
    ErrorCode.UNSUPPORTED_ALIAS_LIST_FORMAT: "malformed alias list",
    ErrorCode.NIL_MAP: "missing options map",
    ErrorCode.NIL_OPTIONS: "missing options",
    ErrorCode.UNSUPPORTED: "unsupported option",
    ErrorCode.EMPTY_VALUE: "empty value",
    ErrorCode.WRONG_FORMAT: "wrong format",
    ErrorCode.REQUIRED_NOT_SET: "required option",
    ErrorCode.CONFLICT: "conflicting options",
    ErrorCode.BOUND_NOT_SET: "bound option",
    ErrorCode.UNSUPPORTED_VALUE: "unsupported default",
    ErrorCode.UNSUPPORTED_CONFLICT_LIST_FORMAT: "malformed conflict list",
    ErrorCode.UNSUPPORTED_BOUND_LIST_FORMAT: "malformed bound list",
    ErrorCode.SHADOWED_ALIAS: "shadowed alias",
}

_HINTS = {
    ErrorCode.UNSUPPORTED: "check the spelling of the option or remove it",
    ErrorCode.EMPTY_VALUE: "pass a value after the option (for example: --name value)",
    ErrorCode.WRONG_FORMAT: "pass a value of the expected type (for example: --name=value)",
    ErrorCode.REQUIRED_NOT_SET: "add the missing option",
    ErrorCode.CONFLICT: "keep only one of these options",
    ErrorCode.BOUND_NOT_SET: "add the missing option or remove the one requiring it",
}

_MESSAGES = {
    ErrorCode.EMPTY_VALUE: "Non-boolean option {option} is empty",
    ErrorCode.REQUIRED_NOT_SET: "Required option {option} is not set",
    ErrorCode.WRONG_FORMAT: "Option {option} has wrong format",
    ErrorCode.OPTION_IS_NIL: "Struct for option {option} is nil",
    ErrorCode.DUPLICATE_LONGNAME: "Option {option} defined 2 or more times",
    ErrorCode.DUPLICATE_SHORTNAME: "Option {option} defined 2 or more times",
    ErrorCode.EMPTY_NAME: "Some option does not have a name",
    ErrorCode.CONFLICT: "Option {option} conflicts with option {bound}",
    ErrorCode.BOUND_NOT_SET: "Option {bound} must be defined with option {option}",
    ErrorCode.UNSUPPORTED_VALUE: "Option {option} contains unsupported default value",
    ErrorCode.UNSUPPORTED_ALIAS_LIST_FORMAT: "Option {option} has unsupported alias list format",
    ErrorCode.UNSUPPORTED_CONFLICT_LIST_FORMAT: "Option {option} has unsupported conflict list format",
    ErrorCode.UNSUPPORTED_BOUND_LIST_FORMAT: "Option {option} has unsupported bound list format",
}


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


def _prog():
    return getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0]) or "python")


def _render(fault, styles, *, fancy, colorful, ratio=None):
    """
    build the rich renderable shared by errors and warnings.

    layout
    - header: [ prog | code | title ]
    - body: the fixed message, then an arrowed hint when the code has one.
    """
    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(_prog(), "prog-name"),
        " | ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.code.title.title(), "title"),
        " ]"
    )
    parts = [text(str(fault), "message")]
    if fault.code.hint:
        parts.append(Text.assemble(text(" → ", "hint-arrow"), text(fault.code.hint, "hint")))

    if fancy:
        width = None if ratio is None else int((console.width - 4) * ratio)
        return Panel(Group(*parts), title=header, title_align="left", width=width)

    return Group(header, *parts)


class OptionsFault(Exception):
    """
    base type for every error produced by optbox.

    subclasses set a class-level `code`; instances know how to render
    themselves through rich (see render()).
    """
    code = ErrorCode.UNSUPPORTED

    def render(self, *, fancy=False, colorful=True, ratio=None):
        return _render(self, _styles({
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "title": "bold #FF4DA6",
            "message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }), fancy=fancy, colorful=colorful, ratio=ratio)

    def __rich__(self):
        return self.render()


class NilOptionsError(OptionsFault):
    code = ErrorCode.NIL_OPTIONS

    def __init__(self, message="Options struct is nil", /):
        super().__init__(message)


class NilMapError(OptionsFault):
    code = ErrorCode.NIL_MAP

    def __init__(self, message="Options map is nil", /):
        super().__init__(message)


class EmptyNameError(OptionsFault):
    code = ErrorCode.EMPTY_NAME

    def __init__(self, message="Some option does not have a name", /):
        super().__init__(message)


class OptionError(OptionsFault):
    """
    fault tied to one option (and, for cross-option constraints, a second one).

    attributes
    - option: the option as cited in the message ("--name", "-n" or "name").
    - bound_option: the peer option for CONFLICT / BOUND_NOT_SET, else "".
    - code: the ErrorCode selecting the message.
    """

    def __init__(self, option, bound_option="", code=ErrorCode.UNSUPPORTED, /):
        if not isinstance(code, ErrorCode):
            raise TypeError("OptionError() code must be an ErrorCode")
        super().__init__(option, bound_option, code)
        self.option = option
        self.bound_option = bound_option
        self.code = code

    def __str__(self):
        template = _MESSAGES.get(self.code, "Option {option} is not supported")
        return template.format(option=self.option, bound=self.bound_option)

    def __repr__(self):
        return f"{type(self).__name__}({self.option!r}, {self.bound_option!r}, {self.code!s})"


class OptionsWarning(Warning):
    """
    base type for soft problems; emitted through warnings.warn and rendered via rich.
    """
    code = ErrorCode.SHADOWED_ALIAS

    def render(self, *, fancy=False, colorful=True, ratio=None):
        return _render(self, _styles({
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",
            "title": "bold #FFC2E0",
            "message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }), fancy=fancy, colorful=colorful, ratio=ratio)

    def __rich__(self):
        return self.render()


class ShadowedAliasWarning(OptionsWarning):
    code = ErrorCode.SHADOWED_ALIAS


class OptionsExit(ExceptionGroup):
    """
    every fault of one registration/parse round, raised by check().
    """

    def __new__(cls, exceptions, /):
        return super().__new__(cls, "bad options", tuple(exceptions))

    def __init__(self, exceptions, /):
        super().__init__("bad options", tuple(exceptions))

    def derive(self, exceptions):
        return OptionsExit(exceptions)

    def render(self, *, fancy=False, colorful=True):
        styles = _styles({
            "prog-name": "bold #E6E6F0",
            "title": "bold #FF4DA6",
        })

        def text(fragment, style=""):
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        header = Text.assemble("[ ", text(_prog(), "prog-name"), " | ", text(self.message.title(), "title"), " ]")

        renders = []
        for exception in self.exceptions:
            if isinstance(exception, OptionsFault):
                renders.append(exception.render(fancy=fancy, colorful=colorful, ratio=2/3))
            else:
                renders.append(text(exception, "message"))

        if fancy:
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __rich__(self):
        return self.render()


def report(errors, /, *, exit=False, fancy=False, colorful=True):
    """
    print accumulated faults on the stderr console.

    behavior
    - does nothing for an empty list.
    - renders all faults at once, grouped under one header.
    - with exit=True, terminates the process with status 1 afterwards.
    """
    if not errors:
        return
    console.print(OptionsExit(errors).render(fancy=fancy, colorful=colorful))
    if exit:
        sys.exit(1)


def check(errors, /):
    """
    raise an OptionsExit carrying every fault, when there is any.
    """
    if errors:
        raise OptionsExit(errors)


__all__ = (
    "ErrorCode",
    "OptionsFault",
    "NilOptionsError",
    "NilMapError",
    "EmptyNameError",
    "OptionError",
    "OptionsWarning",
    "ShadowedAliasWarning",
    "OptionsExit",
    "report",
    "check",
)
