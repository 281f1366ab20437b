"""
User-facing error message template.

The template carries exactly one ``%s`` slot that receives the report
identifier returned by the error tracker. It is validated when it is
built, so a malformed template fails at configuration load instead of
in the middle of handling another error.
"""

import re

from errorpage.domain.dispatch.errors import InvalidMessageTemplateError

_DIRECTIVE = re.compile(r"%(.)", re.DOTALL)


class MessageTemplate:
    """A validated ``printf``-style template with a single report id slot.

    Args:
        text: Template text, e.g. ``"Something went wrong (ref %s)"``.
            ``%%`` renders a literal percent sign.

    Raises:
        InvalidMessageTemplateError: If the text has no ``%s`` slot, more
            than one, a dangling ``%`` or any other directive.
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        _validate(text)
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def render(self, report_id: object) -> str:
        """Substitute the report identifier into the template.

        The identifier is opaque; ``None`` renders as an empty string.
        """
        value = "" if report_id is None else str(report_id)
        return self._text % (value,)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MessageTemplate):
            return self._text == other._text
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __repr__(self) -> str:
        return f"MessageTemplate({self._text!r})"

    def __str__(self) -> str:
        return self._text


def _validate(text: str) -> None:
    if not isinstance(text, str):
        raise InvalidMessageTemplateError(repr(text), "template must be a string")

    slots = 0
    stripped = _DIRECTIVE.sub("", text)
    if "%" in stripped:
        raise InvalidMessageTemplateError(text, "dangling '%' at end of template")

    for match in _DIRECTIVE.finditer(text):
        directive = match.group(1)
        if directive == "%":
            continue
        if directive != "s":
            raise InvalidMessageTemplateError(
                text, f"unsupported directive '%{directive}', only '%s' is allowed"
            )
        slots += 1

    if slots != 1:
        raise InvalidMessageTemplateError(
            text, f"expected exactly one '%s' slot for the report id, found {slots}"
        )
