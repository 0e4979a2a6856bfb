#!/usr/bin/env python3
"""
Command formatting and validation for outbound CAT commands.
Templates use printf-style %s placeholders, e.g. "PB0%s;".
"""

import re
from typing import Iterable, Sequence, Union

from .errors import ArityMismatch, CommandNotFound
from .models import CommandDefinition, CommandName, OutboundCommand

# "%%" is a literal percent sign and must not be counted as a placeholder
_PLACEHOLDER_RE = re.compile(r'%%|%s')


def count_placeholders(template: str) -> int:
    return sum(1 for token in _PLACEHOLDER_RE.findall(template) if token == '%s')


def command_key(name: Union[str, CommandName]) -> str:
    return name.value if isinstance(name, CommandName) else str(name)


def lookup_command(commands: Iterable[CommandDefinition],
                   name: Union[str, CommandName]) -> CommandDefinition:
    """Find a command definition by name.

    Raises:
        CommandNotFound: if no definition carries that name
    """
    key = command_key(name)
    for definition in commands:
        if definition.name == key:
            return definition
    raise CommandNotFound("catlink.lookup_command", f"command {key} not found")


def format_command(definition: CommandDefinition, params: Sequence[str]) -> OutboundCommand:
    """Substitute params into the command template.

    Raises:
        ArityMismatch: if len(params) differs from the placeholder count
    """
    expected = count_placeholders(definition.template)
    if expected != len(params):
        raise ArityMismatch("catlink.format_command", expected, len(params))

    text = definition.template % tuple(str(p) for p in params)
    return OutboundCommand(name=definition.name, formatted_text=text)
