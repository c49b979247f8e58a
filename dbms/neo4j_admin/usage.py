"""
Help text rendering for neo4j-admin commands.

Commands describe their arguments with NamedArgument records; this module
turns those into the usage line, the options table and the full help page.
"""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

LINE_WIDTH = 80

ENVIRONMENT_VARIABLES = (
    ("NEO4J_CONF", "Path to directory which contains neo4j.conf."),
    ("NEO4J_DEBUG", "Set to anything to enable debug output."),
    ("NEO4J_HOME", "Neo4j home directory."),
)


@dataclass(frozen=True)
class NamedArgument:
    """A ``--name=<value>`` command argument.

    Attributes:
        name: Option name without leading dashes
        example_value: Placeholder shown in help, e.g. ``name``
        description: One-line description
        default: Default value; None marks the argument as mandatory
    """

    name: str
    example_value: str
    description: str
    default: str | None = None

    @property
    def is_mandatory(self) -> bool:
        return self.default is None

    def option_usage(self) -> str:
        return f"--{self.name}=<{self.example_value}>"

    def usage(self) -> str:
        if self.is_mandatory:
            return self.option_usage()
        return f"[{self.option_usage()}]"

    def help_description(self) -> str:
        if self.is_mandatory:
            return self.description
        return f"{self.description} [default:{self.default}]"


class CommandProvider(Protocol):
    """What the usage renderer needs to know about a command."""

    name: str
    summary: str
    description: str
    arguments: Sequence[NamedArgument]


def command_usage_line(script_name: str, provider: CommandProvider) -> str:
    args = " ".join(argument.usage() for argument in provider.arguments)
    return f"usage: {script_name} {provider.name} {args}".rstrip()


def render_command_usage(script_name: str, provider: CommandProvider) -> str:
    """Render the full help page for one command."""
    lines = [command_usage_line(script_name, provider), "", "environment variables:"]

    name_width = max(len(name) for name, _ in ENVIRONMENT_VARIABLES) + 3
    for name, description in ENVIRONMENT_VARIABLES:
        lines.append(f"    {name:<{name_width}}{description}")

    lines.append("")
    lines.extend(textwrap.wrap(provider.description, width=LINE_WIDTH, break_on_hyphens=False))

    if provider.arguments:
        lines.extend(["", "options:"])
        option_width = max(len(a.option_usage()) for a in provider.arguments) + 3
        for argument in provider.arguments:
            lines.append(
                f"  {argument.option_usage():<{option_width}}{argument.help_description()}"
            )

    return "\n".join(lines) + "\n"


def render_tool_usage(script_name: str, providers: Sequence[CommandProvider]) -> str:
    """Render the top-level help listing every command."""
    lines = [f"usage: {script_name} <command>", "", "available commands:"]
    name_width = max((len(p.name) for p in providers), default=0) + 4
    for provider in providers:
        lines.append(f"    {provider.name:<{name_width}}{provider.summary}")
    lines.extend(["", f"Use {script_name} help <command> for more details."])
    return "\n".join(lines) + "\n"
