"""
Read-only command/option model rendered by climan.

A Parser owns one root Command. Every Command owns one root Group plus
its child Commands, and every Group owns its Options and sub-Groups.
Back-references (option -> group, group -> parent, command -> parent)
are weak so each node has exactly one owner.

Trees are usually built by an adapter (see climan.adapters.click) or
through the add_* helpers:

    parser = Parser(name="tool", short_description="Do things")
    parser.command.add_option(Option(short_name="v", long_name="verbose"))
    status = parser.command.add_command("status", "Show status")
"""

import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Union, runtime_checkable


@runtime_checkable
class UsageProvider(Protocol):
    """Capability for command data that supplies its own usage string."""

    def usage(self) -> str:
        ...


def _deref(ref: Optional[weakref.ref]) -> Any:
    return ref() if ref is not None else None


@dataclass(eq=False)
class Option:
    """A single command-line option as it should be documented."""

    short_name: str = ""  # single character, "" when absent
    long_name: str = ""
    value_name: str = ""
    default: list[str] = field(default_factory=list)
    optional_argument: bool = False
    optional_value: list[str] = field(default_factory=list)
    required: bool = False
    description: str = ""
    env_key: str = ""
    hidden: bool = False
    _group: Optional[weakref.ref] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if len(self.short_name) > 1:
            raise ValueError(f"short name must be a single character: {self.short_name!r}")

    @property
    def group(self) -> Optional["Group"]:
        """The group this option belongs to, if attached."""
        return _deref(self._group)

    def show_in_help(self) -> bool:
        return not self.hidden and (self.short_name != "" or self.long_name != "")

    def long_name_with_namespace(self) -> str:
        """Long name prefixed by the namespaces of all enclosing groups."""
        if not self.long_name:
            return ""
        delimiter = _namespace_delimiters(self.group)[0]
        return _qualify(self.long_name, self.group, lambda g: g.namespace, delimiter)

    def env_key_with_namespace(self) -> str:
        """Environment key prefixed by the env namespaces of enclosing groups."""
        if not self.env_key:
            return ""
        delimiter = _namespace_delimiters(self.group)[1]
        return _qualify(self.env_key, self.group, lambda g: g.env_namespace, delimiter)


@dataclass(eq=False)
class Group:
    """A named collection of options, optionally nested."""

    short_description: str = ""
    long_description: str = ""
    namespace: str = ""
    env_namespace: str = ""
    hidden: bool = False
    is_builtin_help: bool = False
    options: list[Option] = field(default_factory=list)
    groups: list["Group"] = field(default_factory=list)
    _parent: Optional[weakref.ref] = field(default=None, repr=False)

    @property
    def parent(self) -> Optional[Union["Group", "Command"]]:
        """Enclosing Group, or the Command owning this root group."""
        return _deref(self._parent)

    def add_option(self, option: Option) -> Option:
        option._group = weakref.ref(self)
        self.options.append(option)
        return option

    def add_group(
        self,
        short_description: str,
        long_description: str = "",
        **kwargs: Any,
    ) -> "Group":
        group = Group(
            short_description=short_description,
            long_description=long_description,
            **kwargs,
        )
        group._parent = weakref.ref(self)
        self.groups.append(group)
        return group

    def each_group(self, visitor: Callable[["Group"], None]) -> None:
        """Visit this group and every descendant group, pre-order."""
        visitor(self)
        for group in self.groups:
            group.each_group(visitor)

    def show_in_help(self) -> bool:
        """Whether the group or any descendant carries a visible option."""
        if self.hidden:
            return False
        if any(opt.show_in_help() for opt in self.options):
            return True
        return any(group.show_in_help() for group in self.groups)


@dataclass(eq=False)
class Command:
    """A command or subcommand with its option groups."""

    name: str
    short_description: str = ""
    long_description: str = ""
    aliases: list[str] = field(default_factory=list)
    hidden: bool = False
    data: Any = None
    group: Group = field(default_factory=Group)
    commands: list["Command"] = field(default_factory=list)
    _parent: Optional[weakref.ref] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.group._parent = weakref.ref(self)

    @property
    def parent(self) -> Optional[Union["Command", "Parser"]]:
        """Parent Command, or the Parser for the root command."""
        return _deref(self._parent)

    def parent_command(self) -> Optional["Command"]:
        parent = self.parent
        return parent if isinstance(parent, Command) else None

    def add_command(
        self,
        name: str,
        short_description: str = "",
        long_description: str = "",
        data: Any = None,
        **kwargs: Any,
    ) -> "Command":
        command = Command(
            name=name,
            short_description=short_description,
            long_description=long_description,
            data=data,
            **kwargs,
        )
        command._parent = weakref.ref(self)
        self.commands.append(command)
        return command

    def add_group(self, short_description: str, long_description: str = "", **kwargs: Any) -> Group:
        return self.group.add_group(short_description, long_description, **kwargs)

    def add_option(self, option: Option) -> Option:
        return self.group.add_option(option)

    def visible_commands(self) -> list["Command"]:
        return [c for c in self.commands if not c.hidden]

    def sorted_visible_commands(self) -> list["Command"]:
        return sorted(self.visible_commands(), key=lambda c: c.name)

    def has_help_options(self) -> bool:
        """Whether any non-builtin group documents at least one option."""
        found = False

        def visit(group: Group) -> None:
            nonlocal found
            if group.is_builtin_help:
                return
            if any(opt.show_in_help() for opt in group.options):
                found = True

        self.group.each_group(visit)
        return found


@dataclass(eq=False)
class Parser:
    """Top of the tree: program-level metadata plus the root command."""

    name: str
    short_description: str = ""
    long_description: str = ""
    usage: str = ""
    namespace_delimiter: str = "."
    env_namespace_delimiter: str = "_"
    command: Optional[Command] = None

    def __post_init__(self) -> None:
        if self.command is None:
            self.command = Command(name=self.name)
        self.command._parent = weakref.ref(self)

    def visible_commands(self) -> list[Command]:
        return self.command.visible_commands()


def resolve_custom_usage(command: Command) -> Optional[str]:
    """Return the custom usage string carried by a command's data, if any."""
    if isinstance(command.data, UsageProvider):
        return command.data.usage()
    return None


def _owning_parser(group: Optional[Group]) -> Optional[Parser]:
    node: Any = group
    while node is not None and not isinstance(node, Parser):
        node = node.parent
    return node


def _namespace_delimiters(group: Optional[Group]) -> tuple[str, str]:
    parser = _owning_parser(group)
    if parser is None:
        return ".", "_"
    return parser.namespace_delimiter, parser.env_namespace_delimiter


def _qualify(
    name: str,
    group: Optional[Group],
    namespace_of: Callable[[Group], str],
    delimiter: str,
) -> str:
    # Namespaces stop at the owning command's root group.
    while group is not None:
        namespace = namespace_of(group)
        if namespace:
            name = namespace + delimiter + name
        parent = group.parent
        group = parent if isinstance(parent, Group) else None
    return name
