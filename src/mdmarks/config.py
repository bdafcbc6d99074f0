"""Render configuration: immutable, validated option sets per feature.

Defaults mirror the common render-markdown setup. Every enumerated option
is checked against its closed vocabulary when the dataclass is built, so
a RenderConfig that exists is a valid one.

// [LAW:one-source-of-truth] Defaults live in the dataclass field defaults.
// [LAW:single-enforcer] __post_init__ validation is the only config check.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import ClassVar, NamedTuple, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigError(ValueError):
    """Invalid configuration value; the message names the field path."""


# ─── Level cycling ───────────────────────────────────────────────────────────


def cycle(values: Sequence[T], level: int) -> T | None:
    """Value for a 1-based nesting level, wrapping around; None when empty."""
    if not values:
        return None
    return values[(level - 1) % len(values)]


def clamp(values: Sequence[T], level: int) -> T | None:
    """Value for a 1-based level, reusing the last entry past the end."""
    if not values:
        return None
    return values[max(min(level, len(values)), 1) - 1]


# ─── Validation helpers ──────────────────────────────────────────────────────


class _Validated:
    """Mixin: check fields against CHOICES and basic types after init."""

    CHOICES: ClassVar[dict[str, frozenset]] = {}
    FIXED_OR_INT: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        name = type(self).__name__
        for key, allowed in self.CHOICES.items():
            value = getattr(self, key)
            if key in self.FIXED_OR_INT and isinstance(value, int) and not isinstance(value, bool):
                if value < 0:
                    raise ConfigError(f"{name}.{key}: must be >= 0, got {value}")
                continue
            if value not in allowed:
                raise ConfigError(
                    f"{name}.{key}: expected one of {sorted(allowed)}, got {value!r}"
                )
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            if f.name.endswith("_pad") or f.name == "min_width":
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    raise ConfigError(
                        f"{name}.{f.name}: expected a non-negative integer, got {value!r}"
                    )


# ─── Feature configs ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class HeadingConfig(_Validated):
    CHOICES: ClassVar[dict[str, frozenset]] = {
        "position": frozenset({"overlay", "inline"}),
        "width": frozenset({"full", "block"}),
    }

    enabled: bool = True
    sign: bool = True
    position: str = "overlay"
    icons: tuple[str, ...] = ("󰲡 ", "󰲣 ", "󰲥 ", "󰲧 ", "󰲩 ", "󰲫 ")
    signs: tuple[str, ...] = ("󰫎 ",)
    width: str = "full"
    left_pad: int = 0
    right_pad: int = 0
    min_width: int = 0
    border: bool = False
    border_prefix: bool = False
    above: str = "▄"
    below: str = "▀"
    backgrounds: tuple[str, ...] = (
        "RenderMarkdownH1Bg",
        "RenderMarkdownH2Bg",
        "RenderMarkdownH3Bg",
        "RenderMarkdownH4Bg",
        "RenderMarkdownH5Bg",
        "RenderMarkdownH6Bg",
    )
    foregrounds: tuple[str, ...] = (
        "RenderMarkdownH1",
        "RenderMarkdownH2",
        "RenderMarkdownH3",
        "RenderMarkdownH4",
        "RenderMarkdownH5",
        "RenderMarkdownH6",
    )


@dataclass(frozen=True)
class CodeConfig(_Validated):
    CHOICES: ClassVar[dict[str, frozenset]] = {
        "style": frozenset({"full", "normal", "language", "none"}),
        "position": frozenset({"left", "right"}),
        "width": frozenset({"full", "block"}),
        "border": frozenset({"thin", "thick"}),
    }

    enabled: bool = True
    sign: bool = True
    style: str = "full"
    position: str = "left"
    disable_background: tuple[str, ...] = ("diff",)
    width: str = "full"
    left_pad: int = 0
    right_pad: int = 0
    min_width: int = 0
    border: str = "thin"
    above: str = "▄"
    below: str = "▀"
    highlight: str = "RenderMarkdownCode"
    highlight_inline: str = "RenderMarkdownCodeInline"

    @property
    def draws_language(self) -> bool:
        return self.style in ("language", "full")

    @property
    def draws_background(self) -> bool:
        return self.style in ("normal", "full")


@dataclass(frozen=True)
class DashConfig(_Validated):
    CHOICES: ClassVar[dict[str, frozenset]] = {"width": frozenset({"full"})}
    FIXED_OR_INT: ClassVar[frozenset[str]] = frozenset({"width"})

    enabled: bool = True
    icon: str = "─"
    width: str | int = "full"
    highlight: str = "RenderMarkdownDash"


@dataclass(frozen=True)
class BulletConfig(_Validated):
    enabled: bool = True
    icons: tuple[str, ...] = ("●", "○", "◆", "◇")
    left_pad: int = 0
    right_pad: int = 0
    highlight: str = "RenderMarkdownBullet"


@dataclass(frozen=True)
class CheckboxState:
    icon: str
    highlight: str


@dataclass(frozen=True)
class CustomCheckbox:
    name: str
    raw: str
    rendered: str
    highlight: str


@dataclass(frozen=True)
class CheckboxConfig(_Validated):
    enabled: bool = True
    unchecked: CheckboxState = CheckboxState("󰄱 ", "RenderMarkdownUnchecked")
    checked: CheckboxState = CheckboxState("󰱒 ", "RenderMarkdownChecked")
    custom: tuple[CustomCheckbox, ...] = (
        CustomCheckbox("todo", "[-]", "󰥔 ", "RenderMarkdownTodo"),
    )


@dataclass(frozen=True)
class QuoteConfig(_Validated):
    enabled: bool = True
    icon: str = "▋"
    repeat_linebreak: bool = False
    highlight: str = "RenderMarkdownQuote"


class TableBorder(NamedTuple):
    """Box-drawing glyphs, in the conventional 11-entry order."""

    top_left: str = "┌"
    top_mid: str = "┬"
    top_right: str = "┐"
    mid_left: str = "├"
    mid_mid: str = "┼"
    mid_right: str = "┤"
    bottom_left: str = "└"
    bottom_mid: str = "┴"
    bottom_right: str = "┘"
    vertical: str = "│"
    horizontal: str = "─"


@dataclass(frozen=True)
class PipeTableConfig(_Validated):
    CHOICES: ClassVar[dict[str, frozenset]] = {
        "style": frozenset({"full", "normal", "none"}),
        "cell": frozenset({"padded", "raw", "overlay"}),
    }

    enabled: bool = True
    style: str = "full"
    cell: str = "padded"
    alignment_indicator: str = "━"
    border: TableBorder = TableBorder()
    head: str = "RenderMarkdownTableHead"
    row: str = "RenderMarkdownTableRow"
    filler: str = "RenderMarkdownTableFill"


@dataclass(frozen=True)
class SignConfig(_Validated):
    enabled: bool = True
    highlight: str = "RenderMarkdownSign"


@dataclass(frozen=True)
class Callout:
    name: str
    raw: str
    rendered: str
    highlight: str
    quote_icon: str | None = None


DEFAULT_CALLOUTS: tuple[Callout, ...] = (
    Callout("note", "[!NOTE]", "󰋽 Note", "RenderMarkdownInfo"),
    Callout("tip", "[!TIP]", "󰌶 Tip", "RenderMarkdownSuccess"),
    Callout("important", "[!IMPORTANT]", "󰅾 Important", "RenderMarkdownHint"),
    Callout("warning", "[!WARNING]", "󰀪 Warning", "RenderMarkdownWarn"),
    Callout("caution", "[!CAUTION]", "󰳦 Caution", "RenderMarkdownError"),
    Callout("abstract", "[!ABSTRACT]", "󰨸 Abstract", "RenderMarkdownInfo"),
    Callout("todo", "[!TODO]", "󰗡 Todo", "RenderMarkdownInfo"),
    Callout("success", "[!SUCCESS]", "󰄬 Success", "RenderMarkdownSuccess"),
    Callout("question", "[!QUESTION]", "󰘥 Question", "RenderMarkdownWarn"),
    Callout("failure", "[!FAILURE]", "󰅖 Failure", "RenderMarkdownError"),
    Callout("danger", "[!DANGER]", "󱐌 Danger", "RenderMarkdownError"),
    Callout("bug", "[!BUG]", "󰨰 Bug", "RenderMarkdownError"),
    Callout("example", "[!EXAMPLE]", "󰉹 Example", "RenderMarkdownHint"),
    Callout("quote", "[!QUOTE]", "󱆨 Quote", "RenderMarkdownQuote"),
)


@dataclass(frozen=True)
class RenderConfig(_Validated):
    CHOICES: ClassVar[dict[str, frozenset]] = {"width": frozenset({"viewport"})}
    FIXED_OR_INT: ClassVar[frozenset[str]] = frozenset({"width"})

    enabled: bool = True
    file_types: tuple[str, ...] = ("markdown",)
    max_file_size: float = 10.0
    render_modes: tuple[str, ...] = ("n", "c")
    width: str | int = "viewport"
    heading: HeadingConfig = field(default_factory=HeadingConfig)
    code: CodeConfig = field(default_factory=CodeConfig)
    dash: DashConfig = field(default_factory=DashConfig)
    bullet: BulletConfig = field(default_factory=BulletConfig)
    checkbox: CheckboxConfig = field(default_factory=CheckboxConfig)
    quote: QuoteConfig = field(default_factory=QuoteConfig)
    pipe_table: PipeTableConfig = field(default_factory=PipeTableConfig)
    sign: SignConfig = field(default_factory=SignConfig)
    callouts: tuple[Callout, ...] = DEFAULT_CALLOUTS

    @classmethod
    def from_dict(cls, data: dict | None) -> RenderConfig:
        """Merge a nested user dict over the defaults."""
        return _merge(cls(), data or {}, "config")

    def replace(self, **changes) -> RenderConfig:
        return dataclasses.replace(self, **changes)


# ─── Dict merging ────────────────────────────────────────────────────────────


def _named_entries(raw, path: str, build) -> tuple:
    """Callouts and custom checkboxes are given as {name: {...}} tables."""
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a table of named entries, got {raw!r}")
    entries = []
    for name, fields in raw.items():
        if not isinstance(fields, dict):
            raise ConfigError(f"{path}.{name}: expected a table, got {fields!r}")
        try:
            entries.append(build(name=name, **fields))
        except TypeError as exc:
            raise ConfigError(f"{path}.{name}: {exc}") from exc
    return tuple(entries)


def _strings(value, path: str) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"{path}: expected a list, got {value!r}")
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ConfigError(f"{path}[{index}]: expected a string, got {item!r}")
    return tuple(value)


def _coerce(current, value, path: str):
    if dataclasses.is_dataclass(current):
        if not isinstance(value, dict):
            raise ConfigError(f"{path}: expected a table, got {value!r}")
        if isinstance(current, CheckboxState):
            try:
                return dataclasses.replace(current, **value)
            except TypeError as exc:
                raise ConfigError(f"{path}: {exc}") from exc
        return _merge(current, value, path)
    if isinstance(current, TableBorder):
        glyphs = _strings(value, path)
        if len(glyphs) != len(TableBorder._fields):
            raise ConfigError(f"{path}: expected {len(TableBorder._fields)} glyphs, got {len(glyphs)}")
        return TableBorder(*glyphs)
    if isinstance(current, tuple):
        return _strings(value, path)
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"{path}: expected a boolean, got {value!r}")
        return value
    return value


def _merge(base, data: dict, path: str):
    known = {f.name for f in dataclasses.fields(base)}
    changes = {}
    for key, value in data.items():
        key_path = f"{path}.{key}"
        if key not in known:
            logger.warning("ignoring unknown config key %s", key_path)
            continue
        if key == "callouts":
            changes[key] = _named_entries(value, key_path, Callout)
        elif key == "custom" and isinstance(base, CheckboxConfig):
            changes[key] = _named_entries(value, key_path, CustomCheckbox)
        else:
            changes[key] = _coerce(getattr(base, key), value, key_path)
    return dataclasses.replace(base, **changes)
