"""
Script Filter 结果项的数据模型。

编码层只读取这些对象；所有可选字段用 `None` 表示“未设置”，
以便与“设置为空字符串”区分。
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class IconPath:
    """使用给定路径处的图片文件作为图标。"""

    path: str


@dataclass(frozen=True)
class FileIcon:
    """使用给定路径处文件在 Finder 中的图标。"""

    path: str


@dataclass(frozen=True)
class FileType:
    """使用 UTI/文件类型（如 `public.folder`）关联的图标。"""

    path: str


Icon = IconPath | FileIcon | FileType


class Modifier(Enum):
    """修饰键；成员值即输出 JSON 中 `mods` 下的键名。"""

    COMMAND = "cmd"
    OPTION = "alt"
    CONTROL = "ctrl"
    SHIFT = "shift"
    FN = "fn"


class ItemType(Enum):
    DEFAULT = "default"
    FILE = "file"
    FILE_SKIPCHECK = "file:skipcheck"


def _snapshot(mapping: Mapping) -> Mapping:
    """复制映射并包成只读视图；构造后调用方再修改原 dict 不影响对象。"""
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ModifierData:
    """按住某个修饰键时覆盖的字段。"""

    subtitle: str | None = None
    arg: str | None = None
    # `None` 表示沿用 item 自身的 valid。
    valid: bool | None = None
    icon: Icon | None = None
    # 映射字段不参与哈希。
    variables: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "variables", _snapshot(self.variables))


@dataclass(frozen=True)
class Item:
    """Script Filter 结果列表中的一项。"""

    title: str
    subtitle: str | None = None
    icon: Icon | None = None
    uid: str | None = None
    arg: str | None = None
    type: ItemType = ItemType.DEFAULT
    valid: bool = True
    autocomplete: str | None = None
    text_copy: str | None = None
    text_large_type: str | None = None
    quicklook_url: str | None = None
    modifiers: Mapping[Modifier, ModifierData] = field(default_factory=dict, hash=False)
    variables: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "modifiers", _snapshot(self.modifiers))
        object.__setattr__(self, "variables", _snapshot(self.variables))
