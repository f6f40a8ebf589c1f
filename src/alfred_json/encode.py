"""
将数据模型映射为 Script Filter JSON 对象。

所有函数都是纯函数：只读输入，返回新的 `dict`。未设置的字段不会出现在
输出中（不会写成 `null`），键的顺序固定。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .types import FileIcon, FileType, Icon, IconPath, Item, ItemType, ModifierData

_ITEM_TYPES = {
    ItemType.FILE: "file",
    ItemType.FILE_SKIPCHECK: "file:skipcheck",
}


def icon_to_json(icon: Icon) -> dict[str, Any]:
    """将图标映射为 `{"type": ..., "path": ...}`，普通路径不带 `type`。"""
    if isinstance(icon, IconPath):
        return {"path": icon.path}
    if isinstance(icon, FileIcon):
        return {"type": "fileicon", "path": icon.path}
    if isinstance(icon, FileType):
        return {"type": "filetype", "path": icon.path}
    raise TypeError(f"not an icon: {icon!r}")


def _variables_to_json(variables: Mapping[str, str]) -> dict[str, str]:
    return dict(variables)


def modifier_data_to_json(data: ModifierData) -> dict[str, Any]:
    """映射单个修饰键的覆盖字段；全部未设置时返回空对象 `{}`。"""
    out: dict[str, Any] = {}
    if data.subtitle is not None:
        out["subtitle"] = data.subtitle
    if data.arg is not None:
        out["arg"] = data.arg
    if data.valid is not None:
        out["valid"] = data.valid
    if data.icon is not None:
        out["icon"] = icon_to_json(data.icon)
    if data.variables:
        out["variables"] = _variables_to_json(data.variables)
    return out


def item_to_json(item: Item) -> dict[str, Any]:
    """将一个结果项映射为 JSON 对象。"""
    out: dict[str, Any] = {"title": item.title}
    if item.subtitle is not None:
        out["subtitle"] = item.subtitle
    if item.icon is not None:
        out["icon"] = icon_to_json(item.icon)
    if item.uid is not None:
        out["uid"] = item.uid
    if item.arg is not None:
        out["arg"] = item.arg

    # `default` 类型不输出；只有文件类条目需要显式 `type`。
    item_type = _ITEM_TYPES.get(item.type)
    if item_type is not None:
        out["type"] = item_type

    # 宿主默认 valid 为 true，只输出否定的情况。
    if not item.valid:
        out["valid"] = False
    if item.autocomplete is not None:
        out["autocomplete"] = item.autocomplete

    if item.text_copy is not None or item.text_large_type is not None:
        text: dict[str, str] = {}
        if item.text_copy is not None:
            text["copy"] = item.text_copy
        if item.text_large_type is not None:
            text["largetype"] = item.text_large_type
        out["text"] = text

    if item.quicklook_url is not None:
        out["quicklookurl"] = item.quicklook_url

    if item.modifiers:
        out["mods"] = {
            modifier.value: modifier_data_to_json(data)
            for modifier, data in item.modifiers.items()
        }
    if item.variables:
        out["variables"] = _variables_to_json(item.variables)
    return out
