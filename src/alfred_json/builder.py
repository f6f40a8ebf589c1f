"""
`Item` 的链式构建器。

只负责收集字段，不含任何序列化逻辑；`into_item()` 返回冻结的 `Item`。
"""

from __future__ import annotations

from dataclasses import replace

from .types import FileIcon, FileType, Icon, IconPath, Item, ItemType, Modifier, ModifierData


class ItemBuilder:
    """逐步设置 `Item` 字段，每个 setter 返回自身以便链式调用。"""

    def __init__(self, title: str) -> None:
        self._item = Item(title)
        self._modifiers: dict[Modifier, ModifierData] = {}
        self._variables: dict[str, str] = {}
        self._mod_variables: dict[Modifier, dict[str, str]] = {}

    def _set(self, **changes) -> ItemBuilder:
        self._item = replace(self._item, **changes)
        return self

    def _set_mod(self, modifier: Modifier, **changes) -> ItemBuilder:
        data = self._modifiers.get(modifier, ModifierData())
        self._modifiers[modifier] = replace(data, **changes)
        self._mod_variables.setdefault(modifier, {})
        return self

    def subtitle(self, subtitle: str) -> ItemBuilder:
        return self._set(subtitle=subtitle)

    def arg(self, arg: str) -> ItemBuilder:
        return self._set(arg=arg)

    def uid(self, uid: str) -> ItemBuilder:
        return self._set(uid=uid)

    def type(self, item_type: ItemType) -> ItemBuilder:
        return self._set(type=item_type)

    def valid(self, valid: bool) -> ItemBuilder:
        return self._set(valid=valid)

    def autocomplete(self, autocomplete: str) -> ItemBuilder:
        return self._set(autocomplete=autocomplete)

    def text_copy(self, text: str) -> ItemBuilder:
        return self._set(text_copy=text)

    def text_large_type(self, text: str) -> ItemBuilder:
        return self._set(text_large_type=text)

    def quicklook_url(self, url: str) -> ItemBuilder:
        return self._set(quicklook_url=url)

    def icon(self, icon: Icon) -> ItemBuilder:
        return self._set(icon=icon)

    def icon_path(self, path: str) -> ItemBuilder:
        return self.icon(IconPath(path))

    def icon_file(self, path: str) -> ItemBuilder:
        return self.icon(FileIcon(path))

    def icon_filetype(self, filetype: str) -> ItemBuilder:
        return self.icon(FileType(filetype))

    def variable(self, key: str, value: str) -> ItemBuilder:
        self._variables[key] = value
        return self

    def variables(self, variables: dict[str, str]) -> ItemBuilder:
        """整体替换 item 级变量。"""
        self._variables = dict(variables)
        return self

    def subtitle_mod(self, modifier: Modifier, subtitle: str) -> ItemBuilder:
        return self._set_mod(modifier, subtitle=subtitle)

    def arg_mod(self, modifier: Modifier, arg: str) -> ItemBuilder:
        return self._set_mod(modifier, arg=arg)

    def valid_mod(self, modifier: Modifier, valid: bool) -> ItemBuilder:
        return self._set_mod(modifier, valid=valid)

    def icon_mod(self, modifier: Modifier, icon: Icon) -> ItemBuilder:
        return self._set_mod(modifier, icon=icon)

    def icon_path_mod(self, modifier: Modifier, path: str) -> ItemBuilder:
        return self.icon_mod(modifier, IconPath(path))

    def icon_file_mod(self, modifier: Modifier, path: str) -> ItemBuilder:
        return self.icon_mod(modifier, FileIcon(path))

    def icon_filetype_mod(self, modifier: Modifier, filetype: str) -> ItemBuilder:
        return self.icon_mod(modifier, FileType(filetype))

    def variable_mod(self, modifier: Modifier, key: str, value: str) -> ItemBuilder:
        self._set_mod(modifier)
        self._mod_variables[modifier][key] = value
        return self

    def variables_mod(self, modifier: Modifier, variables: dict[str, str]) -> ItemBuilder:
        self._set_mod(modifier)
        self._mod_variables[modifier] = dict(variables)
        return self

    def into_item(self) -> Item:
        """生成 `Item`；映射字段均为副本，之后修改构建器不影响已生成的 item。"""
        modifiers = {
            modifier: replace(data, variables=dict(self._mod_variables.get(modifier, {})))
            for modifier, data in self._modifiers.items()
        }
        return replace(self._item, modifiers=modifiers, variables=dict(self._variables))
