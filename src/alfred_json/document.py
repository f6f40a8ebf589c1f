"""
Script Filter 根文档的构建与输出。

`Document` 聚合有序的结果项与顶层变量，`write()` 将整份 JSON 文本一次性写入
输出流并立即 `flush`。写入/刷新产生的异常原样向上抛出。
"""

from __future__ import annotations

import io
import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import IO, Any

from .encode import item_to_json
from .types import Item


@dataclass
class Document:
    """待输出的结果项列表与顶层变量。"""

    items: list[Item] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def with_items(cls, items: Sequence[Item]) -> Document:
        return cls(items=list(items))

    def set_items(self, items: Sequence[Item]) -> None:
        self.items = list(items)

    def set_variables(self, variables: dict[str, str]) -> None:
        self.variables = dict(variables)

    def set_variable(self, key: str, value: str) -> None:
        self.variables[key] = value

    def variable(self, key: str, value: str) -> Document:
        """链式设置单个顶层变量（同名覆盖）。"""
        self.set_variable(key, value)
        return self

    def to_json(self) -> dict[str, Any]:
        return document_to_json(self)

    def dumps(self) -> str:
        return dumps(self)

    def write(self, w: IO[Any]) -> None:
        write_document(w, self)


def document_to_json(document: Document) -> dict[str, Any]:
    """生成根对象：`items` 总是存在，`variables` 仅在非空时出现。"""
    root: dict[str, Any] = {"items": [item_to_json(item) for item in document.items]}
    if document.variables:
        root["variables"] = dict(document.variables)
    return root


def dumps(document: Document) -> str:
    """序列化为紧凑 JSON 文本；相同输入总得到相同文本。"""
    return json.dumps(document_to_json(document), ensure_ascii=False, separators=(",", ":"))


def _is_binary(w: IO[Any]) -> bool:
    return isinstance(w, (io.RawIOBase, io.BufferedIOBase))


def write_document(w: IO[Any], document: Document) -> None:
    """
    将整份文档写入 `w`（一次 `write` + 一次 `flush`）。

    只有继承 `io.RawIOBase` / `io.BufferedIOBase` 的流会收到 UTF-8 `bytes`，
    其余对象一律按文本流处理并收到 `str`。不继承这两个基类的纯字节流
    （例如 Python 3.10 上的 `SpooledTemporaryFile(mode="w+b")`）会在
    `write` 时抛出 `TypeError`；这类对象请传入其底层缓冲区或先用
    `io.TextIOWrapper` 包装。
    """
    text = dumps(document)
    if _is_binary(w):
        w.write(text.encode("utf-8"))
    else:
        w.write(text)
    w.flush()


def write_items(w: IO[Any], items: Sequence[Item]) -> None:
    """写出不带顶层变量的文档；需要顶层变量时使用 `Document`。"""
    write_document(w, Document.with_items(items))
