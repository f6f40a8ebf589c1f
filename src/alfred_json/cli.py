"""
`alfred-json` 的命令行入口模块。

根据参数构建至多一个结果项与顶层变量，并把 Script Filter JSON 写到 stdout。
stdout 只承载 JSON；`--verbose` 的流程提示输出到 stderr。
"""

import argparse
import sys
from collections.abc import Sequence

from .builder import ItemBuilder
from .document import Document
from .types import FileIcon, FileType, IconPath, ItemType, Modifier


def _split_key_value(spec: str, *, flag: str) -> tuple[str, str]:
    """把 `KEY=VALUE` 拆成二元组，格式不对时给出可操作的报错。"""
    if "=" not in spec:
        raise SystemExit(f"Error: expected KEY=VALUE for {flag}, got: {spec}")
    k, v = spec.split("=", 1)
    if not k:
        raise SystemExit(f"Error: empty KEY in {flag}: {spec}")
    return k, v


def _parse_modifier(name: str, *, flag: str) -> Modifier:
    try:
        return Modifier(name.strip().lower())
    except ValueError:
        names = ", ".join(m.value for m in Modifier)
        raise SystemExit(
            f"Error: unknown modifier '{name}' in {flag}. Expected one of: {names}"
        ) from None


def _bool_from_str(s: str, *, flag: str) -> bool:
    """将常见布尔字符串（true/false/1/0 等）转换为 bool。"""
    v = s.strip().lower()
    if v in ("true", "1", "yes", "y"):
        return True
    if v in ("false", "0", "no", "n"):
        return False
    raise SystemExit(f"Error: invalid bool for {flag}: {s}")


def _log_step(message: str, *, verbose: bool) -> None:
    """输出简洁的流程阶段提示（stderr）。"""
    if verbose:
        print(f"[alfred-json] {message}", file=sys.stderr)


class _AppendModOption(argparse.Action):
    """所有 `--mod-*` 参数共用一个列表，记录 `(flag, spec)` 以保留出现顺序。"""

    def __call__(self, parser, namespace, values, option_string=None):
        items = list(getattr(namespace, self.dest, None) or [])
        items.append((self.option_strings[0], values))
        setattr(namespace, self.dest, items)


def _apply_mod_options(b: ItemBuilder, ns: argparse.Namespace) -> None:
    """把 `--mod-*` 参数按命令行中的出现顺序应用到构建器。"""
    for flag, spec in ns.mod_options:
        if flag == "--mod-var":
            # 形如 `MOD:KEY=VALUE`。
            if ":" not in spec:
                raise SystemExit(f"Error: expected MOD:KEY=VALUE for --mod-var, got: {spec}")
            name, rest = spec.split(":", 1)
            key, value = _split_key_value(rest, flag=flag)
            b.variable_mod(_parse_modifier(name, flag=flag), key, value)
            continue

        name, value = _split_key_value(spec, flag=flag)
        modifier = _parse_modifier(name, flag=flag)
        if flag == "--mod-subtitle":
            b.subtitle_mod(modifier, value)
        elif flag == "--mod-arg":
            b.arg_mod(modifier, value)
        elif flag == "--mod-valid":
            b.valid_mod(modifier, _bool_from_str(value, flag=flag))
        elif flag == "--mod-icon":
            b.icon_path_mod(modifier, value)
        else:
            raise RuntimeError(f"Unknown modifier option: {flag}")


def build_document(ns: argparse.Namespace) -> Document:
    """把解析后的参数整理成 `Document`。"""
    doc = Document()
    for spec in ns.global_var:
        k, v = _split_key_value(spec, flag="--global-var")
        doc.set_variable(k, v)

    if ns.title is None:
        return doc

    b = ItemBuilder(ns.title)
    if ns.subtitle is not None:
        b.subtitle(ns.subtitle)
    if ns.arg is not None:
        b.arg(ns.arg)
    if ns.uid is not None:
        b.uid(ns.uid)
    if ns.autocomplete is not None:
        b.autocomplete(ns.autocomplete)
    if ns.copy is not None:
        b.text_copy(ns.copy)
    if ns.largetype is not None:
        b.text_large_type(ns.largetype)
    if ns.quicklook_url is not None:
        b.quicklook_url(ns.quicklook_url)

    if ns.icon is not None:
        b.icon(IconPath(ns.icon))
    elif ns.icon_fileicon is not None:
        b.icon(FileIcon(ns.icon_fileicon))
    elif ns.icon_filetype is not None:
        b.icon(FileType(ns.icon_filetype))

    b.type(ItemType(ns.type))
    if ns.invalid:
        b.valid(False)

    for spec in ns.var:
        k, v = _split_key_value(spec, flag="--var")
        b.variable(k, v)
    _apply_mod_options(b, ns)

    doc.set_items([b.into_item()])
    return doc


def build_parser() -> argparse.ArgumentParser:
    """构建并返回 `alfred-json` 命令行参数解析器。"""
    p = argparse.ArgumentParser(
        prog="alfred-json",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "Write Alfred Script Filter JSON to stdout.\n"
            "Without TITLE an empty result list is written."
        ),
    )

    p.add_argument("title", nargs="?", default=None, help="Item title")
    p.add_argument("--subtitle", default=None, help="Item subtitle")
    p.add_argument("--arg", default=None, help="Argument passed to the next action")
    p.add_argument("--uid", default=None, help="Unique id used by Alfred for ordering")
    p.add_argument("--autocomplete", default=None, help="Text inserted on Tab")
    p.add_argument("--copy", default=None, help="Text copied with Cmd+C")
    p.add_argument("--largetype", default=None, help="Text shown with Cmd+L")
    p.add_argument("--quicklook-url", default=None, help="URL or path for Quick Look")

    icon = p.add_mutually_exclusive_group()
    icon.add_argument("--icon", default=None, metavar="PATH", help="Image file used as icon")
    icon.add_argument(
        "--icon-fileicon",
        default=None,
        metavar="PATH",
        help="Use the Finder icon of the file at PATH",
    )
    icon.add_argument(
        "--icon-filetype",
        default=None,
        metavar="UTI",
        help="Use the icon of a file type (e.g. public.folder)",
    )

    p.add_argument(
        "--type",
        default=ItemType.DEFAULT.value,
        choices=[t.value for t in ItemType],
        help="Item type (file types let Alfred treat the arg as a path)",
    )
    p.add_argument("--invalid", action="store_true", help="Mark the item as not actionable")

    p.add_argument("--var", action="append", default=[], metavar="KEY=VALUE",
                   help="Item variable (repeatable)")
    p.add_argument("--global-var", action="append", default=[], metavar="KEY=VALUE",
                   help="Top-level variable (repeatable)")

    mods = ", ".join(m.value for m in Modifier)
    p.add_argument("--mod-subtitle", action=_AppendModOption, dest="mod_options", default=[],
                   metavar="MOD=VALUE",
                   help=f"Subtitle while MOD is held ({mods})")
    p.add_argument("--mod-arg", action=_AppendModOption, dest="mod_options", default=[],
                   metavar="MOD=VALUE",
                   help="Argument while MOD is held")
    p.add_argument("--mod-valid", action=_AppendModOption, dest="mod_options", default=[],
                   metavar="MOD=BOOL",
                   help="Validity while MOD is held (true/false/1/0)")
    p.add_argument("--mod-icon", action=_AppendModOption, dest="mod_options", default=[],
                   metavar="MOD=PATH",
                   help="Icon image while MOD is held")
    p.add_argument("--mod-var", action=_AppendModOption, dest="mod_options", default=[],
                   metavar="MOD:KEY=VALUE",
                   help="Variable set when actioned with MOD held")

    p.add_argument("--verbose", action="store_true", help="Print progress to stderr")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口：解析参数、构建文档并写到 stdout。"""
    parser = build_parser()
    ns = parser.parse_args(argv)

    _log_step("Building document", verbose=ns.verbose)
    doc = build_document(ns)
    _log_step(
        f"Writing {len(doc.items)} item(s), {len(doc.variables)} variable(s)",
        verbose=ns.verbose,
    )
    doc.write(sys.stdout)
    return 0
