import argparse
import sys
from pathlib import Path


def _add_backend_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    backend_root = repo_root / "backend"
    if str(backend_root) not in sys.path:
        sys.path.insert(0, str(backend_root))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Print the layer tree of a document and the layers kept per artboard."
    )
    parser.add_argument("document", help="文档文件（YAML/JSON）")
    parser.add_argument(
        "--artboard",
        type=int,
        default=0,
        help="只看第N个画板（1起；默认：全部）",
    )
    args = parser.parse_args()

    _add_backend_to_path()
    from artboard_export.adapters import FileDocument  # type: ignore
    from artboard_export.interfaces import DocumentLoadError  # type: ignore
    from artboard_export.visibility import visibility_scope, walk_layers  # type: ignore
    from artboard_export.visibility.resolver import resolve_entries  # type: ignore

    try:
        document = FileDocument.open(args.document)
    except DocumentLoadError as exc:
        print(f"ERROR {exc}")
        return 1

    entries = walk_layers(document.list_layers_tree())
    print(f"{document.name}: artboards={len(document.list_artboards())} layers={len(entries)}")
    for entry in entries:
        mark = "x" if entry.layer.visible else " "
        print(f"  [{mark}] {'  ' * entry.depth}{entry.layer.name} ({len(entry.layer.items)} items)")

    for artboard in document.list_artboards():
        if args.artboard and artboard.index != args.artboard - 1:
            continue
        try:
            rect = artboard.rect
        except Exception as exc:  # noqa: BLE001
            print(f"#{artboard.index + 1} {artboard.display_name}: ERROR {exc}")
            continue
        shown: list[str] = []
        with visibility_scope(entries):
            results = resolve_entries(entries, rect)
            shown = [e.layer.name for e, r in zip(entries, results) if r]
        print(f"#{artboard.index + 1} {artboard.display_name}: shown={shown}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
