#!/usr/bin/env python3
"""Build compose2systemd.py — single-file distribution of the package."""

import argparse
import ast
import subprocess
import sys
from pathlib import Path

HERE = Path(__file__).parent
SRC_DIR = HERE / "src" / "compose2systemd"
OUTPUT = HERE / "compose2systemd.py"

# Concatenation order respects the import graph
MODULES = [
    "pacts/types.py",
    "pacts/helpers.py",
    "core/constants.py",
    "core/ports.py",
    "core/pods.py",
    "core/firewall.py",
    "core/args.py",
    "core/units.py",
    "core/generate.py",
    "io/config.py",
    "io/output.py",
    "cli.py",
]

PACKAGE = "compose2systemd"

THIRD_PARTY_MODULES = {"yaml"}

SHEBANG = "#!/usr/bin/env python3\n"
DOCSTRING = '"""compose2systemd — turn compose pod definitions into systemd units + firewall allow-lists."""\n'


def _is_internal(node: ast.stmt) -> bool:
    """True for imports of this package, absolute or relative."""
    if isinstance(node, ast.ImportFrom):
        return node.level > 0 or (node.module or "").split(".")[0] == PACKAGE
    return any(alias.name.split(".")[0] == PACKAGE for alias in node.names)


def _is_main_guard(node: ast.stmt) -> bool:
    test = getattr(node, "test", None)
    return (isinstance(node, ast.If) and isinstance(test, ast.Compare)
            and isinstance(test.left, ast.Name) and test.left.id == "__name__")


def collect_imports_and_body(path: Path) -> tuple[list[str], list[str]]:
    """Split a module into external imports and body lines.

    Works on top-level statements: the module docstring, imports of this
    package and the ``if __name__ == "__main__"`` guard are dropped. Kept
    imports come back as one normalized line each, so a parenthesized
    import in one module dedupes against the same import elsewhere.
    """
    source = path.read_text(encoding="utf-8")
    lines = source.splitlines(keepends=True)
    tree = ast.parse(source, filename=str(path))

    imports = []
    skipped: set[int] = set()
    for i, node in enumerate(tree.body):
        is_docstring = (i == 0 and isinstance(node, ast.Expr)
                        and isinstance(node.value, ast.Constant)
                        and isinstance(node.value.value, str))
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            if not _is_internal(node):
                imports.append(ast.unparse(node) + "\n")
        elif not is_docstring and not _is_main_guard(node):
            continue
        skipped.update(range(node.lineno - 1, node.end_lineno))

    body = [line for n, line in enumerate(lines) if n not in skipped]
    return imports, body


def bundle(src_dir: Path = SRC_DIR, modules=None) -> str:
    """Concatenate *modules* under *src_dir* into one script's text."""
    all_imports: dict[str, str] = {}
    all_bodies: list[str] = []

    for mod_path in modules or MODULES:
        full_path = src_dir / mod_path
        if not full_path.exists():
            raise FileNotFoundError(full_path)
        imports, body = collect_imports_and_body(full_path)
        for imp in imports:
            key = imp.strip()
            if key and key not in all_imports:
                all_imports[key] = imp
        section = mod_path.replace(".py", "").replace("/", ".")
        all_bodies.append(f"\n# --- {section} ---\n")
        all_bodies.extend(body)

    stdlib_imports = []
    thirdparty_imports = []
    for imp in all_imports.values():
        module = imp.strip().split()[1].split(".")[0]
        if module in THIRD_PARTY_MODULES:
            thirdparty_imports.append(imp)
        else:
            stdlib_imports.append(imp)

    lines = [SHEBANG, DOCSTRING, "\n"]
    lines.extend(sorted(stdlib_imports))
    if thirdparty_imports:
        lines.append("\n")
        lines.extend(sorted(thirdparty_imports))
    lines.append("\n")
    lines.extend(all_bodies)

    lines.append('\n\nif __name__ == "__main__":\n')
    lines.append("    main()\n")
    return "".join(lines)


def smoke_test(output: Path) -> None:
    """Run the built script with --help; exit on failure."""
    result = subprocess.run(
        [sys.executable, str(output), "--help"],
        capture_output=True, text=True,
    )
    if result.returncode != 0:
        print(f"Smoke test FAILED:\n{result.stderr}", file=sys.stderr)
        sys.exit(1)
    print("Smoke test passed (--help)")


def main():
    parser = argparse.ArgumentParser(description="Build compose2systemd.py distribution")
    parser.add_argument("--output", type=Path, default=OUTPUT,
                        help=f"Output path (default: {OUTPUT.name})")
    parser.add_argument("--no-smoke-test", action="store_true",
                        help="Skip running the built script with --help")
    args = parser.parse_args()

    try:
        text = bundle()
    except FileNotFoundError as exc:
        print(f"Error: {exc} not found", file=sys.stderr)
        sys.exit(1)
    args.output.write_text(text, encoding="utf-8")
    print(f"Built {args.output} ({sum(1 for l in text.splitlines() if l.strip())} non-empty lines)")

    if not args.no_smoke_test:
        smoke_test(args.output)


if __name__ == "__main__":
    main()
