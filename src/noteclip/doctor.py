"""Diagnostic tool for verifying the noteclip installation."""

import sys
from importlib import import_module
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text


def check_dependency(
    module_name: str, package_name: Optional[str] = None, optional: bool = False
) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)
        optional: Whether this is an optional dependency

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        if optional:
            return False, f"[WARN] {display_name} (optional - not installed)"
        return False, f"[MISSING] {display_name}"


def check_html_conversion() -> tuple[bool, str]:
    """Convert a known HTML fragment and compare against the expected Markdown."""
    try:
        from .conversion.markdown import html_to_markdown

        result = html_to_markdown("<strong>ok</strong>")
    except Exception as e:
        return False, f"[FAIL] HTML to Markdown - {e}"

    if result != "**ok**":
        return False, f"[FAIL] HTML to Markdown - unexpected output {result!r}"
    return True, "[OK] HTML to Markdown"


def check_block_parsing() -> tuple[bool, str]:
    """Parse a known heading and check the resulting block."""
    try:
        from .blocks.parser import markdown_to_blocks
        from .models.blocks import BlockType

        blocks = markdown_to_blocks("# ok")
    except Exception as e:
        return False, f"[FAIL] Markdown to blocks - {e}"

    if len(blocks) != 1 or blocks[0].type != BlockType.HEADING_1 or blocks[0].plain_text != "ok":
        return False, "[FAIL] Markdown to blocks - unexpected blocks"
    return True, "[OK] Markdown to blocks"


def run_doctor(console: Optional[Console] = None) -> int:
    """
    Run diagnostic checks and display results.

    Returns:
        Exit code (0 if all core checks pass, 1 otherwise)
    """
    console = console or Console()
    console.print("Running noteclip diagnostics...\n")

    core_checks = [
        ("bs4", "beautifulsoup4"),
        ("markdown_it", "markdown-it-py"),
        ("pydantic", "pydantic"),
        ("rich", "rich"),
    ]
    optional_checks = [
        ("yaml", "pyyaml", True),
    ]

    core_results = [check_dependency(mod, pkg) for mod, pkg in core_checks]
    optional_results = [check_dependency(mod, pkg, opt) for mod, pkg, opt in optional_checks]
    conversion_results = [check_html_conversion(), check_block_parsing()]

    all_checks = {
        "Core Dependencies": core_results,
        "Optional Dependencies": optional_results,
        "Conversion": conversion_results,
    }

    for category, results in all_checks.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in results:
            style = "green" if success else ("yellow" if "optional" in message else "red")
            table.add_row(Text(message), style=style)

        console.print(table)
        console.print()

    core_failed = any(not success for success, _ in core_results + conversion_results)

    if core_failed:
        console.print("WARNING: Some core checks failed!", markup=False)
        console.print("\nRecommended fixes:")
        console.print("  1. For pip users: pip install --upgrade --force-reinstall noteclip")
        console.print("  2. For development: pip install -e .[dev]", markup=False)
        return 1

    console.print("All core dependencies installed correctly!")
    if any(not success for success, _ in optional_results):
        console.print("\nOptional features available:")
        console.print("  - YAML config support: pip install noteclip[yaml]", markup=False)
    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
