"""
Build script for tagparser with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    TAGPARSER_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import setup

USE_MYPYC = os.environ.get("TAGPARSER_USE_MYPYC", "0") == "1"

# Modules whose code runs once per tag or per text fragment:
#   tokenizer.py  the finditer loop over every tag, and ascii_lower on every name
#   tokens.py     one TagRecord is constructed per tag
#   entities.py   xml_unescape runs on every attribute value and inner text
# element.py and document.py stay interpreted: their work is dominated by the
# regex engine and property access, query predicates are closures, and both
# rely on TYPE_CHECKING-only imports.
MYPYC_MODULES = [
    "src/tagparser/tokenizer.py",
    "src/tagparser/tokens.py",
    "src/tagparser/entities.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print("ERROR: mypyc is not installed. Install with: pip install mypy", file=sys.stderr)
        sys.exit(1)

    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print(f"Compiling {len(MYPYC_MODULES)} modules with mypyc:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")

    mypyc_options = {
        "opt_level": os.environ.get("MYPYC_OPT_LEVEL", "3"),
        "debug_level": os.environ.get("MYPYC_DEBUG_LEVEL", "0"),
        "separate": False,
        "multi_file": False,
    }
    return mypycify(MYPYC_MODULES, **mypyc_options)


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building tagparser in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: TAGPARSER_USE_MYPYC=1 pip install .")

    setup(
        ext_modules=ext_modules,
    )
