#!/usr/bin/env python3
"""
lcfront Parser Demo
===================

This script demonstrates how to use the lcfront parser to:
1. Parse a script into a canonical tree
2. Inspect the lowered `for` loop and compound assignments
3. Print the tree back as source
4. Collect diagnostics from a broken script

Usage:
    source .venv/bin/activate
    python examples/parse_demo.py
"""

from pathlib import Path

from lcfront import Frontend, FrontendOptions, format_program
from lcfront.lang import ASTPrinter


def main():
    # ==========================================================================
    # 1. Parse a script from disk
    # ==========================================================================

    script = Path(__file__).with_name("counter.lc")
    print(f"Parsing {script.name}...")
    result = Frontend().parse_file(script)
    print(f"  Declarations: {len(result.program.declarations)}")
    print(f"  Tokens: {result.token_count}")

    # ==========================================================================
    # 2. Dump the tree
    # ==========================================================================
    # No For, += or ++ nodes appear: they were lowered while parsing.

    print("\nSyntax tree:")
    print(ASTPrinter().print(result.program))

    # ==========================================================================
    # 3. Canonical source
    # ==========================================================================

    print("\nCanonical source:")
    print(format_program(result.program))

    # ==========================================================================
    # 4. Diagnostics
    # ==========================================================================
    # partial_ast=True returns errors instead of raising ParseFailure.

    broken = "let a = ; print a; 5 = 3; fn f() { return; }"
    frontend = Frontend(FrontendOptions(filename="broken.lc", partial_ast=True))
    result = frontend.parse_source(broken)

    print(f"\nDiagnostics for {broken!r}:")
    for diagnostic in result.diagnostics:
        print(f"  {diagnostic}")
    print(f"  Recovered declarations: {len(result.program.declarations)}")


if __name__ == "__main__":
    main()
