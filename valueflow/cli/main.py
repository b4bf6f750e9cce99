"""Main CLI entry point for ValueFlow"""

import sys
import argparse
import traceback
from pathlib import Path
from typing import Tuple

try:
    from luaparser.ast import SyntaxException
except ImportError:
    print("Error: luaparser is required. Install with: pip install luaparser", file=sys.stderr)
    sys.exit(1)

from valueflow.analyzers.analyzer import Analyzer, UnsupportedAssignmentTarget
from valueflow.analyzers.diagnostics_logger import DiagnosticLogger
from valueflow.core.scope import Scope
from valueflow.frontend.lua_adapter import parse_file
from valueflow.generators.scope_report import ScopeReportGenerator


def analyze_file(input_file: Path, verbose: bool = False) -> Tuple[Scope, DiagnosticLogger]:
    """Analyze a single Lua file

    Args:
        input_file: Path to Lua source file
        verbose: If True, diagnostics summaries include skipped statements

    Returns:
        Tuple of (global scope, diagnostics logger)

    Raises:
        FileNotFoundError: If input_file doesn't exist
        SyntaxException: If Lua source has invalid syntax
        UnsupportedAssignmentTarget: If an assignment target is not a variable
    """
    statements = parse_file(input_file)
    logger = DiagnosticLogger(verbose=verbose)
    scope = Analyzer(logger=logger).analyze(statements)
    return scope, logger


def main() -> None:
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description='ValueFlow - infer variable and parameter values of a Lua program',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  valueflow script.lua
  valueflow script.lua --verbose
        """
    )

    parser.add_argument('input', type=Path, help='Input Lua file')
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Report skipped statements and dropped writes'
    )

    args = parser.parse_args()

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        sys.exit(1)

    try:
        scope, logger = analyze_file(input_file, verbose=args.verbose)
    except SyntaxException as e:
        print(f"Error parsing {input_file}: {e}", file=sys.stderr)
        sys.exit(1)
    except UnsupportedAssignmentTarget as e:
        print(f"Error analyzing {input_file}: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        print(f"Error analyzing {input_file}:", file=sys.stderr)
        traceback.print_exc()
        sys.exit(1)

    print(ScopeReportGenerator().generate(scope))

    if logger.warnings or args.verbose:
        print(logger.print_summary(), file=sys.stderr)


if __name__ == '__main__':
    main()
