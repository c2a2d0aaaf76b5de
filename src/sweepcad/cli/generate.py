"""
Command-line interface for swept-volume model generation.
"""

import argparse
import logging
import sys
from pathlib import Path

from ..io.loaders import load_config_json, save_config_json
from ..io.presets import PRESETS, get_preset
from ..validation import Severity, validate_config

_SEVERITY_LABELS = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARNING",
    Severity.INFO: "info",
}


def _print_validation(result) -> None:
    if not result.messages:
        print("  No manufacturability issues found")
        return
    for msg in result.messages:
        stream = sys.stderr if msg.severity == Severity.ERROR else sys.stdout
        print(f"  {_SEVERITY_LABELS[msg.severity]} [{msg.code}] {msg.message}", file=stream)
        if msg.suggestion:
            print(f"      -> {msg.suggestion}", file=stream)


def _list_presets() -> None:
    print("Available models:")
    for name, config in PRESETS.items():
        print(f"  {name:<26} {config.kind.value:<9} -> {config.name}.stl")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate printable STL shells from parametric swept-volume models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List built-in models
  sweepcad-generate --list

  # Generate the baseline rocket engine and its cross-section
  sweepcad-generate rocket_engine -o out/

  # Shell only, no inspection slice
  sweepcad-generate fluid_manifold --no-section

  # Check a custom configuration without building geometry
  sweepcad-generate --config my_engine.json --validate-only

  # Start from a preset and keep its full configuration for editing
  sweepcad-generate functional_rocket_engine --save-json functional.json --validate-only
        """
    )

    parser.add_argument(
        'model',
        nargs='?',
        help='Built-in model name (see --list)'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='JSON configuration file (used instead of a built-in model)'
    )
    parser.add_argument(
        '-o', '--output-dir',
        type=str,
        default='.',
        help='Output directory (default: current directory)'
    )
    parser.add_argument(
        '--no-section',
        action='store_true',
        help='Do not write the cross-section STL'
    )
    parser.add_argument(
        '--save-json',
        type=str,
        metavar='FILE',
        help='Save the full configuration to a JSON file'
    )
    parser.add_argument(
        '--validate-only',
        action='store_true',
        help='Run manufacturability checks and exit without building geometry'
    )
    parser.add_argument(
        '--list',
        action='store_true',
        help='List built-in models and exit'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show debug logging'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only log warnings and errors'
    )

    args = parser.parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.list:
        _list_presets()
        return 0

    if args.model and args.config:
        parser.error("give either a model name or --config, not both")
    if not args.model and not args.config:
        parser.error("a model name or --config is required")

    # Load configuration
    try:
        if args.config:
            print(f"Loading configuration from {args.config}...")
            config = load_config_json(args.config)
        else:
            config = get_preset(args.model)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"\nModel: {config.name} ({config.kind.value})")

    if args.save_json:
        save_config_json(config, args.save_json)
        print(f"  Saved configuration: {args.save_json}")

    print("\nValidating...")
    result = validate_config(config)
    _print_validation(result)
    if not result.valid:
        print(f"Error: {len(result.errors)} validation error(s), not generating", file=sys.stderr)
        return 1

    if args.validate_only:
        return 0

    # Geometry imports pull in build123d/OCP
    from ..core.assembly import geometry_for
    from ..core.kernel import GeometryError
    from ..io.package import save_outputs

    print(f"\nGenerating {config.name}...")
    geometry = geometry_for(config)
    try:
        files = save_outputs(geometry, Path(args.output_dir), include_section=not args.no_section)
    except GeometryError as e:
        print(f"Error: geometry build failed: {e}", file=sys.stderr)
        return 1

    print(f"  Stages: {' '.join(geometry.build().stages)}")
    print(f"  Saved: {files.shell_stl}")
    if files.section_stl is not None:
        print(f"  Saved: {files.section_stl}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
