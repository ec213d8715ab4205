"""
Main entry point for the cargo-features CLI when run as a module.

This allows the CLI to be executed using:
    python -m cargo_features.cli features ...

or the equivalent ``cargo features ...`` plugin invocation.
"""

from . import main

if __name__ == '__main__':
    main()
