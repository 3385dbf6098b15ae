"""Main entry point for aligncheck."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .application import AlignmentChecker, format_report, render_json
from .domain.models.layout import Finding
from .domain.services.analysis import total_savings
from .infrastructure.config import FORMAT_CHOICES, SORT_CHOICES, Config
from .infrastructure.logging import LoggerSetup, get_logger, log_timing


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="aligncheck",
        description="Report structs whose size could shrink by reordering their fields, "
        "using DWARF debug information from ELF files",
        epilog="""
Examples:
  # Check every struct in a binary
  aligncheck build/app.elf

  # Show the recommended field order for each finding
  aligncheck build/app.elf -v

  # Check selected structs only
  aligncheck build/app.elf --struct Packet,net::Header

  # Biggest savings first, as JSON
  aligncheck build/app.elf --sort savings --format json

  # Using .env file for configuration
  echo 'ELF_FILE_PATH=build/app.elf' > .env
  aligncheck
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "elf_files",
        type=Path,
        nargs="*",
        help="ELF files to check (optional if ELF_FILE_PATH is set)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Output the recommended field order for each finding",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logs on stderr",
    )
    parser.add_argument(
        "--max-align",
        type=int,
        metavar="N",
        help="Override the platform maximum alignment (default: detected from the ELF)",
    )
    parser.add_argument(
        "--struct",
        type=str,
        metavar="NAMES",
        help="Only check the given structs. Supports comma-separated list: 'Packet,Header'",
    )
    parser.add_argument(
        "--sort",
        choices=SORT_CHOICES,
        help="Order of findings (default: location)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=FORMAT_CHOICES,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Directory for log files (default: ./logs)",
    )
    return parser.parse_args(argv)


def collect_findings(config: Config) -> list[Finding]:
    """Check every configured ELF file.

    Raises:
        Any error from opening or analysing a file
    """
    logger = get_logger(__name__)
    findings: list[Finding] = []
    for elf_file_path in config.elf_file_paths:
        with AlignmentChecker(
            elf_file_path,
            max_align=config.max_align,
            record_names=config.struct_names,
        ) as checker:
            file_findings = checker.check()
        logger.info(f"{elf_file_path}: {len(file_findings)} finding(s)")
        findings.extend(file_findings)
    return findings


@log_timing
def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point: print findings and exit 1 if there are any."""
    args = parse_args(argv)

    try:
        struct_names = (
            [s.strip() for s in args.struct.split(",") if s.strip()] if args.struct else None
        )
        config = Config.from_args(
            elf_file_paths=args.elf_files,
            verbose=args.verbose,
            debug=args.debug,
            max_align=args.max_align,
            struct_names=struct_names,
            sort_by=args.sort,
            output_format=args.output_format,
            log_dir=args.log_dir,
        )
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    LoggerSetup.initialize(config.log_dir, debug=config.debug)
    logger = get_logger(__name__)
    logger.debug(f"ELF files: {', '.join(str(p) for p in config.elf_file_paths)}")

    try:
        findings = collect_findings(config)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        if config.debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    if config.output_format == "json":
        print(render_json(findings, sort_by=config.sort_by))
    else:
        for line in format_report(findings, verbose=config.verbose, sort_by=config.sort_by):
            print(line)

    logger.info(
        f"{len(findings)} finding(s), {total_savings(findings)} byte(s) could be saved"
    )
    sys.exit(1 if findings else 0)


if __name__ == "__main__":
    main()
