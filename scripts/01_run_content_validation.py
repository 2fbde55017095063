import argparse
import os
import sys

import yaml

from data_acquisition.document_loader import DocumentReadError
from processing.coverage_validator import CoverageValidator
from processing.report_writer import EXIT_FATAL, report
from utils.config_helpers import ConfigManager

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that every documentation chapter exists and covers its required concepts."
    )
    parser.add_argument("--config", default="config/settings.yaml", help="Settings file, relative to the project root.")
    parser.add_argument("--docs-root", help="Documentation root, relative to the current directory (overrides settings and CONTENT_DOCS_ROOT).")
    parser.add_argument("--registry", help="Chapter registry YAML, relative to the current directory (overrides settings and CONTENT_REGISTRY_PATH).")
    parser.add_argument(
        "--chapter",
        action="append",
        default=[],
        help="Only validate this chapter id. May be repeated.",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar.")
    return parser

def main(argv=None) -> int:
    """Loads configuration, validates all chapters and returns the exit code."""
    args = build_parser().parse_args(argv)

    try:
        # 1. Initialize configuration
        cfg_manager = ConfigManager(config_filename=args.config)
        section = cfg_manager.config['content_validation']
        if args.docs_root:
            section['docs_root'] = os.path.abspath(args.docs_root)
        if args.registry:
            section['registry_path'] = os.path.abspath(args.registry)
        if args.no_progress:
            section['show_progress'] = False

        # 2. Validate every chapter
        validator = CoverageValidator(cfg_manager, chapter_ids=args.chapter)
        print(f"Running content validation against {validator.docs_root}...\n")
        run_report = validator.run_pipeline()

    except (DocumentReadError, ValueError, yaml.YAMLError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        return EXIT_FATAL

    # 3. Report and hand the verdict back to the build
    print()
    return report(run_report)

if __name__ == "__main__":
    sys.exit(main())
