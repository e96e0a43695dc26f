#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""CLI entry point for validating workflow / schema / payload document sets."""

import argparse
import json
import sys
from dataclasses import replace
from typing import List

from ..config import validator_config
from ..exceptions import RootNotFoundError
from ..file_io.json_loader import JsonLoader
from ..file_io.schema_injector import write_injected_workflow
from .report import ValidationReport
from .runner import ValidationRunner


def print_summary(report: ValidationReport) -> None:
    print("\n=== Validation Summary ===")
    print(f"Total Workflow Sets: {report.total_sets}")
    print(f"Passed: {len(report.passed_sets)}")
    print(f"Failed: {len(report.failed_sets)}")
    print(f"Errors: {len(report.errors)}")
    print(f"Warnings: {len(report.warnings)}")

    if report.errors:
        print("\nErrors:")
        for error in report.errors:
            print(f"  - {error.message}")
    if report.warnings:
        print("\nWarnings:")
        for warning in report.warnings:
            print(f"  - {warning.message}")


def print_github_annotations(report: ValidationReport) -> None:
    for result in report.set_results:
        for error in result.errors:
            file_path = error.location.file_path if error.location and error.location.file_path else result.doc_set.workflow_path
            line = error.location.line if error.location and error.location.line else 1
            print(f"::error file={file_path},line={line}::{error.message}")
        for warning in result.warnings:
            file_path = warning.location.file_path if warning.location and warning.location.file_path else result.doc_set.workflow_path
            line = warning.location.line if warning.location and warning.location.line else 1
            print(f"::warning file={file_path},line={line}::{warning.message}")
    for entry in report.run_entries:
        print(f"::{entry.severity.value}::{entry.message}")


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the validator CLI."""
    parser = argparse.ArgumentParser(
        description='Validate workflow definitions against their input schemas and sample payloads',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'root',
        nargs='?',
        default=None,
        help=f'Directory to scan for workflow sets (default: {validator_config.root})',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '-j', '--jobs',
        type=int,
        default=None,
        help=f'Number of document sets validated in parallel (default: {validator_config.jobs})',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help=f'Logging level (default: {validator_config.log_level})',
    )
    parser.add_argument(
        '--inject-dir',
        default=None,
        help='Write each passing workflow with its schema embedded into this directory',
    )

    args = parser.parse_args(argv)

    config = replace(
        validator_config,
        root=args.root or validator_config.root,
        jobs=args.jobs if args.jobs is not None else validator_config.jobs,
        log_level=args.log_level or validator_config.log_level,
    )
    if args.format != 'human':
        # Keep stdout for the machine-readable report
        config = replace(config, log_level='WARNING', print_level='WARNING')
    logger = config.set_logging()

    loader = JsonLoader(cache_enabled=config.cache_enabled)
    runner = ValidationRunner(loader=loader, jobs=config.jobs)

    try:
        report = runner.run(config.root)
    except RootNotFoundError as exc:
        logger.error(f"{exc}")
        sys.exit(1)

    if args.inject_dir:
        for result in report.passed_sets:
            write_injected_workflow(result.doc_set.workflow_path, args.inject_dir, loader)

    if args.format == 'json':
        print(json.dumps(report.to_dict(), indent=2))
    elif args.format == 'github-actions':
        print_github_annotations(report)
    else:
        print_summary(report)

    sys.exit(0 if report.passed else 1)


if __name__ == '__main__':
    main()
