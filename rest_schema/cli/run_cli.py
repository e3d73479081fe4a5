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

"""CLI entry point for validating payloads and describing schemas."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

import yaml

from ..config import config
from ..exceptions import SchemaDefinitionError, ValidationError
from ..file_io.template_renderer import TemplateRenderer
from ..models.description_loader import load_schema_file
from ..models.parsing.schema_parser import schema_parser
from ..models.schema import Schema
from .report import ValidationReport

logger = logging.getLogger(__name__)


def validate_files(schema: Schema, data_files: List[str]) -> List[ValidationReport]:
    """Validate each data file against ``schema``; one report per file."""
    reports = []
    for data_file in data_files:
        report = ValidationReport(Path(data_file))
        try:
            schema.validate_data(schema_parser.load_document(data_file))
        except ValidationError as e:
            report.add_error(e.message, property=e.property)
        except SchemaDefinitionError as e:
            report.add_error(f"Failed to load data file: {e}")
        reports.append(report)
    return reports


def _print_reports(reports: List[ValidationReport], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'files': len(reports),
            'errors': sum(len(r.errors) for r in reports),
            'results': [r.to_dict() for r in reports],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for report in reports:
            for error in report.errors:
                print(f"::error file={report.file_path}::{error['message']}")
    else:  # human-readable
        for report in reports:
            if report.ok:
                print(f"{report.file_path}: OK")
                continue
            print(f"{report.file_path}:")
            for error in report.errors:
                print(f"  ERROR: {error['message']}")


def _run_validate(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema)
    reports = validate_files(schema, args.data)
    _print_reports(reports, args.format)

    total_errors = sum(len(r.errors) for r in reports)
    if total_errors > 0:
        return 1
    if args.format == 'human':
        print("Validation succeeded with no errors.")
    return 0


def _run_describe(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema)
    description = schema.describe_schema()

    if args.format == 'yaml':
        print(yaml.safe_dump(description, sort_keys=False), end="")
    elif args.format == 'markdown':
        title = args.title or Path(args.schema).stem
        print(TemplateRenderer().render_schema_reference(description, title=title), end="")
    else:
        print(json.dumps(description, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rest_schema',
        description='Validate payloads against schema descriptions and describe schemas',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    validate_parser = subparsers.add_parser('validate', help='Validate JSON/YAML data files against a schema')
    validate_parser.add_argument('schema', help='Schema description file (YAML or JSON)')
    validate_parser.add_argument('data', nargs='+', help='Data files to validate (YAML or JSON)')
    validate_parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    validate_parser.set_defaults(run=_run_validate)

    describe_parser = subparsers.add_parser('describe', help='Print the structural description of a schema')
    describe_parser.add_argument('schema', help='Schema description file (YAML or JSON)')
    describe_parser.add_argument(
        '--format',
        choices=['json', 'yaml', 'markdown'],
        default='json',
        help='Output format (default: json)',
    )
    describe_parser.add_argument('--title', default=None, help='Title of the markdown reference')
    describe_parser.set_defaults(run=_run_describe)

    return parser


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the CLI."""
    config.set_logging()
    args = build_parser().parse_args(argv)

    try:
        exit_code = args.run(args)
    except SchemaDefinitionError as e:
        logger.error(str(e))
        sys.exit(2)
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
