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

"""CLI entry point for validating course directories and generating READMEs."""

import argparse
import json
import logging
import sys
from typing import List

from . import __version__
from .config import validator_config
from .exceptions import BootcsSchemaError
from .generator import ReadmeGenerator
from .validator import CourseValidator

logger = logging.getLogger(__name__)

COMMANDS = ("validate", "generate")
ROOT_FLAGS = ("-h", "--help", "--version")


def run_validate(args: argparse.Namespace) -> int:
    verbose = args.verbose or validator_config.verbose
    result = CourseValidator(verbose=verbose).validate_course(args.course_dir)

    if args.format == 'json':
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        for message in result.messages:
            print(message)

    if not result.valid:
        print(f"validation failed with {result.error_count} errors", file=sys.stderr)
        return 1

    if args.format == 'human':
        print(f"\n✅ All validations passed! ({result.stage_count} stages checked)")
    return 0


def run_generate(args: argparse.Namespace) -> int:
    generator = ReadmeGenerator(args.course_dir)
    if args.dry_run:
        sys.stdout.write(generator.generate_readme())
        return 0

    output = generator.write_readme(args.output)
    print(f"✅ Generated {output}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='schema-tool',
        description='Validate bootcs course and stage configurations against the bundled schemas, '
                    'check additional course rules and generate README documentation.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    validate = subparsers.add_parser('validate', help='Validate course.yml and every stage directory')
    validate.add_argument('course_dir', nargs='?', default='.', help='Course directory (default: current directory)')
    validate.add_argument('-v', '--verbose', action='store_true', help='Also report passing document length checks')
    validate.add_argument(
        '--format',
        choices=['human', 'json'],
        default='human',
        help='Output format (default: human)',
    )
    validate.set_defaults(func=run_validate)

    generate = subparsers.add_parser(
        'generate',
        help='Generate README documentation from course/stages',
        description='Generate a README.md file with course information and a stages table.\n\n'
                    'Examples:\n'
                    '  schema-tool generate .\n'
                    '  schema-tool generate /path/to/course --output README.md\n'
                    '  schema-tool generate . --dry-run',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    generate.add_argument('course_dir', nargs='?', default='.', help='Course directory (default: current directory)')
    generate.add_argument('-o', '--output', default=None, help='Output file path (default: course-dir/README.md)')
    generate.add_argument('--dry-run', action='store_true', help='Print to stdout instead of writing the file')
    generate.set_defaults(func=run_generate)

    return parser


def with_default_command(argv: List[str]) -> List[str]:
    """Run `validate` when no subcommand is given, e.g. `schema-tool path/to/course`."""
    if argv and (argv[0] in COMMANDS or argv[0] in ROOT_FLAGS):
        return argv
    return ["validate", *argv]


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the schema-tool CLI."""
    argv = sys.argv[1:] if argv is None else list(argv)
    args = build_parser().parse_args(with_default_command(argv))
    validator_config.set_logging()

    try:
        code = args.func(args)
    except BootcsSchemaError as e:
        logger.error(str(e))
        code = 1
    sys.exit(code)


if __name__ == '__main__':
    main()
