#!/usr/bin/env python3
"""
gitignore-check - ask whether paths are excluded by their nearest .gitignore

Commands:
- check: report ignored paths (exit codes follow `git check-ignore`)
- validate: show how the .gitignore in a directory was compiled
- walk: list every non-ignored path below a directory
"""

import argparse
import os
import sys
from typing import List, Optional

from gitignore_resolver import __version__
from gitignore_resolver.ignore import (
    EntryKind,
    IgnoreError,
    IgnoreResolver,
    ResolverConfig,
    compare_with_git,
)
from gitignore_resolver.utils import configure_logging, get_logger

logger = get_logger('gitignore-check')


class GitignoreCLI:
    """Command line front end for IgnoreResolver"""

    def __init__(self, resolver: Optional[IgnoreResolver] = None):
        self.resolver = resolver or IgnoreResolver(config=ResolverConfig.from_env())

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser"""
        parser = argparse.ArgumentParser(
            prog='gitignore-check',
            description='Check paths against the nearest .gitignore file',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self.get_usage_examples()
        )
        parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
        parser.add_argument('--log-level', default=None,
                            help='TRACE, DEBUG, INFO, WARNING or ERROR')

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        check_parser = subparsers.add_parser('check', help='Check whether paths are ignored')
        check_parser.add_argument('paths', nargs='+', help='Paths to check')
        check_parser.add_argument('--kind', choices=[k.value for k in EntryKind],
                                  default=EntryKind.AUTO.value,
                                  help='Treat paths as files or directories (default: stat them)')
        check_parser.add_argument('-v', '--verbose', action='store_true',
                                  help='Print every verdict with the deciding pattern')
        check_parser.add_argument('--compare-git', action='store_true',
                                  help="Also show git's own verdict for each path")

        validate_parser = subparsers.add_parser('validate',
                                                help='Show how a .gitignore file compiles')
        validate_parser.add_argument('directory', nargs='?', default='.',
                                     help='Directory containing the .gitignore (default: .)')

        walk_parser = subparsers.add_parser('walk', help='List non-ignored paths')
        walk_parser.add_argument('root', nargs='?', default='.',
                                 help='Directory to walk (default: .)')

        return parser

    def get_usage_examples(self) -> str:
        """Get usage examples for help text"""
        return """
Examples:
  gitignore-check check build/out.o        # Prints the path if it is ignored
  gitignore-check check -v src/ dist/      # Show every verdict and the deciding pattern
  gitignore-check check --kind directory logs
  gitignore-check validate .               # Report invalid and skipped lines
  gitignore-check walk .                   # List everything that is not ignored

Environment Variables:
  GITIGNORE_RESOLVER_FILENAME       Ignore file name (default: .gitignore)
  GITIGNORE_RESOLVER_MAX_FILE_SIZE  Largest ignore file read, in bytes
  GITIGNORE_RESOLVER_LOG_LEVEL      Log level
  GITIGNORE_RESOLVER_LOG_JSON       Emit JSON log lines
"""

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point"""
        parser = self.build_parser()
        args = parser.parse_args(argv)

        configure_logging(args.log_level)

        if not args.command:
            parser.print_help()
            return 0

        handler = getattr(self, f'cmd_{args.command}')
        try:
            return handler(args)
        except IgnoreError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    # Command handlers
    def cmd_check(self, args: argparse.Namespace) -> int:
        """Handle check command; 0 if any path is ignored, 1 if none"""
        any_ignored = False
        for path in args.paths:
            if args.compare_git:
                report = compare_with_git(self.resolver, path, args.kind)
                result = report.result
            else:
                report = None
                result = self.resolver.resolve(path, args.kind)

            any_ignored = any_ignored or result.ignored

            if args.verbose:
                print(self._format_verdict(path, result))
            elif result.ignored:
                print(path)

            if report is not None and report.git_ignored is not None:
                marker = 'agrees' if report.agrees else 'DIFFERS'
                verdict = 'ignored' if report.git_ignored else 'not ignored'
                print(f"  git: {verdict} ({marker})")

        return 0 if any_ignored else 1

    def cmd_validate(self, args: argparse.Namespace) -> int:
        """Handle validate command; 1 if any line failed to compile"""
        directory = os.path.abspath(args.directory)
        ignore_path = os.path.join(directory, self.resolver.ignore_filename)
        if not self.resolver.filesystem.exists(ignore_path):
            print(f"No {self.resolver.ignore_filename} in {directory}", file=sys.stderr)
            return 2

        compiled = self.resolver.load(directory)
        stats = compiled.stats
        print(f"{ignore_path}")
        print(f"  lines: {stats['total_lines']}  patterns: {stats['pattern_lines']}  "
              f"comments: {stats['comment_lines']}  empty: {stats['empty_lines']}  "
              f"skipped: {stats['invalid_lines']}")
        print(f"  rules: {len(compiled.rules)}")

        for error in compiled.errors:
            print(f"  error   line {error.line}: {error.pattern!r}: {error.message}")
        for warning in compiled.warnings:
            print(f"  warning line {warning.line}: {warning.pattern!r}: {warning.message}")

        return 0 if compiled.is_valid else 1

    def cmd_walk(self, args: argparse.Namespace) -> int:
        """Handle walk command"""
        root = os.path.abspath(args.root)
        for path in self.resolver.walk(root):
            print(os.path.relpath(path, root))
        return 0

    @staticmethod
    def _format_verdict(path: str, result) -> str:
        if result.ignore_file is None:
            return f"{path}: not ignored (no ignore file)"
        if result.negated_by is not None:
            return (f"{path}: not ignored "
                    f"({result.ignore_file}:{result.negated_by.line}: {result.negated_by.pattern})")
        if result.matched_rule is not None:
            return (f"{path}: ignored "
                    f"({result.ignore_file}:{result.matched_rule.line}: {result.matched_rule.pattern})")
        return f"{path}: not ignored"


def main():
    """Main entry point"""
    cli = GitignoreCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
