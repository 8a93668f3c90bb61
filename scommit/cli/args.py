"""CLI Argument Parsing"""

import argparse
import argcomplete

from scommit import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='scommit',
        description='Generate a commit message for the staged changes',
        epilog='Example: scommit (prints the message and copies it to the clipboard)'
    )

    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')

    # Generation options
    parser.add_argument('-m', '--message', type=str, metavar='SUBJECT', help='Use this subject; the generated body is kept')
    parser.add_argument('--no-ai', action='store_true', help='Skip AI generation even if ANTHROPIC_API_KEY is set')
    parser.add_argument('--model', type=str, metavar='MODEL', help='Model name (default: SCOMMIT_MODEL or config)')
    parser.add_argument('--timeout', type=float, metavar='SECONDS', help='AI request timeout in seconds')

    # Output options
    parser.add_argument('--no-copy', action='store_true', help='Print message only, do not copy to clipboard')
    parser.add_argument('--verbose', action='store_true', help='Show debug logging (generation path, AI failures)')

    # Setup/config
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--init-config', action='store_true', help='Write a .scommitrc with defaults to the current directory')

    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)
