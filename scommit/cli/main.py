"""CLI Main Entry Point"""

import sys

from scommit.config import load_config, resolve_settings
from scommit.git import GitAnalyzer, GitError, StagedChangeSet
from scommit.logging_config import configure_logging
from scommit.message import CommitMessage, GenerationPath, InvalidInput, MessageGenerator
from scommit.output import CHECK, RULE, Spinner, bold, colorize_prefix, dim, info, print_error, success, warning

from scommit.cli.args import parse_args
from scommit.cli.commands import display_config, init_config
from scommit.cli.utils import copy_to_clipboard


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.display_config:
        return display_config(), True
    if args.init_config:
        return init_config(), True
    return 0, False


def _read_repository(recent_count):
    """Staged changes and recent subjects, or (None, []) after reporting an error."""
    try:
        analyzer = GitAnalyzer()
        changes = analyzer.get_staged_changes()
    except GitError as e:
        print_error(str(e))
        return None, []

    if changes.is_empty:
        print_error("No staged changes. Run 'git add' first.")
        return None, []

    return changes, analyzer.get_recent_subjects(recent_count)


def _display_file_summary(changes: StagedChangeSet) -> None:
    print(
        f"{bold('Staged changes:')} {changes.total_files} file(s), "
        f"{success(f'+{changes.total_additions}')} {warning(f'-{changes.total_deletions}')}"
    )


def _display_message(message: CommitMessage) -> None:
    """Display commit message with horizontal rules and colored prefix."""
    colored = colorize_prefix(message.text)
    lines = colored.split('\n')
    # Use raw message for width calculation (no ANSI codes)
    width = max((len(line) for line in message.text.split('\n')), default=40)
    print(f"\n{dim(RULE * width)}")
    print(bold(lines[0]))
    for line in lines[1:]:
        print(line)
    print(dim(RULE * width))


def _copy_and_report(message: CommitMessage, no_copy: bool) -> None:
    if no_copy:
        return
    copied, reason = copy_to_clipboard(message.text)
    if copied:
        print(f"{success(CHECK)} Copied to clipboard!")
    else:
        print(f"{warning('!')} Could not copy to clipboard{': ' + reason if reason else ''}")
        print(dim("  Select the message above to copy manually."))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_logging(level="DEBUG" if args.verbose else None)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    config = load_config()
    settings = resolve_settings(
        config,
        no_ai=args.no_ai,
        model=args.model,
        message=args.message,
        timeout=args.timeout,
    )
    is_pipe = not sys.stdout.isatty()

    changes, recent = _read_repository(config.recent_subjects if settings.use_ai else 0)
    if changes is None:
        return 1

    if not is_pipe:
        _display_file_summary(changes)
        if settings.use_ai:
            print(f"Asking {info(settings.model)}... ", end='', flush=True)

    generator = MessageGenerator(settings)
    try:
        with Spinner(enabled=settings.use_ai and not is_pipe):
            message = generator.generate(changes, recent)
    except InvalidInput as e:
        if not is_pipe:
            print()
        print_error(str(e))
        return 1

    if is_pipe:
        print(message.text)
        return 0

    if settings.use_ai:
        fell_back = message.path is GenerationPath.HEURISTIC
        print(warning("failed, used heuristic") if fell_back else success("done!"))

    _display_message(message)
    _copy_and_report(message, args.no_copy or not config.copy_to_clipboard)
    return 0


if __name__ == '__main__':
    sys.exit(main())
