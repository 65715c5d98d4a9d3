"""Command line interface for the commiter tool."""

from typing import Callable, Optional
import argparse
import getpass
import logging
import os
import sys

from .core.config import (
    DEFAULT_MODEL, Settings, SettingsStore, get_config_dir
)
from .core.types import ActionKind, CommiterError, ConfigError, MissingCredentialError
from .git.operations import GitOperations
from .ai.interface import CompletionClient
from .ai.openrouter import OpenRouterClient
from .ai.mock import MockCompletionClient
from .session import Session
from .tool import ActionExecutor, CommiterTool

logger = logging.getLogger(__name__)

SHORTCUTS = {
    "simple-commit": ActionKind.SHORT_COMMIT,
    "detailed-commit": ActionKind.BIG_COMMIT,
    "stash": ActionKind.STASH,
}


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Reduce noise from external libraries
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command line argument parser."""
    parser = argparse.ArgumentParser(
        prog='commiter',
        description='AI-powered commit message generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                      # Interactive: pick, review, confirm
  %(prog)s init                 # Store your OpenRouter API key
  %(prog)s simple-commit        # Generate a one-line message and commit
  %(prog)s detailed-commit      # Generate a detailed message and commit
  %(prog)s stash                # Generate a message and stash changes

Environment Variables:
  COMMITER_CONFIG_DIR   Override the settings directory
  COMMITER_VERBOSE      Set to enable debug logging
        """
    )

    parser.add_argument(
        '--model',
        help='Model to use for this run instead of the stored one',
        metavar='MODEL'
    )

    parser.add_argument(
        '--test-mode',
        action='store_true',
        help='Use mock completion client instead of OpenRouter (no API key required)'
    )

    parser.add_argument(
        '--no-clipboard',
        action='store_true',
        help='Do not copy commit messages to the clipboard'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.add_parser('init', help='Initialize with OpenRouter API key')
    subparsers.add_parser('config', help='Show where settings live and what is stored')
    subparsers.add_parser('simple-commit', help='Generate and commit with a simple message')
    subparsers.add_parser('detailed-commit', help='Generate and commit with a detailed message')
    subparsers.add_parser('stash', help='Generate message and stash changes')

    return parser


def resolve_store() -> SettingsStore:
    """Settings store for the user settings directory. Exits if it cannot be resolved."""
    try:
        return SettingsStore(get_config_dir())
    except ConfigError as e:
        print(f"Error getting config dir: {e}", file=sys.stderr)
        print("Set COMMITER_CONFIG_DIR to choose a settings directory", file=sys.stderr)
        sys.exit(1)


def load_settings_or_exit(store: SettingsStore, test_mode: bool = False) -> Settings:
    """Load settings, exiting with a corrective instruction if the key is missing."""
    try:
        return store.load()
    except MissingCredentialError as e:
        if test_mode:
            return Settings(api_key="")
        print(str(e), file=sys.stderr)
        sys.exit(1)


def create_ai_client(args, settings: Settings) -> CompletionClient:
    """Create appropriate completion client based on arguments."""
    if args.test_mode:
        logger.info("Using mock completion client")
        return MockCompletionClient(settings.model_id)
    logger.info("Using OpenRouter client (model=%s)", settings.model_id)
    return OpenRouterClient(api_key=settings.api_key, model_id=settings.model_id)


def build_tool(args, settings: Settings) -> CommiterTool:
    git_ops = GitOperations()
    executor = ActionExecutor(git_ops, use_clipboard=not args.no_clipboard)
    return CommiterTool(git_ops, create_ai_client(args, settings), settings, executor)


def run_init(store: SettingsStore,
             read_secret: Callable[[str], str] = getpass.getpass,
             read_line: Callable[[str], str] = input) -> int:
    """Prompt for the API key and model, then store them with the default templates."""
    print("Welcome to Commiter")
    print("Get started by visiting https://openrouter.ai/ and getting an API key.\n")

    key = read_secret("Enter your OpenRouter API key: ").strip()
    if not key:
        print("API key cannot be empty.", file=sys.stderr)
        return 1

    model = read_line(f"Model [{DEFAULT_MODEL}]: ").strip() or DEFAULT_MODEL

    store.save(Settings(api_key=key, model_id=model))
    print("API key saved successfully.")
    print("Default prompts and model saved successfully.")
    return 0


def display_config(store: SettingsStore) -> int:
    """Print the settings directory and stored values."""
    print(f"Settings directory: {store.config_dir}")
    try:
        settings = store.load()
    except MissingCredentialError:
        print("API key: not set (run 'commiter init')")
        return 0

    print(f"API key: {settings.masked_api_key}")
    print(f"Model: {settings.model_id}")
    return 0


def run_shortcut(tool: CommiterTool, action: ActionKind) -> int:
    """Generate a message and act on it without review."""
    message, result = tool.run_once(action)
    print(message)
    print(result)
    return 0


def read_key(prompt: str = "> ") -> str:
    """Read one key press. Only the first character of the line counts."""
    try:
        line = input(prompt)
    except EOFError:
        return "q"
    except KeyboardInterrupt:
        return "ctrl+c"
    return line.strip()[:1].lower()


def run_session(session: Session, read: Callable[[], str] = read_key) -> int:
    """Drive the interactive session until it finishes."""
    while not session.finished:
        print(session.render())
        session.handle_key(read())
    return 0


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_argument_parser()
    parsed_args = parser.parse_args(args)

    env_verbose = bool(os.environ.get('COMMITER_VERBOSE', ""))
    setup_logging(parsed_args.verbose or env_verbose)

    store = resolve_store()

    try:
        if parsed_args.command == 'init':
            return run_init(store)

        if parsed_args.command == 'config':
            return display_config(store)

        settings = load_settings_or_exit(store, parsed_args.test_mode)
        if parsed_args.model:
            settings = settings.with_overrides(model_id=parsed_args.model)
        logger.debug("Using model %s", settings.model_id)

        tool = build_tool(parsed_args, settings)

        if parsed_args.command in SHORTCUTS:
            return run_shortcut(tool, SHORTCUTS[parsed_args.command])

        return run_session(Session(tool))

    except CommiterError as e:
        logger.debug("Commiter error: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        return 1

    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
