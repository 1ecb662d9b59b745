"""Command-line interface for hostblock."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from . import __version__
from .builder import HostsBuilder
from .config import ConfigManager, HostblockConfig, PromptPolicy, resolve_config
from .constants import DEFAULT_OUTPUT, DEFAULT_REDIRECT_IP
from .exceptions import AbortedError, HostblockError
from .fetcher import SourceFetcher
from .prompt import make_confirm
from .writer import FallbackWriter

logger = logging.getLogger(__name__)


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


class CLI:
    """Main CLI application."""

    def __init__(
        self,
        config_manager: Optional[ConfigManager] = None,
        fetcher: Optional[SourceFetcher] = None,
        writer: Optional[FallbackWriter] = None,
        input_func: Callable[[str], str] = input,
    ):
        """
        Initialize CLI with optional dependency injection for testing.

        Args:
            config_manager: Configuration file reader
            fetcher: Source fetcher instance
            writer: Output write strategy
            input_func: Reads answers to interactive prompts
        """
        self.config_manager = config_manager or ConfigManager()
        self.fetcher = fetcher or SourceFetcher()
        self.writer = writer or FallbackWriter()
        self.input_func = input_func

    def create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser."""
        parser = ArgumentParser(
            prog="hostblock",
            description="Build a hosts file that blocks ads, tracking and malware domains",
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}",
        )
        parser.add_argument(
            "-O",
            dest="output",
            metavar="OUTPUT",
            help=f"Output file (default: {DEFAULT_OUTPUT})",
        )
        parser.add_argument(
            "-R",
            dest="redirect_ip",
            metavar="IP",
            help=f"Redirection IP (default: {DEFAULT_REDIRECT_IP})",
        )
        parser.add_argument(
            "-H",
            dest="header",
            metavar="HEADER",
            help="Header text (default: localhost entries)",
        )
        parser.add_argument(
            "-S",
            dest="sources",
            metavar="SOURCES",
            help="Whitespace-separated source URLs",
        )
        parser.add_argument(
            "-W",
            dest="whitelist",
            metavar="WHITELIST",
            help="Whitespace-separated whitelist patterns (POSIX basic regex)",
        )
        parser.add_argument(
            "-B",
            dest="blacklist",
            metavar="BLACKLIST",
            help="Whitespace-separated blacklisted domains",
        )
        parser.add_argument(
            "-b",
            dest="backup",
            action="store_true",
            default=None,
            help="Back up the output file before overwriting it",
        )
        parser.add_argument(
            "-l",
            dest="lenient",
            action="store_true",
            default=None,
            help="Accept any IP address prefix in sources",
        )
        parser.add_argument(
            "-y",
            dest="prompt",
            action="store_const",
            const=PromptPolicy.YES,
            help="Automatically answer yes to prompts",
        )
        parser.add_argument(
            "-n",
            dest="prompt",
            action="store_const",
            const=PromptPolicy.NO,
            help="Automatically answer no to prompts",
        )
        parser.add_argument(
            "-C",
            "--config",
            type=Path,
            metavar="FILE",
            help="Read settings from an INI file (flags take precedence)",
        )
        parser.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable verbose output",
        )
        parser.add_argument(
            "-q",
            "--quiet",
            action="store_true",
            help="Only report warnings and errors",
        )
        return parser

    def resolve(self, args: argparse.Namespace) -> HostblockConfig:
        """
        Resolve the run configuration from defaults, config file and flags.

        Raises:
            ConfigError: If the configuration file is invalid
        """
        config = HostblockConfig()
        if args.config:
            config = resolve_config(self.config_manager.load(args.config), base=config)

        overrides: Dict[str, Any] = {
            "output": args.output,
            "redirect_ip": args.redirect_ip,
            "header": args.header,
            "sources": args.sources,
            "whitelist": args.whitelist,
            "blacklist": args.blacklist,
            "backup": args.backup,
            "lenient": args.lenient,
            "prompt": args.prompt,
        }
        return resolve_config(overrides, base=config)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """
        Main entry point.

        Args:
            argv: Command line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code
        """
        parser = self.create_parser()
        args = parser.parse_args(argv)

        # Configure logging
        if args.verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(levelname)s: %(message)s",
            )
        else:
            logging.basicConfig(
                level=logging.WARNING if args.quiet else logging.INFO,
                format="%(message)s",
            )

        try:
            config = self.resolve(args)
            builder = HostsBuilder(
                self.fetcher,
                make_confirm(config.prompt, input_func=self.input_func),
                self.writer,
            )
            count = builder.run(config)
        except AbortedError as e:
            print(f"Aborted: {e}", file=sys.stderr)
            return 0
        except HostblockError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(f"{count} blocked domains")
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI."""
    cli = CLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
