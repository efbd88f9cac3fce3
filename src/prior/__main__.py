"""
prior <command> [args...]   - Prior knowledge exchange CLI
python -m prior <command>   - same, without the console script
"""

import sys
from typing import Optional, Sequence

from .args import parse_args
from .client import PriorClient
from .commands import COMMANDS, USAGE
from .config import ConfigStore, load_settings
from .errors import UsageError

HELP_COMMANDS = {"help", "-h", "--help"}


def main(argv: Optional[Sequence[str]] = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] in HELP_COMMANDS:
        print(USAGE)
        return

    command = argv[0]
    handler = COMMANDS.get(command)
    if not handler:
        print(f"Unknown command: {command}. Run without arguments for help.", file=sys.stderr)
        sys.exit(1)

    settings = load_settings()
    store = ConfigStore(settings.config_path)
    client = PriorClient(settings.base_url)

    try:
        handler(client, store, parse_args(argv[1:]))
    except UsageError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        if exc.usage:
            print(exc.usage, file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
