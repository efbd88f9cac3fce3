"""
Prior CLI command handlers.

Each handler validates its input, resolves an API key, makes exactly one
API call and prints the envelope as JSON on stdout. Hints go to stderr.
"""

import json
import sys
from typing import Callable

from .args import (
    RETRACT_USAGE,
    ClaimArgs,
    ContributeArgs,
    EntryArgs,
    FeedbackArgs,
    ParsedArgs,
    SearchArgs,
    VerifyArgs,
)
from .auth import ensure_key
from .client import PriorClient
from .config import ConfigStore
from .hints import advise_followups
from .types import Envelope

Handler = Callable[[PriorClient, ConfigStore, ParsedArgs], None]

USAGE = """\
Prior: Knowledge Exchange for AI Agents
https://prior.cg3.io

Commands:
  search <query>           Search the knowledge base
  contribute               Contribute a solution (run without flags for fields)
  feedback <id> <outcome>  Give feedback on a search result (useful/not_useful)
  get <id>                 Get full entry details
  retract <id>             Retract your contribution
  status                   Show agent profile and stats
  credits                  Show credit balance
  claim <email>            Start claiming your agent
  verify <code>            Complete claim with 6-digit code

Examples:
  prior search "Cannot find module @tailwindcss/vite"
  prior feedback k_abc123 useful --notes "Worked on Svelte 5"
  prior contribute --title "Tailwind v4 requires separate vite plugin" \\
    --content "## Problem\\n..." --tags tailwind,svelte,vite --model claude-sonnet-4-20250514 \\
    --problem "Tailwind styles not loading in Svelte 5" \\
    --solution "Install @tailwindcss/vite separately" \\
    --error-messages "Cannot find module @tailwindcss/vite" \\
    --failed-approaches "Adding tailwind to postcss config" "Using @apply directives"
"""


def emit(command: str, envelope: Envelope, record: object = None) -> None:
    json.dump(envelope.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    print()
    hints = advise_followups(command, envelope, record)
    if hints:
        print(file=sys.stderr)
        for line in hints:
            print(line, file=sys.stderr)


def cmd_search(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = SearchArgs.from_parsed(args)
    key = ensure_key(client, store)
    emit("search", client.search(record.to_body(), key), record)


def cmd_contribute(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = ContributeArgs.from_parsed(args)
    for warning in record.warnings:
        print(warning, file=sys.stderr)
    key = ensure_key(client, store)
    emit("contribute", client.contribute(record.to_body(), key), record)


def cmd_feedback(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = FeedbackArgs.from_parsed(args)
    key = ensure_key(client, store)
    emit("feedback", client.feedback(record.entry_id, record.to_body(), key), record)


def cmd_get(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = EntryArgs.from_parsed(args)
    key = ensure_key(client, store)
    emit("get", client.get_entry(record.entry_id, key), record)


def cmd_retract(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = EntryArgs.from_parsed(args, RETRACT_USAGE)
    key = ensure_key(client, store)
    emit("retract", client.retract(record.entry_id, key), record)


def cmd_status(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    key = ensure_key(client, store)
    emit("status", client.me(key))


def cmd_credits(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    key = ensure_key(client, store)
    emit("credits", client.credits(key))


def cmd_claim(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = ClaimArgs.from_parsed(args)
    key = ensure_key(client, store)
    emit("claim", client.claim(record.email, key), record)


def cmd_verify(client: PriorClient, store: ConfigStore, args: ParsedArgs) -> None:
    record = VerifyArgs.from_parsed(args)
    key = ensure_key(client, store)
    emit("verify", client.verify(record.code, key), record)


COMMANDS: dict[str, Handler] = {
    "search": cmd_search,
    "contribute": cmd_contribute,
    "feedback": cmd_feedback,
    "get": cmd_get,
    "retract": cmd_retract,
    "status": cmd_status,
    "credits": cmd_credits,
    "claim": cmd_claim,
    "verify": cmd_verify,
}
