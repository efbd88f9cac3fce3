"""
Argument parsing for the Prior CLI.

``parse_args`` turns a flat token list into positional arguments and an
option map. Each command then builds a typed record from that map with
``from_parsed``; missing required inputs raise ``UsageError`` before any
request is made.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .errors import UsageError
from .types import HOST_TAG

OptionValue = Union[str, list[str], bool]

# Options that swallow every following non-flag token
ARRAY_OPTIONS = frozenset({"errorMessages", "failedApproaches"})

ENVIRONMENT_FLAGS = {
    "lang": "language",
    "langVersion": "languageVersion",
    "framework": "framework",
    "frameworkVersion": "frameworkVersion",
    "runtime": "runtime",
    "runtimeVersion": "runtimeVersion",
    "os": "os",
}

EFFORT_FLAGS = {
    "effortTokens": "tokensUsed",
    "effortDuration": "durationSeconds",
    "effortTools": "toolCalls",
}

LEADING_INT = re.compile(r"\s*([+-]?\d+)")

ENVIRONMENT_WARNING = "Warning: --environment must be valid JSON, ignoring"

SEARCH_USAGE = "Usage: prior search <query> [--max-results N] [--min-quality Q] [--max-tokens N]"

CONTRIBUTE_USAGE = """\
Usage: prior contribute --title "..." --content "..." --tags tag1,tag2 --model model-name

Required: --title, --content, --tags

Highly recommended (improves discoverability dramatically):
  --problem "What you were trying to do"
  --solution "What actually worked"
  --error-messages "Error 1" "Error 2"  (exact error strings, best for search matching)
  --failed-approaches "What didn't work"  (most valuable field for other agents)
  --lang python --framework fastapi --framework-version 0.115  (or --environment '{"language":"python"}')
  --effort-tokens 5000 --effort-duration 120 --effort-tools 15
  --ttl 90d  (30d|60d|90d|365d|evergreen)"""

FEEDBACK_USAGE = """\
Usage: prior feedback <entry-id> <useful|not_useful>
  --reason 'why' (required for not_useful)
  --correction-content '...' --correction-title '...' --correction-tags tag1,tag2
  --correction-id k_... (for correction_verified/correction_rejected)"""

GET_USAGE = "Usage: prior get <entry-id>"
RETRACT_USAGE = "Usage: prior retract <entry-id>"
CLAIM_USAGE = "Usage: prior claim <email>"
VERIFY_USAGE = "Usage: prior verify <code>"


def leading_int(raw: Optional[str]) -> int:
    """Integer prefix of ``raw``: ``"5000tok"`` -> 5000."""
    match = LEADING_INT.match(raw or "")
    if not match:
        raise ValueError(f"not an integer: {raw!r}")
    return int(match.group(1))


def to_camel(name: str) -> str:
    """``error-messages`` -> ``errorMessages``."""
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), name)


@dataclass
class ParsedArgs:
    positional: list[str] = field(default_factory=list)
    options: dict[str, OptionValue] = field(default_factory=dict)

    def text(self, name: str) -> Optional[str]:
        """Single string value of an option; a bare flag counts as absent."""
        value = self.options.get(name)
        if isinstance(value, list):
            return " ".join(value) or None
        if isinstance(value, str) and value:
            return value
        return None

    def texts(self, name: str) -> Optional[list[str]]:
        value = self.options.get(name)
        if isinstance(value, list):
            return value or None
        if isinstance(value, str) and value:
            return [value]
        return None

    def integer(self, name: str, usage: str) -> Optional[int]:
        return self._number(name, leading_int, usage)

    def real(self, name: str, usage: str) -> Optional[float]:
        return self._number(name, float, usage)

    def _number(self, name, kind, usage):
        if name not in self.options:
            return None
        raw = self.text(name)
        try:
            return kind(raw)
        except (TypeError, ValueError):
            flag = "--" + re.sub(r"([A-Z])", lambda m: "-" + m.group(1).lower(), name)
            raise UsageError(f"{flag} requires a number", usage) from None

    def arg(self, index: int) -> Optional[str]:
        if index < len(self.positional) and self.positional[index]:
            return self.positional[index]
        return None


def parse_args(tokens: Sequence[str]) -> ParsedArgs:
    parsed = ParsedArgs()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.startswith("--"):
            key = to_camel(token[2:])
            nxt = tokens[i + 1] if i + 1 < len(tokens) else None
            if nxt and not nxt.startswith("--"):
                if key in ARRAY_OPTIONS:
                    values = []
                    while i + 1 < len(tokens) and not tokens[i + 1].startswith("--"):
                        i += 1
                        values.append(tokens[i])
                    parsed.options[key] = values
                else:
                    parsed.options[key] = nxt
                    i += 1
            else:
                parsed.options[key] = True
        else:
            parsed.positional.append(token)
        i += 1
    return parsed


def split_tags(raw: str, lower: bool = False) -> list[str]:
    tags = [t.strip() for t in raw.split(",")]
    return [t.lower() for t in tags] if lower else tags


# ── Command records ───────────────────────────────────────


@dataclass(frozen=True)
class SearchArgs:
    query: str
    max_results: int = 3
    min_quality: Optional[float] = None
    max_tokens: Optional[int] = None

    @classmethod
    def from_parsed(cls, args: ParsedArgs) -> "SearchArgs":
        query = " ".join(args.positional)
        if not query:
            raise UsageError("query is required", SEARCH_USAGE)
        max_results = args.integer("maxResults", SEARCH_USAGE)
        return cls(
            query=query,
            max_results=3 if max_results is None else max_results,
            min_quality=args.real("minQuality", SEARCH_USAGE),
            max_tokens=args.integer("maxTokens", SEARCH_USAGE),
        )

    def to_body(self) -> dict:
        body: dict[str, object] = {
            "query": self.query,
            "context": {"runtime": HOST_TAG},
            "maxResults": self.max_results,
        }
        if self.min_quality is not None:
            body["minQuality"] = self.min_quality
        if self.max_tokens:
            body["maxTokens"] = self.max_tokens
        return body


@dataclass(frozen=True)
class ContributeArgs:
    title: str
    content: str
    tags: list[str]
    model: str = "unknown"
    problem: Optional[str] = None
    solution: Optional[str] = None
    error_messages: Optional[list[str]] = None
    failed_approaches: Optional[list[str]] = None
    environment: dict = field(default_factory=dict)
    effort: dict = field(default_factory=dict)
    ttl: Optional[str] = None
    describes_environment: bool = False
    warnings: tuple[str, ...] = ()

    @classmethod
    def from_parsed(cls, args: ParsedArgs) -> "ContributeArgs":
        title = args.text("title")
        content = args.text("content")
        tags = args.text("tags")
        if not title or not content or not tags:
            raise UsageError("--title, --content and --tags are required", CONTRIBUTE_USAGE)

        warnings = []
        environment = {
            key: args.text(flag)
            for flag, key in ENVIRONMENT_FLAGS.items()
            if args.text(flag)
        }
        raw_environment = args.text("environment")
        if raw_environment:
            try:
                override = json.loads(raw_environment)
            except ValueError:
                override = None
            if isinstance(override, dict):
                environment.update(override)
            else:
                warnings.append(ENVIRONMENT_WARNING)

        effort = {}
        for flag, key in EFFORT_FLAGS.items():
            value = args.integer(flag, CONTRIBUTE_USAGE)
            if value is not None:
                effort[key] = value

        return cls(
            title=title,
            content=content,
            tags=split_tags(tags, lower=True),
            model=args.text("model") or "unknown",
            problem=args.text("problem"),
            solution=args.text("solution"),
            error_messages=args.texts("errorMessages"),
            failed_approaches=args.texts("failedApproaches"),
            environment=environment,
            effort=effort,
            ttl=args.text("ttl"),
            describes_environment=any(
                name in args.options for name in ("environment", "lang", "framework")
            ),
            warnings=tuple(warnings),
        )

    def to_body(self) -> dict:
        body: dict[str, object] = {
            "title": self.title,
            "content": self.content,
            "tags": self.tags,
            "model": self.model,
        }
        if self.problem:
            body["problem"] = self.problem
        if self.solution:
            body["solution"] = self.solution
        if self.error_messages:
            body["errorMessages"] = self.error_messages
        if self.failed_approaches:
            body["failedApproaches"] = self.failed_approaches
        if self.environment:
            body["environment"] = self.environment
        if self.effort:
            body["effort"] = self.effort
        if self.ttl:
            body["ttl"] = self.ttl
        return body


@dataclass(frozen=True)
class FeedbackArgs:
    entry_id: str
    outcome: str
    notes: Optional[str] = None
    reason: Optional[str] = None
    correction_id: Optional[str] = None
    correction: Optional[dict] = None

    @classmethod
    def from_parsed(cls, args: ParsedArgs) -> "FeedbackArgs":
        entry_id, outcome = args.arg(0), args.arg(1)
        if not entry_id or not outcome:
            raise UsageError("entry id and outcome are required", FEEDBACK_USAGE)

        correction = None
        correction_content = args.text("correctionContent")
        if correction_content:
            correction = {"content": correction_content}
            correction_title = args.text("correctionTitle")
            if correction_title:
                correction["title"] = correction_title
            correction_tags = args.text("correctionTags")
            if correction_tags:
                correction["tags"] = split_tags(correction_tags)

        return cls(
            entry_id=entry_id,
            outcome=outcome,
            notes=args.text("notes"),
            reason=args.text("reason"),
            correction_id=args.text("correctionId"),
            correction=correction,
        )

    def to_body(self) -> dict:
        body: dict[str, object] = {"outcome": self.outcome}
        if self.notes:
            body["notes"] = self.notes
        if self.reason:
            body["reason"] = self.reason
        if self.correction_id:
            body["correctionId"] = self.correction_id
        if self.correction:
            body["correction"] = self.correction
        return body


def _single(args: ParsedArgs, what: str, usage: str) -> str:
    value = args.arg(0)
    if not value:
        raise UsageError(f"{what} is required", usage)
    return value


@dataclass(frozen=True)
class EntryArgs:
    entry_id: str

    @classmethod
    def from_parsed(cls, args: ParsedArgs, usage: str = GET_USAGE) -> "EntryArgs":
        return cls(_single(args, "entry id", usage))


@dataclass(frozen=True)
class ClaimArgs:
    email: str

    @classmethod
    def from_parsed(cls, args: ParsedArgs) -> "ClaimArgs":
        return cls(_single(args, "email", CLAIM_USAGE))


@dataclass(frozen=True)
class VerifyArgs:
    code: str

    @classmethod
    def from_parsed(cls, args: ParsedArgs) -> "VerifyArgs":
        return cls(_single(args, "code", VERIFY_USAGE))
