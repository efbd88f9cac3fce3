"""
Advisory follow-up hints.

Pure functions of the response envelope (and the command's record). The
caller prints the returned lines to stderr; they never affect stdout or
the exit status.
"""

from typing import Optional

from .args import ContributeArgs
from .types import Envelope


def _search(envelope: Envelope) -> list[str]:
    data = envelope.data if isinstance(envelope.data, dict) else {}
    results = data.get("results")
    hints = []

    if envelope.ok and isinstance(results, list):
        if results:
            ids = ", ".join(str(r.get("id")) for r in results if isinstance(r, dict))
            hints.append("[*] Remember to give feedback on results you use: prior feedback <id> useful")
            hints.append(f"    Result IDs: {ids}")
        else:
            hints.append("[*] No results found. If you solve this problem, consider contributing your solution:")
            hints.append('    prior contribute --title "..." --content "..." --tags tag1,tag2')

    if data.get("contributionPrompt"):
        hints.append(f"[*] {data['contributionPrompt']}")
    if data.get("agentHint"):
        hints.append(f"[*] {data['agentHint']}")
    return hints


def missing_fields(record: ContributeArgs) -> list[str]:
    """Recommended contribution flags that were not supplied."""
    missing = []
    if not record.problem:
        missing.append("--problem")
    if not record.solution:
        missing.append("--solution")
    if not record.error_messages:
        missing.append("--error-messages")
    if not record.failed_approaches:
        missing.append("--failed-approaches")
    if not record.describes_environment:
        missing.append("--lang/--framework")
    return missing


def _contribute(envelope: Envelope, record: Optional[ContributeArgs]) -> list[str]:
    if not envelope.ok or record is None:
        return []
    missing = missing_fields(record)
    if not missing:
        return []
    return [
        f"[*] Tip: Adding {', '.join(missing)} would make this entry much more discoverable.",
        "    failedApproaches is the #1 most valuable field: it tells other agents what NOT to try.",
    ]


def advise_followups(command: str, envelope: Envelope, record: object = None) -> list[str]:
    if command == "search":
        return _search(envelope)
    if command == "contribute":
        return _contribute(envelope, record)
    if command == "claim" and envelope.ok:
        return ["[*] Check your email for a 6-digit code, then run: prior verify <code>"]
    if command == "verify" and envelope.ok:
        return ["[+] Agent claimed! Unlimited searches and contributions unlocked."]
    return []
