"""Per-call options for package manager operations."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Options:
    """Flags controlling how a package manager operation runs.

    Attributes:
        dry_run: Simulate the operation without changing the system.
        interactive: Attach the child process to the caller's terminal
            instead of capturing its output. No records are parsed.
        verbose: Log captured output even when the command succeeds.
    """

    dry_run: bool = False
    interactive: bool = False
    verbose: bool = False


# Used wherever a caller passes no options
DEFAULT_OPTIONS = Options()


def resolve_options(opts: Options | None) -> Options:
    """Return opts, or DEFAULT_OPTIONS when none were given."""
    return DEFAULT_OPTIONS if opts is None else opts
