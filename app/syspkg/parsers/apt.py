"""Parsers for apt, dpkg-query and apt-cache output.

Each parser is a pure function over captured stdout. Lines are matched
against a small set of LineRule patterns; lines that match no rule
(banners, progress output, notices, blank lines) are skipped. Parsers
never raise on unexpected input, they return fewer records instead.

All patterns assume the C locale (LC_ALL=C), which the apt manager
forces for every captured run.
"""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from syspkg.models.options import Options, resolve_options
from syspkg.models.package import PackageInfo, PackageStatus

logger = logging.getLogger(__name__)

Builder = Callable[[re.Match[str]], PackageInfo | None]
Amender = Callable[[re.Match[str], PackageInfo], PackageInfo]

# Debian package names; dpkg-query may append ":arch"
_NAME = r"(?P<name>[A-Za-z0-9][A-Za-z0-9+._-]*)"


@dataclass(frozen=True, slots=True)
class LineRule:
    """A single line shape of a tool's output.

    Exactly one of build or amend is set. A build rule turns a matching
    line into a new record (or None to drop it). An amend rule refines the
    most recently produced record, e.g. a description printed on the line
    after the package entry.

    Attributes:
        name: Short identifier used in debug logging.
        pattern: Compiled regex matched against the start of each line.
        build: Callback producing a record from a match.
        amend: Callback producing a replacement for the previous record.
    """

    name: str
    pattern: re.Pattern[str]
    build: Builder | None = None
    amend: Amender | None = None


def parse_lines(
    output: str,
    rules: Sequence[LineRule],
    opts: Options | None = None,
) -> list[PackageInfo]:
    """Apply rules to each line of output, in order.

    The first rule whose pattern matches a line handles it. Exact duplicate
    records are dropped, keeping the first occurrence.

    Args:
        output: Captured stdout of the tool.
        rules: Line shapes to recognize.
        opts: Options; unmatched lines are logged when verbose.

    Returns:
        Records in the order the tool printed them.
    """
    opts = resolve_options(opts)
    records: list[PackageInfo] = []

    for lineno, line in enumerate(output.splitlines(), start=1):
        if not line.strip():
            continue

        for rule in rules:
            match = rule.pattern.match(line)
            if match is None:
                continue
            if rule.amend is not None:
                if records:
                    records[-1] = rule.amend(match, records[-1])
            elif rule.build is not None:
                record = rule.build(match)
                if record is not None:
                    records.append(record)
            break
        else:
            if opts.verbose:
                logger.debug("Skipping unrecognized line %d: %r", lineno, line[:100])

    return list(dict.fromkeys(records))


def _suite(raw: str | None) -> str | None:
    """Reduce an archive field like 'Ubuntu:22.04/jammy-updates, ...' to 'jammy-updates'."""
    if not raw:
        return None
    first = raw.split(",")[0].strip()
    return first.rsplit("/", 1)[-1] or None


# --- install / upgrade -----------------------------------------------------


def _build_setting_up(match: re.Match[str]) -> PackageInfo:
    return PackageInfo(
        name=match["name"],
        version=match["version"],
        arch=match["arch"],
        status=PackageStatus.INSTALLED,
    )


def _build_inst(match: re.Match[str]) -> PackageInfo:
    # Dry-run: "Inst name [old] (new suite [arch])"
    old, new = match["old"], match["version"]
    arch = match["arch"] or match["target_arch"]
    category = _suite(match["suite"])

    if old is None:
        return PackageInfo(
            name=match["name"],
            version=new,
            arch=arch,
            status=PackageStatus.AVAILABLE,
            category=category,
        )
    if old == new:
        return PackageInfo(
            name=match["name"],
            version=old,
            arch=arch,
            status=PackageStatus.INSTALLED,
            category=category,
        )
    return PackageInfo(
        name=match["name"],
        version=old,
        new_version=new,
        arch=arch,
        status=PackageStatus.UPGRADABLE,
        category=category,
    )


INSTALL_RULES: tuple[LineRule, ...] = (
    LineRule(
        name="setting-up",
        pattern=re.compile(
            rf"^Setting up {_NAME}(?::(?P<arch>[^\s(]+))? \((?P<version>[^)\s]+)\)"
        ),
        build=_build_setting_up,
    ),
    LineRule(
        name="inst",
        pattern=re.compile(
            rf"^Inst {_NAME}(?::(?P<arch>\S+))?"
            r"(?: \[(?P<old>[^\]]+)\])?"
            r" \((?P<version>[^\s)]+)(?: (?P<suite>[^\[)]*?))?(?: \[(?P<target_arch>[^\]]+)\])?\)"
        ),
        build=_build_inst,
    ),
)


def parse_install_output(output: str, opts: Options | None = None) -> list[PackageInfo]:
    """Parse output of apt install or apt upgrade.

    Recognizes "Setting up" lines from a real run and "Inst" lines from a
    simulated (--dry-run) run.
    """
    return parse_lines(output, INSTALL_RULES, opts)


# --- remove / autoremove ---------------------------------------------------


def _build_removed(match: re.Match[str]) -> PackageInfo:
    return PackageInfo(
        name=match["name"],
        version=match["version"] or "",
        arch=match["arch"],
        status=PackageStatus.REMOVED,
    )


DELETE_RULES: tuple[LineRule, ...] = (
    LineRule(
        name="removing",
        pattern=re.compile(
            rf"^Removing {_NAME}(?::(?P<arch>[^\s(]+))? \((?P<version>[^)\s]+)\)"
        ),
        build=_build_removed,
    ),
    LineRule(
        name="purging",
        pattern=re.compile(
            rf"^Purging configuration files for {_NAME}(?::(?P<arch>[^\s(]+))?"
            r" \((?P<version>[^)\s]+)\)"
        ),
        build=_build_removed,
    ),
    LineRule(
        name="remv",
        pattern=re.compile(
            rf"^(?:Remv|Purg) {_NAME}(?::(?P<arch>\S+))?(?: \[(?P<version>[^\]]+)\])?"
        ),
        build=_build_removed,
    ),
)


def parse_deleted_output(output: str, opts: Options | None = None) -> list[PackageInfo]:
    """Parse output of apt remove or apt autoremove.

    Recognizes "Removing"/"Purging" lines from a real run and "Remv"/"Purg"
    lines from a simulated run.
    """
    return parse_lines(output, DELETE_RULES, opts)


# --- search / list ---------------------------------------------------------


def _status_from_flags(
    flags: str | None, version: str
) -> tuple[PackageStatus, str, str | None]:
    """Map the bracketed flags of a listing entry to (status, version, new_version)."""
    if not flags:
        return PackageStatus.AVAILABLE, version, None

    parts = [part.strip() for part in flags.split(",")]
    for part in parts:
        if part.startswith("upgradable to:"):
            return PackageStatus.UPGRADABLE, version, part.partition(":")[2].strip() or None
        if part.startswith("upgradable from:"):
            return PackageStatus.UPGRADABLE, part.partition(":")[2].strip(), version

    if "installed" in parts:
        return PackageStatus.INSTALLED, version, None
    if "residual-config" in parts:
        return PackageStatus.REMOVED, version, None
    return PackageStatus.AVAILABLE, version, None


def _build_listing(match: re.Match[str]) -> PackageInfo:
    status, version, new_version = _status_from_flags(match["flags"], match["version"])
    return PackageInfo(
        name=match["name"],
        version=version,
        new_version=new_version,
        arch=match["arch"],
        status=status,
        category=_suite(match["suite"]),
    )


def _amend_description(match: re.Match[str], previous: PackageInfo) -> PackageInfo:
    if previous.description is not None:
        return previous
    return replace(previous, description=match["description"])


_LISTING_PATTERN = re.compile(
    rf"^{_NAME}/(?P<suite>\S+) (?P<version>\S+) (?P<arch>\S+)"
    r"(?: \[(?P<flags>[^\]]*)\])?\s*$"
)

FIND_RULES: tuple[LineRule, ...] = (
    LineRule(name="listing", pattern=_LISTING_PATTERN, build=_build_listing),
    LineRule(
        name="description",
        pattern=re.compile(r"^\s{2}(?P<description>\S.*?)\s*$"),
        amend=_amend_description,
    ),
)


def parse_find_output(output: str, opts: Options | None = None) -> list[PackageInfo]:
    """Parse output of apt search.

    Each entry is a "name/suite version arch [flags]" line followed by an
    indented one-line description.
    """
    return parse_lines(output, FIND_RULES, opts)


def _build_upgradable(match: re.Match[str]) -> PackageInfo:
    return PackageInfo(
        name=match["name"],
        version=match["old"],
        new_version=match["version"],
        arch=match["arch"],
        status=PackageStatus.UPGRADABLE,
        category=_suite(match["suite"]),
    )


UPGRADABLE_RULES: tuple[LineRule, ...] = (
    LineRule(
        name="upgradable",
        pattern=re.compile(
            rf"^{_NAME}/(?P<suite>\S+) (?P<version>\S+) (?P<arch>\S+)"
            r" \[upgradable from: (?P<old>[^\]\s]+)\]"
        ),
        build=_build_upgradable,
    ),
)


def parse_list_upgradable_output(output: str, opts: Options | None = None) -> list[PackageInfo]:
    """Parse output of apt list --upgradable."""
    return parse_lines(output, UPGRADABLE_RULES, opts)


# --- dpkg-query ------------------------------------------------------------


def _build_installed(match: re.Match[str]) -> PackageInfo:
    return PackageInfo(
        name=match["name"],
        version=match["version"],
        arch=match["arch"],
        status=PackageStatus.INSTALLED,
    )


LIST_INSTALLED_RULES: tuple[LineRule, ...] = (
    # Progress banners such as "Listing... Done"
    LineRule(
        name="banner",
        pattern=re.compile(r"^\S*\.\.\.(?:\s|$)"),
        build=lambda match: None,
    ),
    LineRule(
        name="installed",
        pattern=re.compile(rf"^{_NAME}(?::(?P<arch>\S+))? (?P<version>\S+)\s*$"),
        build=_build_installed,
    ),
)


def parse_list_installed_output(output: str, opts: Options | None = None) -> list[PackageInfo]:
    """Parse dpkg-query output in the "${binary:Package} ${Version}" format."""
    return parse_lines(output, LIST_INSTALLED_RULES, opts)


# --- apt-cache show --------------------------------------------------------

_FIELD_PATTERN = re.compile(r"^(?P<key>[A-Za-z0-9][A-Za-z0-9-]*):(?:[ \t]+(?P<value>.*?))?\s*$")


def parse_package_info_output(output: str, opts: Options | None = None) -> PackageInfo | None:
    """Parse the first stanza of apt-cache show output.

    Stanzas are blocks of "Key: value" lines separated by a blank line.
    Continuation lines (leading whitespace) belong to the long description
    and are ignored.

    Args:
        output: Captured stdout of apt-cache show.
        opts: Options; unmatched lines are logged when verbose.

    Returns:
        PackageInfo, or None if the output holds no Package field.
    """
    opts = resolve_options(opts)
    fields: dict[str, str] = {}

    for line in output.splitlines():
        if not line.strip():
            if fields:
                break
            continue
        if line[0].isspace():
            continue

        match = _FIELD_PATTERN.match(line)
        if match is None:
            if opts.verbose:
                logger.debug("Skipping unrecognized line: %r", line[:100])
            continue
        fields.setdefault(match["key"], match["value"] or "")

    name = fields.get("Package")
    if not name:
        return None

    description = fields.get("Description") or fields.get("Description-en") or None
    return PackageInfo(
        name=name,
        version=fields.get("Version", ""),
        arch=fields.get("Architecture") or None,
        status=PackageStatus.AVAILABLE,
        description=description,
        category=fields.get("Section") or None,
    )
