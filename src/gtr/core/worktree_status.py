"""Parsing of `git worktree list --porcelain` and worktree status classification.

The porcelain output is a series of sections separated by blank lines. The
first line of each section is ``worktree <path>``; the remaining lines are
either attributes (``HEAD <sha>``, ``branch <ref>``) or status markers (``bare``,
``detached``, ``locked [reason]``, ``prunable [reason]``).

Parsing produces one typed WorktreeSection per worktree. Status priority is
applied afterwards in classify_status(), independent of marker order.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

STATUS_MARKERS = frozenset({"bare", "detached", "locked", "prunable"})


class WorktreeStatus(Enum):
    OK = "ok"
    DETACHED = "detached"
    LOCKED = "locked"
    PRUNABLE = "prunable"
    MISSING = "missing"


@dataclass(frozen=True)
class WorktreeSection:
    """One section of porcelain output.

    Attributes:
        path: Worktree path as reported by git
        branch: Short branch name (``refs/heads/`` stripped), or None if detached
        markers: Status markers present in the section
        reasons: Optional reason text keyed by marker (``locked``/``prunable``)
    """

    path: Path
    branch: str | None
    markers: frozenset[str]
    reasons: dict[str, str]


def parse_worktree_porcelain(output: str) -> list[WorktreeSection]:
    """Parse porcelain output into sections, in git's order (main worktree first)."""
    sections: list[WorktreeSection] = []
    path: Path | None = None
    branch: str | None = None
    markers: set[str] = set()
    reasons: dict[str, str] = {}

    def flush() -> None:
        if path is not None:
            sections.append(
                WorktreeSection(
                    path=path,
                    branch=branch,
                    markers=frozenset(markers),
                    reasons=dict(reasons),
                )
            )

    for raw_line in output.splitlines():
        line = raw_line.rstrip("\r")
        if line == "":
            flush()
            path, branch = None, None
            markers.clear()
            reasons.clear()
            continue

        name, _, value = line.partition(" ")
        if name == "worktree":
            # A new section without a preceding blank line still starts fresh
            flush()
            path, branch = Path(value), None
            markers.clear()
            reasons.clear()
        elif path is None:
            continue
        elif name == "branch":
            branch = value.removeprefix("refs/heads/")
        elif name in STATUS_MARKERS:
            markers.add(name)
            if value:
                reasons[name] = value

    flush()
    return sections


def classify_status(section: WorktreeSection | None) -> WorktreeStatus:
    """Derive a worktree's status from its section.

    Priority: locked > prunable > detached > ok. A path git does not list at
    all (section is None) is missing.
    """
    if section is None:
        return WorktreeStatus.MISSING
    if "locked" in section.markers:
        return WorktreeStatus.LOCKED
    if "prunable" in section.markers:
        return WorktreeStatus.PRUNABLE
    if "detached" in section.markers:
        return WorktreeStatus.DETACHED
    return WorktreeStatus.OK


def find_section(sections: list[WorktreeSection], path: Path) -> WorktreeSection | None:
    """Find the section for a path, tolerating symlinked spellings of the same directory."""
    for section in sections:
        if section.path == path:
            return section
    resolved = path.resolve()
    for section in sections:
        if section.path.resolve() == resolved:
            return section
    return None


def status_reason(section: WorktreeSection | None) -> str:
    """Reason git gave for the marker that decided the status ("" if none)."""
    if section is None:
        return ""
    return section.reasons.get(classify_status(section).value, "")
