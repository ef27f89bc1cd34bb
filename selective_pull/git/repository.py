"""Git repository abstraction.

This module provides the Repository class used to inspect the part source
tree before the build: whether it has any history, whether tracked files
are modified, which tags exist, what `git describe` says, and to check out
a tag.

Operations that are expected to fail in normal use (a tarball with no
history, a commit git cannot describe) are probes returning a bool or None.
Everything else returns a Result.

Usage:
    repo = Repository(Path("/path/to/src"))

    match repo.tags("*[._]*"):
        case Ok(tags):
            print(", ".join(tags))
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from selective_pull.core.result import Err, Ok, Result
from selective_pull.platform.process import ProcessError
from selective_pull.platform.process import run as run_process
from selective_pull.platform.process import run_silent

__all__ = [
    "CommandTrace",
    "GitError",
    "Repository",
    "StatusEntry",
]

type CommandTrace = Callable[[list[str]], None]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in `git status --porcelain=v1`.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_staged(self) -> bool:
        """True if file has staged changes."""
        return self.xy != "??" and self.xy[0] != " "

    @property
    def is_unstaged(self) -> bool:
        """True if file has unstaged changes."""
        return self.xy != "??" and self.xy[1] != " "


class Repository:
    """Git operations on a single source tree.

    Attributes:
        path: Directory git commands run in
    """

    def __init__(self, path: Path, *, trace: CommandTrace | None = None) -> None:
        """Initialize repository.

        Args:
            path: Source directory (need not be the repository root)
            trace: Called with every git command line before it runs
        """
        self.path = path
        self._trace = trace

    def has_commit(self) -> bool:
        """True if HEAD resolves to a commit.

        False for directories outside any repository and for repositories
        without commits.
        """
        return isinstance(self._run(["rev-parse", "--verify", "--quiet", "HEAD"]), Ok)

    def tracked_changes(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """Staged and unstaged changes to tracked files.

        Untracked files are not reported.
        """
        result = self._run(["status", "--porcelain=v1", "--untracked-files=no"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="status",
                        message=e.stderr.strip() or "git status failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                entries = (self._parse_entry(line) for line in stdout.splitlines())
                return Ok(tuple(e for e in entries if e is not None))

    def is_clean(self) -> Result[bool, GitError]:
        """Check that neither the working tree nor the index has changes."""
        return self.tracked_changes().map(
            lambda entries: not any(e.is_staged or e.is_unstaged for e in entries)
        )

    def tags(self, pattern: str | None = None) -> Result[list[str], GitError]:
        """List tags, optionally restricted to a glob pattern."""
        args = ["tag", "--list"]
        if pattern is not None:
            args.append(pattern)
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="tag --list",
                        message=e.stderr.strip() or "git tag failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok([ln.strip() for ln in stdout.splitlines() if ln.strip()])

    def describe(self) -> str | None:
        """`git describe --always --dirty --tags`, None if git cannot describe HEAD."""
        result = self._run(["describe", "--always", "--dirty", "--tags"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def checkout(self, ref: str) -> Result[None, GitError]:
        """Check out `ref` in place. git's own output goes to the terminal."""
        cmd = ["git", "-C", str(self.path), "checkout", ref]
        if self._trace is not None:
            self._trace(cmd)
        result = run_silent(cmd, cwd=self.path)
        if isinstance(result, Err):
            return Err(
                GitError(
                    command=f"checkout {ref}",
                    message=f"git checkout {ref} failed",
                    returncode=result.error.returncode,
                )
            )
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        cmd = ["git", "-C", str(self.path), *args]
        if self._trace is not None:
            self._trace(cmd)
        return run_process(cmd, cwd=self.path)

    def _parse_entry(self, line: str) -> StatusEntry | None:
        """Parse a single status entry line: XY path."""
        if len(line) < 4:
            return None

        if line.startswith("?? "):
            return StatusEntry(xy="??", path=line[3:])

        return StatusEntry(xy=line[:2], path=line[3:])
