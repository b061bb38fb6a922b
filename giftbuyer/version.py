"""Release version checks against the local repository and the remote host."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from pathlib import Path

import requests

_RELEASES_API = "https://api.github.com"
_MAX_NUMBER = 2**64 - 1

_VERSION_PATTERN = re.compile(
    r"v?([0-9]+)(?:\.([0-9]+))?(?:\.([0-9]+))?"
    r"(?:-([0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?"
    r"(?:\+([0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*))?",
    re.ASCII,
)


@dataclass(frozen=True)
class GitHubRelease:
    """A published release as described by the releases API."""

    tag_name: str = ""
    name: str = ""
    body: str = ""
    html_url: str = ""
    draft: bool = False


@total_ordering
@dataclass(frozen=True, eq=False)
class _Version:
    major: int
    minor: int
    patch: int
    prerelease: str = ""
    metadata: str = ""

    def _key(self) -> tuple:
        core = (self.major, self.minor, self.patch)
        if not self.prerelease:
            return core + ((1,),)
        parts = tuple(
            (0, int(part), "") if part.isdigit() else (1, 0, part)
            for part in self.prerelease.split(".")
        )
        return core + ((0, parts),)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Version):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: _Version) -> bool:
        if not isinstance(other, _Version):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text


def _number(text: str | None) -> int:
    if text is None:
        return 0
    value = int(text)
    if value > _MAX_NUMBER:
        raise ValueError("Invalid Semantic Version")
    return value


def parse_version(text: str) -> _Version:
    """Parse a semantic version, allowing a leading "v" and missing parts."""
    match = _VERSION_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError("Invalid Semantic Version")
    major, minor, patch, prerelease, metadata = match.groups()
    prerelease = prerelease or ""
    for part in prerelease.split(".") if prerelease else ():
        if part.isdigit() and len(part) > 1 and part.startswith("0"):
            raise ValueError("Version segment starts with 0")
    return _Version(
        _number(major),
        _number(minor),
        _number(patch),
        prerelease,
        metadata or "",
    )


def _git_dir(repo_path: Path) -> Path:
    dot_git = repo_path / ".git"
    if dot_git.is_dir():
        return dot_git
    if dot_git.is_file():
        content = dot_git.read_text(encoding="utf-8").strip()
        if content.startswith("gitdir:"):
            target = Path(content[len("gitdir:"):].strip())
            if not target.is_absolute():
                target = repo_path / target
            if target.is_dir():
                return target
    raise FileNotFoundError("repository does not exist")


def _tag_names(git_dir: Path) -> set[str]:
    names: set[str] = set()
    tags_dir = git_dir / "refs" / "tags"
    if tags_dir.is_dir():
        names.update(
            item.relative_to(tags_dir).as_posix()
            for item in tags_dir.rglob("*")
            if item.is_file()
        )
    packed = git_dir / "packed-refs"
    if packed.is_file():
        for line in packed.read_text(encoding="utf-8").splitlines():
            if not line or line.startswith(("#", "^")):
                continue
            _, _, ref = line.partition(" ")
            if ref.startswith("refs/tags/"):
                names.add(ref[len("refs/tags/"):])
    return names


class GitVersionController:
    """Finds the current and the latest released versions and compares them."""

    def __init__(
        self,
        owner: str,
        repo_name: str,
        api_link: str = "",
        repo_path: str | Path = ".",
    ) -> None:
        self.owner = owner
        self.repo_name = repo_name
        self.api_link = api_link
        self.repo_path = Path(repo_path)

    def get_latest_version(self) -> GitHubRelease:
        """Fetch the latest published release of the repository."""
        url = f"{_RELEASES_API}/repos/{self.owner}/{self.repo_name}/releases/latest"
        response = requests.get(url, timeout=30)
        try:
            data = response.json()
        finally:
            response.close()
        if not isinstance(data, dict):
            raise ValueError("release description is not a JSON object")
        return GitHubRelease(
            tag_name=str(data.get("tag_name") or ""),
            name=str(data.get("name") or ""),
            body=str(data.get("body") or ""),
            html_url=str(data.get("html_url") or ""),
            draft=bool(data.get("draft", False)),
        )

    def get_current_version(self) -> str:
        """Return the highest semantic version among the local tags."""
        git_dir = _git_dir(self.repo_path)
        versions = []
        for name in _tag_names(git_dir):
            tag = name.rsplit("/", 1)[-1] if False else name
            try:
                versions.append(parse_version(tag.removeprefix("v")))
            except ValueError:
                continue
        if not versions:
            raise ValueError("no valid tags found")
        return str(max(versions))

    def compare_versions(self, local_version: str, remote_version: str) -> bool:
        """Return True when the remote version is newer than the local one."""
        if not local_version or not remote_version:
            raise ValueError("local or remote version is empty")
        local = parse_version(local_version)
        remote = parse_version(remote_version.removeprefix("v"))
        return remote > local