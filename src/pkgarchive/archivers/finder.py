# ABOUTME: Walks a source tree and yields the files that belong in an archive
# ABOUTME: Applies .gitattributes export-ignore and package exclude patterns, skips VCS dirs
"""Archivable files finder"""

import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

VCS_DIRECTORIES = frozenset({".git", ".svn", ".hg", "CVS", ".bzr", "_darcs"})


def _translate_glob(pattern: str) -> str:
    """Translate a glob into a regex body where '*' and '?' stop at '/'."""
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return "".join(parts)


def compile_rule(rule: str) -> tuple[re.Pattern, bool] | None:
    """
    Compile an exclude rule into (regex, negate).

    Leading '!' negates, leading '/' anchors to the root, trailing '/' is
    ignored. A match on a directory also matches everything below it.
    Returns None for blank rules.
    """
    rule = rule.strip()
    negate = rule.startswith("!")
    if negate:
        rule = rule[1:]
    rule = rule.rstrip("/")
    anchored = rule.startswith("/")
    rule = rule.lstrip("/")
    if not rule:
        return None

    prefix = "^" if anchored else "(?:^|/)"
    return re.compile(prefix + _translate_glob(rule) + "(?:/|$)"), negate


def parse_gitattributes(path: Path) -> list[str]:
    """Read export-ignore rules from a .gitattributes file."""
    if not path.is_file():
        return []

    rules = []
    for line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        pattern, *attributes = line.split()
        if "export-ignore" in attributes:
            rules.append(pattern)
        elif "-export-ignore" in attributes:
            rules.append("!" + pattern)
    return rules


class ArchivableFilesFinder:
    """
    Iterate the entries of ``source_dir`` that should be archived.

    Yields ``(relative_posix_path, absolute_path)`` pairs in sorted order.
    Files are yielded always; directories only when they are empty.

    Args:
        source_dir: Root of the tree to archive
        excludes: Package exclude patterns, applied after .gitattributes rules
        ignore_filters: When True, only VCS directories are skipped
    """

    def __init__(self, source_dir: str | Path, excludes: list[str] | None = None, ignore_filters: bool = False):
        self.source_dir = Path(source_dir)
        self.rules: list[tuple[re.Pattern, bool]] = []

        if not ignore_filters:
            raw_rules = parse_gitattributes(self.source_dir / ".gitattributes") + list(excludes or [])
            for raw in raw_rules:
                compiled = compile_rule(raw)
                if compiled:
                    self.rules.append(compiled)
            logger.debug(f"Archiving {self.source_dir} with {len(self.rules)} exclude rule(s)")

    def is_excluded(self, relative_path: str) -> bool:
        excluded = False
        for regex, negate in self.rules:
            if regex.search(relative_path):
                excluded = not negate
        return excluded

    def __iter__(self) -> Iterator[tuple[str, Path]]:
        for root, dirs, files in os.walk(self.source_dir):
            dirs[:] = sorted(d for d in dirs if d not in VCS_DIRECTORIES)
            root_path = Path(root)
            relative_root = root_path.relative_to(self.source_dir).as_posix()

            if root_path != self.source_dir and not dirs and not files:
                if not self.is_excluded(relative_root):
                    yield relative_root, root_path
                continue

            # os.walk does not descend into symlinked directories; archive the links
            linked_dirs = [d for d in dirs if (root_path / d).is_symlink()]
            for name in sorted(files + linked_dirs):
                relative = name if relative_root == "." else f"{relative_root}/{name}"
                if not self.is_excluded(relative):
                    yield relative, root_path / name
