"""Read commit history from a local git checkout via subprocess."""

import re
import subprocess
from pathlib import Path
from typing import Any, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)

_RECORD_SEP = "\x1e"
_FIELD_SEP = "\x1f"
_BRACE_RENAME_RE = re.compile(r"\{([^{}]*) => ([^{}]*)\}")


class GitExtractor:
    """Turn ``git log`` output into canonical raw commit records.

    The records are plain dicts in the canonical shape understood by
    ``normalize_commit``; this class does no scoring.
    """

    # Maximum git log output size (50MB) to prevent OOM on huge repos
    _MAX_OUTPUT_BYTES = 50 * 1024 * 1024

    def __init__(self, repo_path: str, max_commits: int = 5000):
        self.repo_path = str(Path(repo_path).resolve())
        self.max_commits = max_commits

    def extract(self) -> Optional[list[dict[str, Any]]]:
        """Return raw commit records newest first, or None if not a git repo."""
        if not self._is_git_repo():
            logger.info("Not a git repository: %s", self.repo_path)
            return None

        raw = self._run_git_log()
        if raw is None:
            return None

        records = self._parse_log(raw)
        logger.debug("Extracted %d commits from %s", len(records), self.repo_path)
        return records

    def _is_git_repo(self) -> bool:
        try:
            result = subprocess.run(
                ["git", "-C", self.repo_path, "rev-parse", "--git-dir"],
                capture_output=True,
                text=True,
                timeout=5,
            )
            return result.returncode == 0
        except (FileNotFoundError, subprocess.TimeoutExpired):
            return False

    def _run_git_log(self) -> Optional[str]:
        cmd = [
            "git",
            "-C",
            self.repo_path,
            "log",
            "--no-color",
            f"--format={_RECORD_SEP}%H{_FIELD_SEP}%P{_FIELD_SEP}%ae{_FIELD_SEP}%aI"
            f"{_FIELD_SEP}%cI{_FIELD_SEP}%B{_FIELD_SEP}",
            "--numstat",
            f"-n{self.max_commits}",
        ]
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as e:
            logger.warning("git not available: %s", e)
            return None

        try:
            chunks = []
            total_size = 0
            stdout = proc.stdout
            if stdout is None:
                return None
            while True:
                chunk = stdout.read(1024 * 1024)
                if not chunk:
                    break
                total_size += len(chunk)
                if total_size > self._MAX_OUTPUT_BYTES:
                    logger.warning(
                        "git log output exceeded %dMB limit, truncating",
                        self._MAX_OUTPUT_BYTES // (1024 * 1024),
                    )
                    proc.kill()
                    break
                chunks.append(chunk)

            proc.wait(timeout=30)
            if proc.returncode not in (0, -9):  # -9 = killed by the size cap
                stderr = proc.stderr.read() if proc.stderr else ""
                logger.warning("git log failed: %s", stderr.strip())
                return None
            return "".join(chunks)
        except subprocess.TimeoutExpired as e:
            proc.kill()
            logger.warning("git log timed out: %s", e)
            return None
        finally:
            if proc.stdout:
                proc.stdout.close()
            if proc.stderr:
                proc.stderr.close()

    def _parse_log(self, raw: str) -> list[dict[str, Any]]:
        """Parse separator-delimited log output with trailing numstat blocks.

        A record truncated by the size cap lacks its final field separator
        and is dropped.
        """
        records = []
        for block in raw.split(_RECORD_SEP):
            if not block.strip():
                continue
            parts = block.split(_FIELD_SEP)
            if len(parts) < 7:
                logger.warning("Skipping incomplete git log record")
                continue

            sha, parents, email, authored, committed, message = parts[:6]
            additions, deletions, paths = self._parse_numstat(parts[6])
            records.append(
                {
                    "sha": sha.strip(),
                    "message": message.strip("\n"),
                    "author_date": authored.strip(),
                    "committer_date": committed.strip(),
                    "author_email": email.strip(),
                    "additions": additions,
                    "deletions": deletions,
                    "files_changed": len(paths),
                    "parents": parents.split(),
                    "file_paths": paths,
                }
            )
        return records

    @staticmethod
    def _parse_numstat(text: str) -> tuple[int, int, list[str]]:
        additions = 0
        deletions = 0
        paths: list[str] = []
        for line in text.splitlines():
            cols = line.split("\t")
            if len(cols) != 3:
                continue
            added, deleted, path = cols
            # Binary files report "-" for both counts
            if added.isdigit():
                additions += int(added)
            if deleted.isdigit():
                deletions += int(deleted)
            paths.append(_resolve_rename(path))
        return additions, deletions, paths


def _resolve_rename(path: str) -> str:
    """Map numstat rename notation (``a => b`` or ``dir/{a => b}/f``) to the new path."""
    if " => " not in path:
        return path
    if "{" in path:
        resolved = _BRACE_RENAME_RE.sub(lambda m: m.group(2), path)
        return resolved.replace("//", "/")
    return path.split(" => ", 1)[1]
