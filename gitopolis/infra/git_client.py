"""
Git client infrastructure for gitopolis.

Only what the repository list needs from git: the remotes of a working
copy, recorded when a repo is added.
"""

import subprocess
from typing import Dict, List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


class GitClient:
    """
    Abstraction over git commands.

    Example:
        client = GitClient()
        remotes = client.read_all_remotes("my-repo")
        print(remotes.get("origin"))
    """

    def __init__(self, timeout: int = 30):
        """
        Initialize GitClient.

        Args:
            timeout: Command timeout in seconds (default: 30)
        """
        self.timeout = timeout

    def _run(self, args: List[str], cwd: str) -> Tuple[Optional[str], int]:
        """
        Run a git command.

        Returns:
            Tuple of (stdout, returncode); (None, -1) if git could not run
        """
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout
            )
            return result.stdout, result.returncode
        except subprocess.TimeoutExpired:
            logger.warning(f"Git command timed out: git {' '.join(args)}")
            return None, -1
        except OSError as e:
            logger.debug(f"Git command failed: git {' '.join(args)} - {e}")
            return None, -1

    def read_all_remotes(self, path: str) -> Dict[str, str]:
        """
        Read every remote name and URL of a working copy.

        Args:
            path: Path to git repository

        Returns:
            Remote name to URL, empty if the folder isn't a repo or has none
        """
        output, code = self._run(
            ['config', '--get-regexp', r'^remote\..*\.url$'],
            cwd=path,
        )
        if code != 0 or not output:
            logger.debug(f"No remotes read from {path}")
            return {}

        remotes = {}
        for line in output.splitlines():
            key, _, url = line.partition(' ')
            if not key.startswith('remote.') or not key.endswith('.url'):
                continue
            name = key[len('remote.'):-len('.url')]
            if name and url:
                remotes[name] = url.strip()
        return remotes
