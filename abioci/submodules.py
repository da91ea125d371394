"""Git submodules as artifact payloads.

Every submodule becomes a small JSON document recording where it lives
and which commit is pinned, to be packaged one layer per submodule.
"""
import logging
import re
import shlex
import subprocess
from pathlib import Path

from pydantic import BaseModel

from abioci.oci import Payload

logger = logging.getLogger(__name__)

GITMODULES = ".gitmodules"
UNKNOWN_COMMIT = "UNKNOWN"

SECTION_RE = re.compile(r'^\[submodule\s+"(?P<name>.*)"\s*\]$')
KEY_RE = re.compile(r"^(?P<key>path|url|branch)\s*=\s*(?P<value>.*)$")


class Submodule(BaseModel):
    name: str
    path: str
    url: str | None = None
    commit: str = UNKNOWN_COMMIT
    branch: str = ""

    def payload(self) -> Payload:
        data = self.model_dump_json(exclude_none=True, indent=2)
        return Payload(name=self.name, data=data.encode("utf-8"))


def parse_gitmodules(text: str) -> dict[str, dict[str, str]]:
    """Parse the content of a .gitmodules file

    Returns a mapping of submodule name to its `path`, `url` and `branch`,
    in the order the submodules are declared.
    """
    submodules: dict[str, dict[str, str]] = {}
    current = None
    for line in text.splitlines():
        line = line.strip()
        if match := SECTION_RE.match(line):
            current = match["name"]
            submodules[current] = {"name": current}
        elif current is not None and (match := KEY_RE.match(line)):
            submodules[current][match["key"]] = match["value"].strip()
    return submodules


def parse_submodule_status(text: str) -> dict[str, str]:
    """Parse `git submodule status` output into a mapping of path to commit

    Lines look like ` b10709c... deps/foo (heads/main)`, where the commit
    can be prefixed by `-` (not initialized), `+` (checked out commit differs)
    or `U` (merge conflicts).
    """
    result = {}
    for line in text.splitlines():
        parts = line.strip().split()
        if len(parts) >= 2:
            result[parts[1]] = parts[0].lstrip("-+U")
    return result


def submodule_status(repo: Path) -> dict[str, str]:
    """Return the pinned commit of every submodule in `repo`"""
    try:
        result = subprocess.run(
            shlex.split("git submodule status"),
            cwd=repo,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except subprocess.CalledProcessError as e:
        logger.error(
            "Error running git submodule status: %s", e.stderr.decode("utf-8").strip()
        )
        return {}
    except FileNotFoundError:
        logger.error("Error running git submodule status: git is not installed")
        return {}
    return parse_submodule_status(result.stdout.decode("utf-8"))


def discover(repo: Path) -> list[Submodule]:
    """Discover the submodules of the git repository at `repo`"""
    gitmodules = repo / GITMODULES
    if not gitmodules.is_file():
        logger.info("No %s found in %s", GITMODULES, repo)
        return []
    declared = parse_gitmodules(gitmodules.read_text(encoding="utf-8"))
    if not declared:
        return []
    commits = submodule_status(repo)
    submodules = []
    for name, info in declared.items():
        path = info.get("path", name)
        submodules.append(
            Submodule(
                name=name,
                path=path,
                url=info.get("url"),
                commit=commits.get(path, UNKNOWN_COMMIT),
                branch=info.get("branch", ""),
            )
        )
    return submodules
