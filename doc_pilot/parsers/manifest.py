"""Local project manifest reader.

Looks up the version of a library declared by the project in the
current directory, so the prompt can name the version actually in use.
package.json is checked first, then requirements files.
"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from doc_pilot.utils.config import ManifestConfig

logger = logging.getLogger(__name__)

_REQUIREMENT_RE = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._-]*)(?:\[[^\]]*\])?\s*(.*)$")


def _normalize(name: str) -> str:
    """Normalize a Python distribution name for comparison."""
    return re.sub(r"[-_.]+", "-", name).lower()


def read_package_json_version(
    library: str,
    manifest_path: Path,
    sections: Optional[list[str]] = None,
) -> Optional[str]:
    """Read a dependency version from a package.json file.

    Args:
        library: npm package name to look up.
        manifest_path: Path to package.json.
        sections: Dependency sections to search, in order.

    Returns:
        The declared version specifier, or None if not declared.

    Raises:
        json.JSONDecodeError: If the manifest is not valid JSON.
    """
    if not manifest_path.exists():
        return None

    sections = sections or ["dependencies", "devDependencies"]
    package = json.loads(manifest_path.read_text(encoding="utf-8"))
    for section in sections:
        version = (package.get(section) or {}).get(library)
        if version:
            logger.debug("Found %s %s in %s.%s", library, version, manifest_path, section)
            return version
    return None


def read_requirements_version(library: str, requirements_path: Path) -> Optional[str]:
    """Read a version specifier from a pip requirements file.

    Args:
        library: Distribution name to look up.
        requirements_path: Path to the requirements file.

    Returns:
        The specifier part of the matching line (e.g. "==2.31.0"), or
        None if the library is absent or unpinned.
    """
    if not requirements_path.exists():
        return None

    wanted = _normalize(library)
    for line in requirements_path.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if not line or line.startswith("-"):
            continue
        match = _REQUIREMENT_RE.match(line)
        if match and _normalize(match.group(1)) == wanted:
            specifier = match.group(2).split(";", 1)[0].strip()
            return specifier or None
    return None


def find_declared_version(
    library: str,
    project_dir: Optional[Path] = None,
    config: Optional[ManifestConfig] = None,
) -> Optional[str]:
    """Find the version of a library declared by the local project.

    Args:
        library: Library name as given on the command line.
        project_dir: Directory holding the manifests. Defaults to the
            current working directory.
        config: Manifest lookup settings. Uses defaults if not provided.

    Returns:
        The first declared version specifier found, or None.
    """
    config = config or ManifestConfig()
    if not config.enabled:
        return None

    root = project_dir or Path.cwd()

    version = read_package_json_version(
        library, root / "package.json", config.package_json_sections
    )
    if version:
        return version

    for name in config.requirements_files:
        version = read_requirements_version(library, root / name)
        if version:
            return version
    return None
