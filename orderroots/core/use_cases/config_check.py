"""
Config check use case — validate project.yml and report issues.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path

from orderroots.core.config.loader import ConfigError, find_project_file, load_project
from orderroots.core.models.project import Project


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    project: Project | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.project.name if self.project else None,
            "module_count": len(self.project.modules) if self.project else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate project configuration and report issues.

    Args:
        config_path: Optional explicit path to project.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_project_file()

    if config_path is None:
        result.errors.append("No project.yml found.")
        return result

    result.config_path = config_path

    try:
        project = load_project(config_path)
        result.project = project
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not project.modules:
        result.warnings.append("No modules defined. There is nothing to order.")

    names = Counter(project.module_names)
    dupes = sorted(n for n, count in names.items() if count > 1)
    if dupes:
        result.errors.append(f"Duplicate module names: {', '.join(dupes)}")

    for mod in project.modules:
        for dep_name in mod.module_dependency_names():
            if dep_name == mod.name:
                result.errors.append(f"Module '{mod.name}' depends on itself")
            elif dep_name not in names:
                result.errors.append(
                    f"Module '{mod.name}' depends on undeclared module '{dep_name}'"
                )

        keys = Counter(d.key for d in mod.dependencies)
        repeated = sorted({d.label for d in mod.dependencies if keys[d.key] > 1})
        if repeated:
            result.warnings.append(
                f"Module '{mod.name}' lists the same entry more than once: {', '.join(repeated)}"
            )

        sdks = [d for d in mod.dependencies if d.kind in ("sdk", "inherited-sdk")]
        if len(sdks) > 1:
            result.warnings.append(
                f"Module '{mod.name}' declares {len(sdks)} SDK entries; only one is used."
            )

    cyclic = find_dependency_cycles(project)
    if cyclic:
        result.warnings.append(f"Circular module dependencies: {', '.join(cyclic)}")

    project_root = config_path.parent
    for mod in project.modules:
        if not (project_root / mod.path).exists():
            result.warnings.append(f"Module '{mod.name}' path does not exist: {mod.path}")

    result.valid = len(result.errors) == 0
    return result


def find_dependency_cycles(project: Project) -> list[str]:
    """Modules on or behind a dependency cycle, sorted (Kahn's algorithm).

    Dependencies on undeclared modules are ignored here; they are
    reported separately.
    """
    declared = set(project.module_names)
    in_degree: dict[str, int] = {name: 0 for name in declared}
    dependents: dict[str, list[str]] = {name: [] for name in declared}

    for mod in project.modules:
        for dep in set(mod.module_dependency_names()):
            if dep in declared and dep != mod.name:
                in_degree[mod.name] += 1
                dependents[dep].append(mod.name)

    queue = [name for name, deg in in_degree.items() if deg == 0]
    processed: set[str] = set()
    while queue:
        node = queue.pop(0)
        processed.add(node)
        for successor in dependents[node]:
            in_degree[successor] -= 1
            if in_degree[successor] == 0:
                queue.append(successor)

    return sorted(declared - processed)
