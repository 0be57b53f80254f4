"""
Build use case — turn project.yml declarations into live RootModels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from orderroots.core.config.loader import ConfigError, load_project
from orderroots.core.models.project import Project
from orderroots.core.models.root_model import RootModel
from orderroots.core.use_cases.reconcile import reconcile

logger = logging.getLogger(__name__)


def build_root_models(project: Project) -> dict[str, RootModel]:
    """Create one RootModel per declared module, in declaration order.

    The returned dict is what keeps the models alive; entries only hold
    weak references back to them.
    """
    models: dict[str, RootModel] = {}
    for mod in project.modules:
        model = RootModel(mod.name, with_source=False)
        reconcile(model, mod, default_sdk=project.sdk)
        models[mod.name] = model
        logger.debug("Built %r", model)
    return models


@dataclass
class OrderResult:
    """Ordered entries for one or all modules of a project."""

    project: Project | None = None
    models: dict[str, RootModel] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project": self.project.name if self.project else "",
            "sdk": self.project.sdk if self.project else None,
            "modules": [m.to_dict() for m in self.models.values()],
        }


def get_order(config_path: Path | None = None, module: str | None = None) -> OrderResult:
    """Load the project and build the ordered entries.

    Args:
        config_path: Optional explicit path to project.yml.
        module: Restrict the result to this module.

    Returns:
        OrderResult; ``error`` is set when config is unusable or the
        module is unknown.
    """
    result = OrderResult()

    try:
        project = load_project(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.project = project

    if module is not None and project.get_module(module) is None:
        result.error = f"Unknown module '{module}'"
        return result

    models = build_root_models(project)
    if module is not None:
        models = {module: models[module]}
    result.models = models
    return result
