# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Detect single- versus multi-module build layouts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from ..config import FieldPath, empty_config
from ..context import ProjectContext
from .base import Confidence, DetectedValue, DetectionResult

SETTINGS_SCRIPTS: Final[tuple[str, ...]] = ("settings.gradle.kts", "settings.gradle")
BUILD_SCRIPTS: Final[tuple[str, ...]] = ("build.gradle.kts", "build.gradle")
PUBLISH_PLUGIN_MARKERS: Final[tuple[str, ...]] = ("`maven-publish`", "'maven-publish'", '"maven-publish"')

_CALL_INCLUDE_RE = re.compile(r"include\s*\(\s*([^)]+)\)")
_BARE_INCLUDE_RE = re.compile(r"""include\s+(["'][^"'\n]+["'](?:\s*,\s*["'][^"'\n]+["'])*)""")


@dataclass(frozen=True, slots=True)
class BuildModule:
    """A single module in the build."""

    name: str
    path: str
    directory: Path
    build_file: str | None
    publishable: bool


@dataclass(frozen=True, slots=True)
class ModuleStructure:
    """Layout of the build's modules."""

    multi_module: bool
    root: BuildModule
    modules: tuple[BuildModule, ...]

    @property
    def all_modules(self) -> tuple[BuildModule, ...]:
        return (self.root, *self.modules)

    @property
    def publishable_modules(self) -> tuple[BuildModule, ...]:
        return tuple(module for module in self.all_modules if module.publishable)


def included_modules(settings: str) -> list[str]:
    """Return module paths named by ``include`` statements, without duplicates."""

    found: list[str] = []
    for pattern in (_CALL_INCLUDE_RE, _BARE_INCLUDE_RE):
        for match in pattern.finditer(settings):
            for entry in match.group(1).split(","):
                cleaned = entry.strip().strip("\"'").strip()
                if cleaned and cleaned not in found:
                    found.append(cleaned)
    return found


def _find_build_file(context: ProjectContext, directory: Path) -> tuple[str | None, str]:
    for script in BUILD_SCRIPTS:
        content = context.read_file(directory / script)
        if content is not None:
            return script, content
    return None, ""


def _build_module(context: ProjectContext, module_path: str) -> BuildModule:
    relative = Path(*module_path.lstrip(":").split(":"))
    build_file, content = _find_build_file(context, relative)
    return BuildModule(
        name=module_path.rsplit(":", 1)[-1],
        path=module_path if module_path.startswith(":") else f":{module_path}",
        directory=context.project_dir / relative,
        build_file=build_file,
        publishable=any(marker in content for marker in PUBLISH_PLUGIN_MARKERS),
    )


def analyze_module_structure(context: ProjectContext) -> ModuleStructure | None:
    """Analyse the build layout rooted at the context's project directory.

    Args:
        context: Project context to inspect.

    Returns:
        ModuleStructure | None: Layout description, or ``None`` when neither a
        settings script nor a build script exists.
    """

    settings = next(
        (content for script in SETTINGS_SCRIPTS if (content := context.read_file(script)) is not None),
        None,
    )
    root_build, root_content = _find_build_file(context, Path())
    if settings is None and root_build is None:
        return None
    root = BuildModule(
        name=context.project_dir.name,
        path=":",
        directory=context.project_dir,
        build_file=root_build,
        publishable=any(marker in root_content for marker in PUBLISH_PLUGIN_MARKERS),
    )
    if settings is None:
        return ModuleStructure(multi_module=False, root=root, modules=())
    modules = tuple(
        module
        for module in (_build_module(context, entry) for entry in included_modules(settings))
        if module.build_file is not None
    )
    return ModuleStructure(multi_module=True, root=root, modules=modules)


class ModuleStructureDetector:
    """Report the module layout as diagnostics without proposing configuration."""

    name = "ModuleStructureDetector"
    category = "project_info"
    enabled_by_default = True

    def detect(self, context: ProjectContext) -> DetectionResult | None:
        structure = analyze_module_structure(context)
        if structure is None:
            return None
        detected: dict[FieldPath, DetectedValue] = {}
        layout = "multi-module" if structure.multi_module else "single-module"
        source = "settings.gradle[.kts]" if structure.multi_module else "build.gradle[.kts]"
        detected["modules.structure"] = DetectedValue("modules.structure", layout, source, Confidence.HIGH)
        if structure.multi_module:
            detected["modules.count"] = DetectedValue(
                "modules.count", str(len(structure.modules)), "settings.gradle[.kts]", Confidence.HIGH
            )
            detected["modules.publishable"] = DetectedValue(
                "modules.publishable",
                str(len(structure.publishable_modules)),
                "build files analysis",
                Confidence.MEDIUM,
            )
        return DetectionResult(config=empty_config(), detected_values=detected)


__all__ = [
    "BuildModule",
    "ModuleStructure",
    "ModuleStructureDetector",
    "analyze_module_structure",
    "included_modules",
]
