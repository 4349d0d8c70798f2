from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

MODULES_PATH = Path(__file__).parent.parent / "modules"
ENTRYPOINT_GROUP = "sparky.modules"

logger = structlog.get_logger(__name__)


def _mount_from(slug: str, raw: str | None) -> str:
    mount = raw or f"/{slug}"
    if not mount.startswith("/"):
        mount = "/" + mount
    if mount != "/" and mount.endswith("/"):
        mount = mount.rstrip("/")
    return mount


def _normalize_module(
    data: Dict[str, Any],
    *,
    source: str,
    path: Path | None = None,
    entry_point: str | None = None,
) -> Dict[str, Any] | None:
    name = data.get("name")
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    public = data.get("public")

    normalized = {**data}
    normalized.update(
        {
            "name": name,
            "slug": slug,
            "mount": _mount_from(slug, data.get("mount")),
            "public": True if public is None else bool(public),
            "source": source,
        }
    )
    if path is not None:
        normalized["path"] = path
    if entry_point is not None:
        normalized["entry_point"] = entry_point
    return normalized


def load_filesystem_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for manifest in sorted(modules_path.glob("*/module.yaml")):
        try:
            data = yaml.safe_load(manifest.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            logger.warning("registry.invalid_manifest", path=str(manifest), error=str(exc))
            continue
        normalized = _normalize_module(data, source="filesystem", path=manifest.parent)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_entrypoint_modules(group: str = ENTRYPOINT_GROUP) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    for entry in metadata.entry_points(group=group):
        try:
            obj = entry.load()
        except Exception as exc:
            logger.warning("registry.entry_point_failed", entry=entry.name, error=str(exc))
            continue

        data = obj() if callable(obj) else obj
        if not isinstance(data, dict):
            continue

        normalized = _normalize_module(data, source="entry_point", entry_point=entry.name)
        if normalized:
            modules[normalized["name"]] = normalized
    return modules


def load_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules = load_filesystem_modules(modules_path)
    for name, data in load_entrypoint_modules().items():
        modules.setdefault(name, data)
    return modules
