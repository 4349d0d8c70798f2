from __future__ import annotations

from importlib import import_module
from pathlib import Path
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException

from universe.errors import ValidationNormalizeMiddleware, register_error_handlers
from universe.logger import setup_logger
from universe.registry import MODULES_PATH, load_modules

logger = structlog.get_logger(__name__)

CATEGORY_DESCRIPTIONS = {
    "Numbers": "Recognize and convert numbers between bases.",
    "Utilities": "Small, practical tools for quick one-off tasks.",
    "Other": "Useful modules that do not fit a core category.",
}
DEFAULT_CATEGORY_DESCRIPTION = "Practical utilities for quick tasks."


def _slugify(value: str) -> str:
    return value.strip().lower().replace(" ", "-")


def _public_entry(module: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": module["name"],
        "title": module.get("title") or module["name"],
        "description": module.get("description") or "",
        "mount": module["mount"],
    }


def build_categories(modules_path: Path = MODULES_PATH) -> list[dict[str, Any]]:
    grouped: dict[str, list[dict[str, Any]]] = {}
    for module in load_modules(modules_path).values():
        if not module.get("public", True):
            continue
        category = str(module.get("category") or "Other")
        grouped.setdefault(category, []).append(_public_entry(module))

    categories: list[dict[str, Any]] = []
    for category, items in sorted(grouped.items(), key=lambda item: item[0].lower()):
        items.sort(key=lambda item: item["title"])
        categories.append(
            {
                "name": category,
                "slug": _slugify(category),
                "description": CATEGORY_DESCRIPTIONS.get(
                    category, DEFAULT_CATEGORY_DESCRIPTION
                ),
                "modules": items,
            }
        )
    return categories


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)


def build_app(modules_path: Path = MODULES_PATH) -> FastAPI:
    setup_logger()
    app = FastAPI(title="Sparky Universe")
    app.add_middleware(ValidationNormalizeMiddleware)
    register_error_handlers(app)

    @app.get("/")
    def universe_index():
        return {"categories": build_categories(modules_path)}

    @app.get("/category/{slug}")
    def category_index(slug: str):
        categories = build_categories(modules_path)
        category = next((item for item in categories if item["slug"] == slug), None)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    for meta in load_modules(modules_path).values():
        api_entry = (meta.get("entrypoints") or {}).get("api")
        if not api_entry:
            continue

        try:
            subapp = import_attr(api_entry)
        except (ImportError, AttributeError, ValueError) as exc:
            logger.warning("engine.mount_failed", module=meta["name"], error=str(exc))
            continue

        app.mount(meta["mount"], subapp)
        logger.info("engine.mounted", module=meta["name"], mount=meta["mount"])

    return app
