from __future__ import annotations

from ..catalog import load_catalog
from ..config import resolve_config
from .app import RecipeflowApp


def run_tui(cli_args: dict[str, object]) -> int:
    cfg = resolve_config(cli_args)
    catalog = load_catalog(cfg.catalog_path)
    app = RecipeflowApp(cfg, catalog)
    app.run()
    return 0


__all__ = ["run_tui", "RecipeflowApp"]
