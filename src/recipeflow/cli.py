from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable

from .cadence import ClockCadence
from .catalog import RecipeCatalog, load_catalog
from .config import EffectiveConfig, config_to_toml, resolve_config
from .domain import RecipeRecord
from .errors import (
    ConfigError,
    MissingFileError,
    RecipeflowError,
    ValidationError,
)
from .events import TimerCompleted, TimerEvent, TimerStarted
from .log import configure_logging
from .session import Session
from .timers import STATUS_COMPLETE, TimerView


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "list": _cmd_list,
        "cuisines": _cmd_cuisines,
        "show": _cmd_show,
        "cook": _cmd_cook,
        "config": _cmd_config,
    }

    if args.tui or not args.command:
        handler = _cmd_tui
    else:
        handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover

    try:
        return handler(args)
    except RecipeflowError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except Exception as exc:  # pragma: no cover
        print(str(exc), file=sys.stderr)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--catalog")
    common.add_argument("--project")
    common.add_argument("--profile")
    common.add_argument("--log-level")
    common.add_argument("--tick-seconds", type=float)
    common.add_argument("--warning-seconds", type=int)
    common.add_argument("--tui-header-icon")
    common.add_argument("--tui-layout")
    common.add_argument("--tui-density")

    parser = argparse.ArgumentParser(prog="recipeflow", parents=[common])
    parser.add_argument("--tui", action="store_true", help="Launch interactive TUI")
    sub = parser.add_subparsers(dest="command")

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--region")
    listing.add_argument("--subregion")
    listing.add_argument("--search", default="")
    listing.add_argument("--mood")
    listing.add_argument("--json", action="store_true")

    sub.add_parser("cuisines", parents=[common])

    show = sub.add_parser("show", parents=[common])
    show.add_argument("recipe_id")

    cook = sub.add_parser("cook", parents=[common])
    cook.add_argument("recipe_id")
    cook.add_argument("--step", dest="steps", type=int, action="append", required=True)
    cook.add_argument("--max-ticks", type=int)
    cook.add_argument("--verbose", action="store_true")

    sub.add_parser("config", parents=[common])

    return parser


def _cmd_list(args: argparse.Namespace) -> int:
    session = Session(_load(_resolve_cfg(args)))
    if args.region:
        session.select_cuisine(args.region, args.subregion)
    session.set_search(args.search)
    if args.mood:
        session.toggle_mood(args.mood)

    recipes = session.visible_recipes()
    if args.json:
        print(json.dumps([_recipe_summary(rec) for rec in recipes], indent=2, ensure_ascii=False))
    else:
        for rec in recipes:
            print(f"{rec.recipe_id}: {rec.title} [{rec.cuisine.region} / {rec.cuisine.subregion}]")
        print(session.result_summary(), file=sys.stderr)
    return 0


def _cmd_cuisines(args: argparse.Namespace) -> int:
    catalog = _load(_resolve_cfg(args))
    for entry in catalog.cuisines:
        print(f"{entry.region} ({len(entry.subregions)} regions)")
        for sub in entry.subregions:
            suffix = f" - {sub.description}" if sub.description else ""
            print(f"  {sub.name}{suffix}")
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    catalog = _load(_resolve_cfg(args))
    recipe = _require_recipe(catalog, args.recipe_id)
    for line in format_recipe(recipe):
        print(line)
    return 0


def _cmd_cook(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    catalog = _load(cfg)
    recipe = _require_recipe(catalog, args.recipe_id)

    cadence = ClockCadence(interval=cfg.timers.tick_seconds)
    session = Session(catalog, cadence=cadence, warning_seconds=cfg.timers.warning_seconds)
    session.subscribe(_print_event)
    session.select_recipe(recipe.recipe_id)

    started = []
    for step_index in args.steps:
        timer_id = session.start_step_timer(step_index)
        if timer_id is None:
            print(f"Step {step_index}: no timer to start", file=sys.stderr)
            continue
        started.append(timer_id)
    if not started:
        raise ValidationError(f"No timers to run for {recipe.recipe_id}")

    def _report(beat: int) -> None:
        print(" | ".join(format_timer(view) for view in session.timers()))

    def _all_done() -> bool:
        return all(view.status == STATUS_COMPLETE for view in session.timers())

    cadence.run(max_beats=args.max_ticks, until=_all_done, on_beat=_report if args.verbose else None)
    for view in session.timers():
        print(format_timer(view))
    return 0


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg))
    return 0


def _cmd_tui(args: argparse.Namespace) -> int:
    try:
        from .tui import run_tui
    except ImportError as exc:
        raise ConfigError("Textual is required for the recipeflow TUI. Install recipeflow with its dependencies.") from exc

    cli_args = _cli_args_dict(args)
    cfg = resolve_config(cli_args)
    configure_logging(cfg.log_level)
    return run_tui(cli_args)


def format_recipe(recipe: RecipeRecord) -> list[str]:
    lines = [recipe.title, f"{recipe.cuisine.region} / {recipe.cuisine.subregion}"]
    if recipe.description:
        lines.append(recipe.description)
    facts = []
    if recipe.total_time_min is not None:
        facts.append(f"{recipe.total_time_min} min")
    if recipe.serves is not None:
        facts.append(f"Serves {recipe.serves}")
    if recipe.difficulty:
        facts.append(recipe.difficulty)
    if facts:
        lines.append(" · ".join(facts))
    tags = list(recipe.diet) + list(recipe.mood_tags)
    if tags:
        lines.append("Tags: " + ", ".join(tags))

    if recipe.prerequisites:
        lines.append("")
        lines.append("Prerequisites")
        lines.extend(f"- {item}" for item in recipe.prerequisites)

    lines.append("")
    lines.append("Ingredients")
    for ing in recipe.ingredients:
        amount = ing.amount()
        alt = f" (alt: {', '.join(ing.substitutions)})" if ing.substitutions else ""
        lines.append(f"- {ing.name}{': ' + amount if amount else ''}{alt}")

    if recipe.nutrition is not None and recipe.nutrition.facts():
        lines.append("")
        lines.append("Nutrition (per serving)")
        lines.extend(f"- {label}: {value}" for label, value in recipe.nutrition.facts())

    lines.append("")
    lines.append(f"Steps ({len(recipe.steps)})")
    for step in recipe.steps:
        timer = f" [{step.timer_min}m timer]" if step.has_timer else ""
        lines.append(f"{step.index}. {step.title}{timer}")
        if step.text:
            lines.append(f"   {step.text}")
        if step.youtube:
            lines.append(f"   Video: {step.youtube}")
    return lines


def format_timer(view: TimerView) -> str:
    state = "done" if view.status == STATUS_COMPLETE else ("running" if view.running else "paused")
    return f"{view.name} {view.clock} ({view.status}, {state})"


def _print_event(event: TimerEvent) -> None:
    if isinstance(event, TimerStarted):
        print(f"Timer Started! ⏰ {event.message()}")
    elif isinstance(event, TimerCompleted):
        print(f"Timer Complete! 🎉 {event.message()}")


def _recipe_summary(recipe: RecipeRecord) -> dict[str, object]:
    return {
        "id": recipe.recipe_id,
        "title": recipe.title,
        "region": recipe.cuisine.region,
        "subregion": recipe.cuisine.subregion,
        "difficulty": recipe.difficulty,
        "total_time_min": recipe.total_time_min,
        "mood_tags": list(recipe.mood_tags),
    }


def _require_recipe(catalog: RecipeCatalog, recipe_id: str) -> RecipeRecord:
    recipe = catalog.get(recipe_id)
    if recipe is None:
        raise ValidationError(f"Unknown recipe: {recipe_id}")
    return recipe


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    cfg = resolve_config(_cli_args_dict(args))
    configure_logging(cfg.log_level)
    return cfg


def _load(cfg: EffectiveConfig) -> RecipeCatalog:
    return load_catalog(cfg.catalog_path)


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _exit_code(exc: RecipeflowError) -> int:
    if isinstance(exc, ConfigError):
        return 2
    if isinstance(exc, MissingFileError):
        return 3
    if isinstance(exc, ValidationError):
        return 4
    return 1
