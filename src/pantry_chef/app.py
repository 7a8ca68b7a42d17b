#!/usr/bin/env python3
"""Terminal front end for Pantry Chef.

Lists your ingredients, asks Gemini for recipes and prints them as recipe
cards. Each recipe can be exported to a .txt file.

Usage:
    pantry-chef -i "2 egg" -i "1 cup|rice" -i spinach
    pantry-chef -i chicken --cuisine Italian --language French
    pantry-chef --surprise --diet vegan
    pantry-chef -i tofu --export recipes/      # also save each recipe as .txt
    pantry-chef -i tofu --export               # save to EXPORT_DIR
    pantry-chef --debug -i tofu                # print the raw recipe JSON too
    pantry-chef --toggle-theme                 # switch light/dark and exit

Ingredients are given as "ITEM", "QTY ITEM" (QTY is the first word when it
starts with a digit) or "QTY|ITEM" for multi-word quantities.
"""

import asyncio
import re
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.theme import Theme

from pantry_chef.exporters.export import render_recipe_markdown, save_recipe_as_txt
from pantry_chef.models.models import Recipe
from pantry_chef.session.state import GenerationOutcome, RecipeSession
from pantry_chef.session.theme import ThemeStore
from pantry_chef.utils.config import config
from pantry_chef.utils.logger import logger


USAGE = (
    'Usage: pantry-chef [-i "QTY ITEM"]... [--surprise] [--diet D] [--cuisine C] '
    "[--difficulty D] [--time T] [--language L] [--export [DIR]] [--debug] [--toggle-theme]"
)

THEMES = {
    "light": Theme(
        {
            "recipe.accent": "bold green4",
            "recipe.error": "bold red3",
            "recipe.muted": "grey42",
        }
    ),
    "dark": Theme(
        {
            "recipe.accent": "bold bright_green",
            "recipe.error": "bold bright_red",
            "recipe.muted": "grey70",
        }
    ),
}

# Flags that take a value, mapped to RecipeOptions fields
OPTION_FLAGS = {
    "--diet": "dietary_preferences",
    "--cuisine": "cuisine",
    "--difficulty": "difficulty",
    "--time": "cooking_time",
    "--language": "language",
}

_QUANTITY_PATTERN = re.compile(r"^\d")


class UsageError(Exception):
    """Invalid command line."""


def parse_ingredient(value: str) -> Tuple[str, str]:
    """Split an ingredient argument into (item, quantity)."""
    if "|" in value:
        quantity, _, item = value.partition("|")
        return item.strip(), quantity.strip()
    parts = value.strip().split(maxsplit=1)
    if len(parts) == 2 and _QUANTITY_PATTERN.match(parts[0]):
        return parts[1], parts[0]
    return value.strip(), ""


def parse_args(argv: List[str]) -> dict:
    """Parse command-line flags.

    Raises:
        UsageError: Unknown flag, missing flag value or stray argument.
    """
    args = {
        "ingredients": [],
        "options": {},
        "surprise": False,
        "export_dir": None,
        "debug": False,
        "toggle_theme": False,
    }
    index = 0
    while index < len(argv):
        flag = argv[index]
        if flag == "--export":
            # Bare --export writes to EXPORT_DIR
            if index + 1 < len(argv) and not argv[index + 1].startswith("-"):
                args["export_dir"] = argv[index + 1]
                index += 2
            else:
                args["export_dir"] = config.EXPORT_DIR
                index += 1
        elif flag in ("--ingredient", "-i") or flag in OPTION_FLAGS:
            if index + 1 >= len(argv):
                raise UsageError(f"{flag} flag requires a value")
            value = argv[index + 1]
            if flag in ("--ingredient", "-i"):
                args["ingredients"].append(parse_ingredient(value))
            else:
                args["options"][OPTION_FLAGS[flag]] = value
            index += 2
        elif flag == "--surprise":
            args["surprise"] = True
            index += 1
        elif flag == "--debug":
            args["debug"] = True
            index += 1
        elif flag == "--toggle-theme":
            args["toggle_theme"] = True
            index += 1
        else:
            raise UsageError(f"Unknown argument: {flag}")
    return args


def render_outcome(
    console: Console,
    outcome: GenerationOutcome,
    export_dir: Optional[str] = None,
    debug: bool = False,
) -> int:
    """Print the result of a generate action. Returns the process exit code."""
    if not outcome.ok:
        console.print(Panel(outcome.error or "Request ignored: a recipe request is already running.", style="recipe.error"))
        return 1

    recipes: List[Recipe] = outcome.recipes or []
    if debug:
        console.print_json(data=[recipe.model_dump(by_alias=True) for recipe in recipes])

    for recipe in recipes:
        console.print(Panel(Markdown(render_recipe_markdown(recipe)), border_style="recipe.accent"))
        if export_dir:
            path = save_recipe_as_txt(recipe, export_dir)
            console.print(f"[recipe.muted]Saved to {path}[/recipe.muted]")
    return 0


def run(args: dict, session: RecipeSession) -> int:
    if args["toggle_theme"]:
        theme = session.toggle_theme()
        Console(theme=THEMES[theme]).print(f"[recipe.accent]Theme set to {theme}[/recipe.accent]")
        if not args["ingredients"] and not args["surprise"]:
            return 0

    console = Console(theme=THEMES[session.state.theme])

    for item, quantity in args["ingredients"]:
        if not session.add_ingredient(item, quantity):
            logger.warning(f"Skipping blank or duplicate ingredient: {item!r}")
    session.update_options(**args["options"])

    if args["surprise"]:
        coro = session.surprise_me()
        status = "Finding a surprise recipe for you..."
    else:
        coro = session.generate_from_ingredients()
        status = "Crafting delicious recipes for you..."

    with console.status(status):
        outcome = asyncio.run(coro)

    return render_outcome(console, outcome, export_dir=args["export_dir"], debug=args["debug"])


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        args = parse_args(argv)
    except UsageError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    if "language" not in args["options"]:
        args["options"]["language"] = config.DEFAULT_LANGUAGE

    session = RecipeSession(theme_store=ThemeStore(config.PREFERENCES_FILE))
    try:
        return run(args, session)
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 0


if __name__ == "__main__":
    sys.exit(main())
