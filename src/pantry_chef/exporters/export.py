"""Recipe rendering and plain-text export.

format_recipe_for_export() produces the text used both for copying and for
.txt export. Its layout is fixed:

    Recipe: <name>
    Rating: <rating> / 5
    Description: <description>
    Ingredients: one "- <quantity> <item>" line each
    Instructions: one "<n>. <step>" line each
    Chef's Notes: only when the recipe has notes
"""

import math
from pathlib import Path
from typing import Union

from pantry_chef.models.models import Recipe
from pantry_chef.utils.logger import logger


TOTAL_STARS = 5


def format_rating(rating: float) -> str:
    """Print whole ratings without a decimal part: 4.0 -> '4', 4.5 -> '4.5'."""
    return f"{rating:g}"


def format_recipe_for_export(recipe: Recipe) -> str:
    content = f"Recipe: {recipe.recipe_name}\n\n"
    content += f"Rating: {format_rating(recipe.rating)} / 5\n\n"
    content += f"Description: {recipe.description}\n\n"
    content += "Ingredients:\n"
    for ingredient in recipe.ingredients:
        content += f"- {ingredient.quantity} {ingredient.item}\n"
    content += "\nInstructions:\n"
    for index, step in enumerate(recipe.instructions, start=1):
        content += f"{index}. {step}\n"
    if recipe.notes:
        content += f"\nChef's Notes:\n{recipe.notes}\n"
    return content


def export_filename(recipe: Recipe) -> str:
    """File name for the .txt export: spaces become underscores."""
    return f"{recipe.recipe_name.replace(' ', '_')}.txt"


def save_recipe_as_txt(recipe: Recipe, directory: Union[str, Path] = ".") -> Path:
    """Write the export text to <directory>/<export_filename>.

    Returns:
        Path of the written file.
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(recipe)
    path.write_text(format_recipe_for_export(recipe), encoding="utf-8")
    logger.info(f"Saved recipe '{recipe.recipe_name}' to {path}")
    return path


def star_rating(rating: float) -> str:
    """Five-character star bar; filled stars are the rating rounded half-up."""
    filled = max(0, min(TOTAL_STARS, int(math.floor(rating + 0.5))))
    return "★" * filled + "☆" * (TOTAL_STARS - filled)


def render_recipe_markdown(recipe: Recipe) -> str:
    """Markdown display view of a recipe card."""
    lines = [
        f"## {recipe.recipe_name}",
        "",
        f"{star_rating(recipe.rating)} ({format_rating(recipe.rating)} / 5)",
        "",
        recipe.description,
        "",
        "### Ingredients",
        "",
    ]
    for ingredient in recipe.ingredients:
        if ingredient.quantity:
            lines.append(f"- **{ingredient.quantity}** {ingredient.item}")
        else:
            lines.append(f"- {ingredient.item}")
    lines += ["", "### Instructions", ""]
    for index, step in enumerate(recipe.instructions, start=1):
        lines.append(f"{index}. {step}")
    if recipe.notes:
        lines += ["", "> **Chef's Notes**", ">", f"> {recipe.notes}"]
    return "\n".join(lines) + "\n"
