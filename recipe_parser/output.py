"""
Serialisation of compiled recipes.

A recipe collection is written as three kinds of output:

* A JSON array of recipes (see :py:func:`dump_recipes`).
* A manifest, ``recipes-manifest.json``, written alongside the JSON,
  containing a SHA-256 hash of the JSON and the number of recipes (see
  :py:func:`make_manifest`). Clients may use the hash to detect changes.
* A small HTML page per recipe, ``r/<id>.html``, carrying link-preview
  metadata and redirecting to the recipe's page in the web app (see
  :py:func:`render_redirect_page`).

Output is deterministic: compiling the same recipes always produces
byte-identical files.

.. autofunction:: write_outputs
"""

from typing import Any, Dict, List, Sequence

from pathlib import Path

import hashlib

import json

from recipe_parser.recipe import Recipe, Ingredient, ParsedQuantity

from recipe_parser.templates import redirect_template


__all__ = [
    "MANIFEST_FILENAME",
    "REDIRECT_DIRECTORY",
    "quantity_to_json",
    "ingredient_to_json",
    "recipe_to_json",
    "dump_recipes",
    "make_manifest",
    "render_redirect_page",
    "write_outputs",
]


MANIFEST_FILENAME = "recipes-manifest.json"
REDIRECT_DIRECTORY = "r"

DEFAULT_SITE_NAME = "BiteMe"
DEFAULT_SITE_URL = "https://biteme.ovh"


def quantity_to_json(quantity: ParsedQuantity) -> Dict[str, Any]:
    out: Dict[str, Any] = {"amount": float(quantity.amount)}
    if quantity.amount_max is not None:
        out["amount_max"] = float(quantity.amount_max)
    if quantity.unit is not None:
        out["unit"] = quantity.unit
    out["item"] = quantity.item
    if quantity.secondary_amount is not None:
        out["secondary_amount"] = float(quantity.secondary_amount)
        if quantity.secondary_unit is not None:
            out["secondary_unit"] = quantity.secondary_unit
        if quantity.secondary_prefix is not None:
            out["secondary_prefix"] = quantity.secondary_prefix
    if quantity.prefix is not None:
        out["prefix"] = quantity.prefix
    return out


def ingredient_to_json(ingredient: Ingredient) -> Dict[str, Any]:
    out: Dict[str, Any] = {"id": ingredient.id, "text": ingredient.text}
    if ingredient.quantity is not None:
        out["quantity"] = quantity_to_json(ingredient.quantity)
    return out


def recipe_to_json(recipe: Recipe) -> Dict[str, Any]:
    """
    Convert a recipe into a JSON-serialisable dictionary. Optional fields are
    omitted when not given.
    """
    fm = recipe.frontmatter
    out: Dict[str, Any] = {
        "id": fm.id,
        "name": fm.name,
        "description": fm.description,
        "servings": fm.servings,
        "time": fm.time,
        "difficulty": fm.difficulty.value,
        "tags": list(fm.tags),
    }
    if fm.author is not None:
        out["author"] = fm.author
    out["date"] = fm.date
    if recipe.notes is not None:
        out["notes"] = recipe.notes
    out["ingredients"] = {
        category.value: [ingredient_to_json(i) for i in ingredients]
        for category, ingredients in recipe.ingredients.items()
    }
    out["steps"] = list(recipe.steps)
    if recipe.serving_suggestions is not None:
        out["serving_suggestions"] = recipe.serving_suggestions
    return out


def dump_recipes(recipes: Sequence[Recipe]) -> str:
    """Serialise a list of recipes as a (pretty printed) JSON array."""
    return json.dumps(
        [recipe_to_json(recipe) for recipe in recipes],
        indent=2,
        ensure_ascii=False,
    )


def make_manifest(recipes_json: str, recipe_count: int) -> Dict[str, Any]:
    """
    Produce the manifest for a given recipes JSON document.
    """
    return {
        "version": hashlib.sha256(recipes_json.encode("utf-8")).hexdigest(),
        "recipe_count": recipe_count,
    }


def render_redirect_page(
    recipe: Recipe,
    site_name: str = DEFAULT_SITE_NAME,
    site_url: str = DEFAULT_SITE_URL,
) -> str:
    return redirect_template.render(
        recipe=recipe,
        site_name=site_name,
        site_url=site_url.rstrip("/"),
    )


def write_outputs(
    recipes: Sequence[Recipe],
    output: Path,
    site_name: str = DEFAULT_SITE_NAME,
    site_url: str = DEFAULT_SITE_URL,
) -> List[Path]:
    """
    Write the recipes JSON to the given path, along with the manifest and
    redirect pages.

    Returns
    =======
    [path, ...]
        The files written: the recipes JSON, the manifest then the redirect
        pages.
    """
    recipes_json = dump_recipes(recipes)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(recipes_json, encoding="utf-8")

    manifest_path = output.with_name(MANIFEST_FILENAME)
    manifest_path.write_text(
        json.dumps(make_manifest(recipes_json, len(recipes)), indent=2),
        encoding="utf-8",
    )

    written = [output, manifest_path]

    redirect_directory = output.parent / REDIRECT_DIRECTORY
    redirect_directory.mkdir(parents=True, exist_ok=True)
    for recipe in recipes:
        path = redirect_directory / f"{recipe.id}.html"
        path.write_text(
            render_redirect_page(recipe, site_name, site_url), encoding="utf-8"
        )
        written.append(path)

    return written
