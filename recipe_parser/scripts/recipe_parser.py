"""
The ``recipe-parser`` command compiles a directory of markdown recipes into a
single JSON file for use by the recipe web app.

Usage::

    $ recipe-parser --input recipes --output docs/recipes.json

In addition to the JSON file, a ``recipes-manifest.json`` file is written
alongside it (containing a hash of the JSON file) and a redirect page with
link preview metadata is written for each recipe into an ``r`` directory.

Recipes which fail to compile are reported and skipped. In strict mode
(``--strict``, ``--lint`` or ``-l``), additional checks are performed on each
recipe and any error causes the whole run to fail immediately with a non-zero
exit status. Strict mode may also produce warnings which are printed but do
not cause a failure. Warning types are indicated in square brackets in warning
messages.
"""

from typing import List, Optional

import sys

from argparse import ArgumentParser

from pathlib import Path

from recipe_parser.collection import RecipeCollection, find_recipe_files

from recipe_parser.output import (
    DEFAULT_SITE_NAME,
    DEFAULT_SITE_URL,
    REDIRECT_DIRECTORY,
    write_outputs,
)

from recipe_parser.exceptions import RecipeError, NoRecipesError


def main(argv: Optional[List[str]] = None) -> None:
    parser = ArgumentParser(
        description="""
            Compile a directory of markdown recipes into a JSON recipe
            collection.
        """,
    )

    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        default=Path("recipes"),
        help="""
            The directory containing the recipe markdown files.
            Default: %(default)s.
        """,
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=Path("docs") / "recipes.json",
        help="""
            The filename to write the recipe JSON to. The manifest and
            redirect pages are written alongside this file.
            Default: %(default)s.
        """,
    )
    parser.add_argument(
        "--strict",
        "--lint",
        "-l",
        action="store_true",
        help="""
            Enable strict checking. Any error stops the run immediately.
        """,
    )
    parser.add_argument(
        "--site-name",
        default=DEFAULT_SITE_NAME,
        help="""
            The site name used in recipe link previews. Default: %(default)s.
        """,
    )
    parser.add_argument(
        "--site-url",
        default=DEFAULT_SITE_URL,
        help="""
            The base URL of the site used in recipe link previews.
            Default: %(default)s.
        """,
    )

    args = parser.parse_args(argv)

    print(f"Parsing recipes from: {args.input}")

    try:
        paths = find_recipe_files(args.input)
    except RecipeError as e:
        print(f"{args.input}: Error: {e}")
        sys.exit(1)

    collection = RecipeCollection(strict=args.strict)
    for path in paths:
        print(f"  Parsing: {path.name}")
        try:
            for lint in collection.add_file(path):
                print(f"{path}: Warning: {lint.description} [{lint.kind.name}]")
        except RecipeError as e:
            print(f"{path}: Error: {e}")
            if args.strict:
                sys.exit(1)

    try:
        recipes = collection.sorted_recipes()
    except NoRecipesError as e:
        print(f"{args.input}: Error: {e}")
        sys.exit(1)

    print(f"Successfully parsed {len(recipes)} recipe(s)")

    written = write_outputs(
        recipes,
        args.output,
        site_name=args.site_name,
        site_url=args.site_url,
    )
    print(f"Written to: {written[0]}")
    print(f"Manifest written to: {written[1]}")
    redirect_directory = args.output.parent / REDIRECT_DIRECTORY
    print(f"Generated {len(written) - 2} redirect page(s) in {redirect_directory}")

    if args.strict:
        print("Linting passed!")


if __name__ == "__main__":
    main()
