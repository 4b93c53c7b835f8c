"""
Splitting, decoding and validation of recipe file headers.

A recipe file starts with a YAML header delimited by lines containing exactly
``---``, for example::

    ---
    id: thai-green-curry
    name: Thai green curry
    description: A fragrant, creamy curry.
    servings: 4
    time: 45
    difficulty: medium
    tags: [curry, thai, dinner]
    author: Sam
    date: 2026-01-15
    ---

    # Ingredients
    ...

All fields except ``author`` are required and no other fields are allowed.

.. autofunction:: split_frontmatter

.. autofunction:: load_frontmatter

.. autofunction:: validate_frontmatter
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

import re

import yaml

from recipe_parser.recipe import Difficulty, Frontmatter

from recipe_parser.exceptions import (
    MissingFrontmatterError,
    FrontmatterSyntaxError,
    FrontmatterSchemaError,
    FrontmatterValueError,
)


__all__ = [
    "DELIMITER",
    "REQUIRED_FIELDS",
    "OPTIONAL_FIELDS",
    "split_frontmatter",
    "decode_frontmatter",
    "load_frontmatter",
    "validate_frontmatter",
]


DELIMITER = "---"

REQUIRED_FIELDS: Tuple[str, ...] = (
    "id",
    "name",
    "description",
    "servings",
    "time",
    "difficulty",
    "tags",
    "date",
)

OPTIONAL_FIELDS: Tuple[str, ...] = ("author",)

STRING_FIELDS = ("id", "name", "description", "difficulty", "date", "author")
INTEGER_FIELDS = ("servings", "time")

FIELD_EXAMPLES: Mapping[str, str] = {
    "id": "id: my-recipe-name",
    "name": "name: My Recipe Name",
    "description": "description: A short description of your recipe",
    "servings": "servings: 4",
    "time": "time: 30 (total minutes)",
    "difficulty": "difficulty: easy (easy, medium, or hard)",
    "tags": "tags: [pasta, italian, dinner]",
    "date": "date: 2026-01-15",
    "author": "author: Your Name",
}
"""Example header lines used in error messages."""

ID_PATTERN = re.compile(r"[a-z-]+")
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

MAX_ID_LENGTH = 100
MAX_NAME_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 500
MAX_AUTHOR_LENGTH = 100

# Strict mode only
MIN_NAME_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10
MAX_SERVINGS = 100
MAX_TIME = 24 * 60


class FrontmatterLoader(yaml.SafeLoader):
    """
    A YAML loader which leaves timestamps (e.g. dates) as plain strings.
    """


FrontmatterLoader.yaml_implicit_resolvers = {
    first_char: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag != "tag:yaml.org,2002:timestamp"
    ]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_frontmatter(source: str) -> Tuple[str, str, int]:
    """
    Split a recipe file into its header and markdown body.

    Returns
    =======
    header: str
        The YAML source between the delimiters.
    body: str
        The markdown source following the closing delimiter.
    body_line: int
        The (1-based) line number in the file at which the body starts.
    """
    lines = source.splitlines(keepends=True)

    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1

    if start == len(lines) or lines[start].rstrip("\r\n") != DELIMITER:
        raise MissingFrontmatterError(
            "Invalid recipe format: missing frontmatter delimiters.\n"
            f"  The file must start with a '{DELIMITER}' line, followed by the "
            f"recipe header and another '{DELIMITER}' line."
        )

    for end in range(start + 1, len(lines)):
        if lines[end].rstrip("\r\n") == DELIMITER:
            header = "".join(lines[start + 1 : end])
            body = "".join(lines[end + 1 :])
            return (header, body, end + 2)

    raise MissingFrontmatterError(
        "Invalid recipe format: missing frontmatter delimiters.\n"
        f"  The recipe header must end with a '{DELIMITER}' line."
    )


def decode_frontmatter(header: str) -> Dict[str, Any]:
    """
    Decode the YAML header into a dictionary, checking only that it is a
    mapping.
    """
    try:
        data = yaml.load(header, Loader=FrontmatterLoader)
    except yaml.YAMLError as e:
        raise FrontmatterSyntaxError(
            "There's a formatting error in the recipe header.\n"
            "  Make sure each field is on its own line as 'key: value' "
            "(with a space after the colon).\n"
            "  Check for missing colons, extra spaces at the start of lines, "
            "or unclosed brackets.\n"
            f"  YAML detail: {e}"
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterSyntaxError(
            "Could not read the recipe header: expected a series of "
            "'key: value' lines."
        )
    return data


def check_schema(data: Mapping[str, Any]) -> None:
    """
    Check a decoded header contains exactly the expected fields with values of
    the expected types.
    """
    for name in data:
        if name not in REQUIRED_FIELDS and name not in OPTIONAL_FIELDS:
            raise FrontmatterSchemaError(
                f"Unknown field: '{name}'\n"
                f"  Check for typos. Required fields: {', '.join(REQUIRED_FIELDS)}"
            )

    for name in REQUIRED_FIELDS:
        if name not in data:
            raise FrontmatterSchemaError(
                f"Missing required field: '{name}'\n"
                f"  Add a line like: {FIELD_EXAMPLES[name]}"
            )

    for name, value in data.items():
        if name == "author" and value is None:
            continue
        if name in STRING_FIELDS and not isinstance(value, str):
            raise FrontmatterSchemaError(
                f"'{name}' should be text.\n  Example: {FIELD_EXAMPLES[name]}"
            )
        if name in INTEGER_FIELDS and (
            not isinstance(value, int) or isinstance(value, bool)
        ):
            raise FrontmatterSchemaError(
                f"'{name}' should be a number without quotes.\n"
                f"  Example: {name}: 4"
            )
        if name == "tags":
            if not isinstance(value, list):
                raise FrontmatterSchemaError(
                    "'tags' should be a list, not a single value.\n"
                    "  Use square brackets: tags: [dinner, pasta]"
                )
            for tag in value:
                if not isinstance(tag, str):
                    raise FrontmatterSchemaError(
                        f"Tag {tag!r} should be text.\n"
                        "  Use words for tags: tags: [dinner, pasta]"
                    )


def validate_frontmatter(frontmatter: Frontmatter, strict: bool = False) -> None:
    """
    Check the header field values are well formed, throwing
    :py:exc:`~recipe_parser.exceptions.FrontmatterValueError` if not.

    When strict is True, additional, stricter checks are also performed.
    """
    fm = frontmatter

    if not fm.id:
        raise FrontmatterValueError("Recipe ID cannot be empty")
    if len(fm.id) > MAX_ID_LENGTH:
        raise FrontmatterValueError(
            f"Recipe ID too long (max {MAX_ID_LENGTH} characters): '{fm.id}'"
        )
    if ID_PATTERN.fullmatch(fm.id) is None:
        raise FrontmatterValueError(
            f"Recipe ID can only contain lowercase letters and dashes: '{fm.id}'\n"
            "  Example: thai-green-curry"
        )
    if fm.id.startswith("-") or fm.id.endswith("-"):
        raise FrontmatterValueError(
            f"Recipe ID cannot start or end with a dash: '{fm.id}'"
        )
    if "--" in fm.id:
        raise FrontmatterValueError(
            f"Recipe ID cannot contain consecutive dashes: '{fm.id}'"
        )

    if not fm.name:
        raise FrontmatterValueError("Recipe name cannot be empty")
    if len(fm.name) > MAX_NAME_LENGTH:
        raise FrontmatterValueError(
            f"Recipe name too long (max {MAX_NAME_LENGTH} characters)"
        )

    if not fm.description:
        raise FrontmatterValueError("Recipe description cannot be empty")
    if len(fm.description) > MAX_DESCRIPTION_LENGTH:
        raise FrontmatterValueError(
            f"Recipe description too long (max {MAX_DESCRIPTION_LENGTH} characters)"
        )

    if fm.servings <= 0:
        raise FrontmatterValueError("Servings must be greater than 0")
    if fm.time <= 0:
        raise FrontmatterValueError("Time must be greater than 0")

    if fm.author is not None and not (0 < len(fm.author) <= MAX_AUTHOR_LENGTH):
        raise FrontmatterValueError(
            f"Author must be 1-{MAX_AUTHOR_LENGTH} characters, got {len(fm.author)}"
        )

    if DATE_PATTERN.fullmatch(fm.date) is None:
        raise FrontmatterValueError(
            f"Date must be in YYYY-MM-DD format, got '{fm.date}'"
        )

    if strict:
        validate_frontmatter_strict(fm)


def validate_frontmatter_strict(fm: Frontmatter) -> None:
    if len(fm.name) < MIN_NAME_LENGTH:
        raise FrontmatterValueError(
            f"Name too short (minimum {MIN_NAME_LENGTH} characters)"
        )
    if len(fm.description) < MIN_DESCRIPTION_LENGTH:
        raise FrontmatterValueError(
            f"Description too short (minimum {MIN_DESCRIPTION_LENGTH} characters)"
        )
    if not fm.tags:
        raise FrontmatterValueError("At least one tag is required")

    seen_tags: List[str] = []
    for tag in fm.tags:
        if tag.lower() in seen_tags:
            raise FrontmatterValueError(f"Duplicate tag found: '{tag}'")
        seen_tags.append(tag.lower())

    for tag in fm.tags:
        if any(char.isupper() for char in tag):
            raise FrontmatterValueError(f"Tags must be lowercase: '{tag}'")
        if " " in tag:
            raise FrontmatterValueError(f"Tags must not contain spaces: '{tag}'")

    if fm.servings > MAX_SERVINGS:
        raise FrontmatterValueError(
            f"Servings seems unreasonably high: {fm.servings} (max {MAX_SERVINGS})"
        )
    if fm.time > MAX_TIME:
        raise FrontmatterValueError(
            f"Time seems unreasonably long: {fm.time} minutes (max 24 hours)"
        )


def load_frontmatter(header: str, strict: bool = False) -> Frontmatter:
    """
    Decode and validate a recipe header.

    Throws a :py:exc:`~recipe_parser.exceptions.FrontmatterSyntaxError`,
    :py:exc:`~recipe_parser.exceptions.FrontmatterSchemaError` or
    :py:exc:`~recipe_parser.exceptions.FrontmatterValueError` on failure.
    """
    data = decode_frontmatter(header)
    check_schema(data)

    try:
        difficulty = Difficulty(data["difficulty"])
    except ValueError:
        raise FrontmatterValueError(
            f"Difficulty '{data['difficulty']}' is not valid. "
            "Use one of: easy, medium, or hard"
        )

    author: Optional[str] = data.get("author")
    frontmatter = Frontmatter(
        id=data["id"],
        name=data["name"],
        description=data["description"],
        servings=data["servings"],
        time=data["time"],
        difficulty=difficulty,
        tags=tuple(data["tags"]),
        date=data["date"],
        author=author,
    )
    validate_frontmatter(frontmatter, strict)
    return frontmatter
