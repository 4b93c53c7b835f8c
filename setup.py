from setuptools import setup, find_packages

setup(
    name="recipe_parser",
    version="1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"recipe_parser": ["templates/*.html"]},
    description=(
        "A tool for compiling markdown recipes with YAML headers into a "
        "normalised JSON recipe collection."
    ),
    install_requires=[
        "marko>=2.0.0",
        "peggie>=0.2.0",
        "PyYAML>=5.1",
        "Jinja2>=2.11",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "recipe-parser=recipe_parser.scripts.recipe_parser:main",
        ],
    },
)
