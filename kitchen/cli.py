"""
CLI interface for checking, formatting and shopping from recipe documents.
"""
import sys
from pathlib import Path
from typing import Tuple

import click

from kitchen.engine.parsing import RecipeParser, parse_ingredient_list, parse_quantity
from kitchen.engine.render import render_recipe
from kitchen.engine.shopping import IngredientAccumulator
from kitchen.errors import KitchenError, RecipeParseError
from kitchen.models.recipe import Recipe
from kitchen.models.schemas import RecipeSchema


class KitchenCLI:
    """CLI application state manager."""

    def __init__(self):
        # One-shot invocations gain nothing from the parse cache
        self.parser = RecipeParser(use_cache=False)

    def load(self, path: Path) -> Recipe:
        """Parse a recipe file, exiting with a located message if it is invalid."""
        try:
            return self.parser.parse(path.read_text(encoding="utf-8"))
        except RecipeParseError as e:
            raise click.ClickException(f"{path}:{e.line}:{e.column}: {e.reason}")
        except KitchenError as e:
            raise click.ClickException(f"{path}: {e.message}")


def _planned(value: str) -> Tuple[Path, str]:
    """Split 'FILE[:COUNT]' into a path and a count."""
    path, sep, count = value.rpartition(":")
    if not sep or not count.strip() or not path:
        return Path(value), "1"
    return Path(path), count


@click.group()
@click.pass_context
def cli(ctx):
    """Kitchen - Recipe Document Tools"""
    ctx.obj = KitchenCLI()


@cli.command()
@click.argument('files', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def check(app: KitchenCLI, files: Tuple[Path, ...]):
    """Validate recipe files, reporting where each invalid one breaks."""
    failures = 0
    for path in files:
        try:
            error = app.parser.check(path.read_text(encoding="utf-8"))
        except KitchenError as e:
            click.echo(f"✗ {path}: {e.message}", err=True)
            failures += 1
            continue

        if error is None:
            click.echo(f"✓ {path}")
        else:
            click.echo(f"✗ {path}:{error.line}:{error.column}: {error.reason}", err=True)
            failures += 1

    if failures:
        click.echo(f"\n{failures} of {len(files)} file(s) failed", err=True)
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def show(app: KitchenCLI, file: Path):
    """Print the parsed structure of a recipe file as JSON."""
    recipe = app.load(file)
    click.echo(RecipeSchema.from_recipe(recipe).model_dump_json(indent=2))


@cli.command(name="format")
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--write', '-w', is_flag=True, help='Rewrite the file in place')
@click.pass_obj
def format_recipe(app: KitchenCLI, file: Path, write: bool):
    """Print a recipe file in canonical form."""
    text = render_recipe(app.load(file))
    if write:
        file.write_text(text, encoding="utf-8")
        click.echo(f"✓ Formatted {file}")
    else:
        click.echo(text, nl=False)


@cli.command()
@click.argument('planned', nargs=-1, required=True)
@click.option('--staples', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='File with one ingredient per line, added once')
@click.pass_obj
def shop(app: KitchenCLI, planned: Tuple[str, ...], staples):
    """
    Build a shopping list from recipe files.

    Each argument is FILE or FILE:COUNT, where COUNT is how many times the
    recipe is planned (e.g. pancakes.txt:2 or soup.txt:1/2).
    """
    accumulator = IngredientAccumulator()

    for value in planned:
        path, count_text = _planned(value)
        if not path.is_file():
            raise click.BadParameter(f"No such file: {path}", param_hint="PLANNED")
        try:
            count = parse_quantity(count_text)
        except KitchenError as e:
            raise click.BadParameter(e.message, param_hint="PLANNED")
        accumulator.add_recipe(app.load(path), count)

    if staples:
        try:
            accumulator.add_ingredients(parse_ingredient_list(staples.read_text(encoding="utf-8")))
        except RecipeParseError as e:
            raise click.ClickException(f"{staples}:{e.line}:{e.column}: {e.reason}")

    items = accumulator.items()
    click.echo(f"🛒 SHOPPING LIST ({len(items)} items)")
    click.echo("-" * 40)
    for item in items:
        click.echo(f"  • {item}")


if __name__ == '__main__':
    cli()
