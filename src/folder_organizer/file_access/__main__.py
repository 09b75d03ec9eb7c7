"""
Command line preview of how a directory would be organized.
"""

import click
import logging

from .local_accessor import FileSystemAccessor
from ..organization_logic.engine import OrganizationEngine

logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option("--stats", is_flag=True, help="Show counts per destination folder")
@click.option("--categories", is_flag=True, help="List the known extensions per category")
def scan(directory: str, stats: bool, categories: bool):
    """Show where each entry of DIRECTORY would be moved, without moving anything."""
    engine = OrganizationEngine()

    if categories:
        click.echo("\nKnown extensions:")
        for category, extensions in engine.get_category_summary().items():
            click.echo(f"  {category}: {', '.join(extensions)}")
        return

    accessor = FileSystemAccessor(directory)

    if stats:
        dir_stats = accessor.get_directory_stats(engine)
        click.echo(f"\nDirectory Statistics for: {directory}")
        click.echo(f"Total entries: {dir_stats['total_entries']}")
        click.echo(f"Files: {dir_stats['files']}")
        click.echo(f"Folders: {dir_stats['directories']}")
        click.echo(f"Protected folders: {dir_stats['protected_directories']}")

        click.echo("\nEntries by destination:")
        for category, count in sorted(dir_stats["by_category"].items()):
            click.echo(f"  {category}: {count}")

    else:
        entries = sorted(accessor.scan_directory(), key=lambda e: e.name)
        planned = dict((entry.path, category) for entry, category in engine.plan(entries))

        click.echo(f"\nEntries in {directory}:")
        for entry in entries:
            category = planned.get(entry.path)
            marker = "(Directory) " if entry.is_dir else ""
            if category is None:
                click.echo(f"  {marker}{entry.name} [protected]")
            else:
                click.echo(f"  {marker}{entry.name} -> {category}")

        click.echo(f"\nTotal: {len(planned)} entries to organize")


if __name__ == "__main__":
    scan()
