"""CLI interface module - scans staff photo folders and renders previews from the command line."""

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple
import logging

import click
from tqdm import tqdm

from staff_photos.exceptions import StaffPhotosError
from staff_photos.models import StaffData, StaffSection
from staff_photos.preview import render_preview
from staff_photos.scanner import scan_folder
from staff_photos.scope import FsScope

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_section(ctx, param, values) -> List[Tuple[str, str]]:
    """Split each --section value of the form "Title=DIRECTORY"."""
    sections = []
    for value in values:
        title, sep, directory = value.partition('=')
        if not sep or not title or not directory:
            raise click.BadParameter(f"expected TITLE=DIRECTORY, got '{value}'")
        sections.append((title, directory))
    return sections


def build_staff_data(title: str, sections: List[Tuple[str, str]], scope: FsScope, case_insensitive: bool = False) -> StaffData:
    """
    Scan each section directory into a StaffData document.

    Args:
        title: Board title
        sections: (section title, directory) pairs, in display order
        scope: Access scope shared by all scans
        case_insensitive: Also accept uppercase extensions

    Returns:
        StaffData with one section per directory
    """
    staff_data = StaffData(title=title)
    for section_title, directory in sections:
        members = scan_folder(directory, scope, case_insensitive=case_insensitive)
        staff_data.sections.append(StaffSection(title=section_title, members=members))
    return staff_data


def render_section_previews(staff_data: StaffData, scope: FsScope) -> dict:
    """
    Render a preview for every member, one at a time.

    Only paths inside the access scope are read.

    Returns:
        Dictionary mapping image path to data URI
    """
    members = [m for section in staff_data.sections for m in section.members]
    previews = {}
    for member in tqdm(members, desc="Rendering", unit="photo", file=sys.stderr):
        scope.check(member.image_path)
        previews[member.image_path] = render_preview(member.image_path)
    return previews


@click.group()
@click.option('--verbose', '-v', is_flag=True, default=False, help='Enable verbose output')
def main(verbose: bool):
    """Staff Photos - read a folder of staff photos and render previews."""
    setup_logging(verbose)


@main.command()
@click.argument('directory', type=click.Path(path_type=Path))
@click.option('--json', 'as_json', is_flag=True, default=False, help='Print the records as JSON')
@click.option(
    '--case-insensitive',
    is_flag=True,
    default=False,
    help='Also accept uppercase extensions such as .JPG'
)
def scan(directory: Path, as_json: bool, case_insensitive: bool):
    """Scan DIRECTORY and list the staff members found in it."""
    try:
        members = scan_folder(str(directory), FsScope(), case_insensitive=case_insensitive)
    except (StaffPhotosError, OSError) as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps([m.to_dict() for m in members], indent=2, ensure_ascii=False))
        return

    for member in members:
        if member.job_title is not None:
            click.echo(f"{member.name}\t{member.job_title}")
        else:
            click.echo(member.name)


@main.command()
@click.argument('image', type=click.Path(path_type=Path))
@click.option(
    '--output',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Write the data URI to this file instead of stdout'
)
def preview(image: Path, output: Optional[Path]):
    """Render IMAGE as a JPEG data URI."""
    try:
        data_uri = render_preview(str(image))
        if output:
            output.write_text(data_uri, encoding='utf-8')
    except (StaffPhotosError, OSError) as e:
        raise click.ClickException(str(e))

    if output:
        logger.info(f"Preview written to {output}")
    else:
        click.echo(data_uri)


@main.command()
@click.option('--title', default='Staff', show_default=True, help='Board title')
@click.option(
    '--section',
    'sections',
    multiple=True,
    required=True,
    callback=parse_section,
    help='Section as TITLE=DIRECTORY (repeatable, in display order)'
)
@click.option('--with-previews', is_flag=True, default=False, help='Embed a preview data URI for every member')
@click.option(
    '--output',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Write the JSON document to this file instead of stdout'
)
@click.option(
    '--case-insensitive',
    is_flag=True,
    default=False,
    help='Also accept uppercase extensions such as .JPG'
)
def export(title: str, sections: List[Tuple[str, str]], with_previews: bool, output: Optional[Path], case_insensitive: bool):
    """Scan several folders into one staff board JSON document."""
    scope = FsScope()
    try:
        staff_data = build_staff_data(title, sections, scope, case_insensitive=case_insensitive)
        previews = render_section_previews(staff_data, scope) if with_previews else {}
    except (StaffPhotosError, OSError) as e:
        raise click.ClickException(str(e))

    document = staff_data.to_dict()
    if with_previews:
        for section in document['sections']:
            for member in section['members']:
                member['preview'] = previews[member['image_path']]

    text = json.dumps(document, indent=2, ensure_ascii=False)
    if output:
        try:
            output.write_text(text, encoding='utf-8')
        except OSError as e:
            raise click.ClickException(str(e))
        logger.info(f"Exported {staff_data.total_members} members in {len(staff_data.sections)} sections to {output}")
    else:
        click.echo(text)


if __name__ == '__main__':
    main()
