#!/usr/bin/env python3
"""Export the whole site as static files.

The output directory is emptied first; every registered page and every
asset is then written into it.
"""

import argparse
import logging
import pathlib
import shutil
import sys

import common.log
import common.settings

from . import assets, pages

logger = logging.getLogger(__name__)


def empty_directory(directory: pathlib.Path) -> None:
    """Remove directory and everything in it, then recreate it empty."""
    if directory.exists():
        shutil.rmtree(directory)
    directory.mkdir(parents=True)


def export_pages(
    registry: dict[str, pages.PreparedPage],
    out_dir: pathlib.Path,
    ctx: assets.RenderContext,
) -> None:
    """Render every page and write it to its file under out_dir."""
    files = pages.output_files(registry)
    for path, page in sorted(registry.items()):
        target = out_dir / files[path]
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(page(ctx), encoding='utf-8')
    logger.info('Exported %d pages to %s', len(registry), out_dir)


def export(out_dir: pathlib.Path, resources_dir: pathlib.Path) -> None:
    """Build the site from resources_dir into a fresh out_dir."""
    registry = pages.get_pages(resources_dir)
    # Checked before the old output is removed
    pages.output_files(registry)
    public_assets = assets.load_assets(resources_dir / pages.PUBLIC_DIR_NAME)

    empty_directory(out_dir)
    assets.save_assets(public_assets, out_dir)
    export_pages(registry, out_dir, assets.RenderContext.for_export(public_assets))


def main(argv: list[str] | None = None) -> int:
    """Main function to export the site."""
    parser = argparse.ArgumentParser(description='Export the blog as static files')
    parser.add_argument(
        '--output-dir',
        type=pathlib.Path,
        default=common.settings.EXPORT_DIR,
        help='Directory to write the site to (emptied first)',
    )
    parser.add_argument(
        '--resources-dir',
        type=pathlib.Path,
        default=common.settings.RESOURCES_DIR,
        help='Directory holding posts/, partials/ and public/',
    )
    args = parser.parse_args(argv)

    common.log.configure_logging()

    try:
        export(args.output_dir, args.resources_dir)
    except (pages.PageConflictError, pages.UnsafePagePathError) as e:
        logger.error('Site configuration error: %s', e)
        return 1
    except OSError as e:
        logger.error('Export failed: %s', e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
