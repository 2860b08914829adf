"""Page registry assembled from every content source.

A registry maps a URL path to a page: either a constant HTML string or a
render function taking a :class:`~.assets.RenderContext`. It is rebuilt from
disk for every request or export and never modified afterwards.
"""

import functools
import logging
import pathlib
from collections.abc import Callable, Mapping

from . import archive, feed, highlight, layout
from .assets import RenderContext
from .post import Post, legacy_posts, load_posts, tag_slug

logger = logging.getLogger(__name__)

Page = str | Callable[[RenderContext], str]
PreparedPage = Callable[[RenderContext], str]

POSTS_DIR_NAME = 'posts'
PUBLIC_DIR_NAME = 'public'
PARTIALS_DIR_NAME = 'partials'
PAGE_SUFFIXES = ('.html',)
INDEX_FILE = 'index.html'


class PageConflictError(ValueError):
    """Raised when two page sources register the same path."""


class UnsafePagePathError(ValueError):
    """Raised when a page path would be written outside the export directory."""


def merge_page_sources(sources: Mapping[str, Mapping[str, Page]]) -> dict[str, Page]:
    """Union the pages of every source.

    Raises PageConflictError if a path is registered by more than one source.
    """
    pages: dict[str, Page] = {}
    owners: dict[str, str] = {}
    for source_name, source in sources.items():
        for path, page in source.items():
            if path in owners:
                raise PageConflictError(
                    f'Page {path!r} is registered by both '
                    f'{owners[path]!r} and {source_name!r}'
                )
            owners[path] = source_name
            pages[path] = page
        logger.debug('Page source %r: %d pages', source_name, len(source))
    return pages


def slurp_directory(
    directory: pathlib.Path, suffixes: tuple[str, ...]
) -> dict[str, str]:
    """Read every matching file under directory, keyed by its URL path."""
    if not directory.is_dir():
        return {}
    return {
        '/' + file.relative_to(directory).as_posix(): file.read_text(encoding='utf-8')
        for file in sorted(directory.rglob('*'))
        if file.is_file() and file.suffix in suffixes
    }


def partial_title(path: str) -> str:
    """Returns a page title from a partial's file name, e.g. ``/about-me.html``."""
    stem = pathlib.PurePosixPath(path).stem
    return stem.replace('-', ' ').replace('_', ' ').title()


def public_pages(public_dir: pathlib.Path) -> dict[str, Page]:
    """Raw HTML files served unchanged."""
    return dict(slurp_directory(public_dir, PAGE_SUFFIXES))


def partial_pages(partials_dir: pathlib.Path) -> dict[str, Page]:
    """HTML fragments wrapped in the site layout."""
    return {
        path: functools.partial(
            layout.partial_page, title=partial_title(path), fragment=fragment
        )
        for path, fragment in slurp_directory(partials_dir, PAGE_SUFFIXES).items()
    }


def post_pages(posts: list[Post]) -> dict[str, Page]:
    """One page per post at its canonical path."""
    return {p.path: functools.partial(layout.post_page, post=p) for p in posts}


def legacy_pages(posts: list[Post]) -> dict[str, Page]:
    """Mirrors of legacy posts at their pre-migration paths."""
    return {
        p.legacy_path: functools.partial(layout.post_page, post=p)
        for p in legacy_posts(posts)
        if p.legacy_path is not None
    }


def dynamic_pages(posts: list[Post]) -> dict[str, Page]:
    """Home, archive and tag index pages computed from all posts."""
    return {
        '/index.html': functools.partial(layout.home_page, posts=posts),
        '/blog/index.html': functools.partial(layout.home_page, posts=posts),
        '/archive/index.html': functools.partial(layout.archive_page, posts=posts),
        '/tags/index.html': functools.partial(layout.tags_page, posts=posts),
    }


def tag_pages(posts: list[Post]) -> dict[str, Page]:
    """One listing page per tag.

    Raises PageConflictError if two tags share a slug.
    """
    return merge_page_sources(
        {
            f'tag {tag!r}': {
                f'/tags/{tag_slug(tag)}/{INDEX_FILE}': functools.partial(
                    layout.tag_page,
                    posts=tag_posts,
                    tag=tag,
                    feed=feed.feed_path(tag),
                )
            }
            for tag, tag_posts in archive.group_by_tag(posts).items()
        }
    )


def feed_page(ctx: RenderContext, posts: list[Post], tag: str | None = None) -> str:
    """Render a feed; feeds do not reference assets so ctx is unused."""
    return feed.atom_xml(posts, tag)


def feed_pages(posts: list[Post]) -> dict[str, Page]:
    """The site-wide feed plus one feed per tag."""
    pages = merge_page_sources(
        {
            f'tag {tag!r}': {
                feed.feed_path(tag): functools.partial(
                    feed_page, posts=tag_posts, tag=tag
                )
            }
            for tag, tag_posts in archive.group_by_tag(posts).items()
        }
    )
    pages[feed.feed_path()] = functools.partial(feed_page, posts=posts)
    return pages


def get_raw_pages(resources_dir: pathlib.Path) -> dict[str, Page]:
    """Read all sources from disk and merge them into one registry."""
    posts = load_posts(resources_dir / POSTS_DIR_NAME)
    return merge_page_sources(
        {
            'public': public_pages(resources_dir / PUBLIC_DIR_NAME),
            'partials': partial_pages(resources_dir / PARTIALS_DIR_NAME),
            'posts': post_pages(posts),
            'dynamic': dynamic_pages(posts),
            'tags': tag_pages(posts),
            'legacy': legacy_pages(posts),
            'feeds': feed_pages(posts),
        }
    )


def prepare_page(page: Page, ctx: RenderContext) -> str:
    """Render a page and run the final HTML pass over it."""
    html = page if isinstance(page, str) else page(ctx)
    return highlight.process_page(html)


def get_pages(resources_dir: pathlib.Path) -> dict[str, PreparedPage]:
    """Returns the registry with every page wrapped in the final HTML pass."""
    return {
        path: functools.partial(prepare_page, page)
        for path, page in get_raw_pages(resources_dir).items()
    }


def resolve(pages: Mapping[str, object], path: str) -> str | None:
    """Returns the registry key serving path, or None.

    Directory-style paths also resolve to their ``index.html`` page.
    """
    if path in pages:
        return path
    if path.endswith('/') and path + INDEX_FILE in pages:
        return path + INDEX_FILE
    return None


def render_page(
    pages: Mapping[str, PreparedPage], path: str, ctx: RenderContext
) -> str | None:
    """Render the page serving path, or None if there is none."""
    key = resolve(pages, path)
    if key is None:
        return None
    return pages[key](ctx)


def output_file(path: str) -> str:
    """Returns the relative file a page is exported to."""
    relative = path.lstrip('/')
    if not relative or relative.endswith('/'):
        return relative + INDEX_FILE
    return relative


def output_files(pages: Mapping[str, object]) -> dict[str, str]:
    """Map every page to its export file.

    Raises UnsafePagePathError for paths with empty or dot segments, and
    PageConflictError if two paths would be written to the same file.
    """
    files: dict[str, str] = {}
    owners: dict[str, str] = {}
    for path in sorted(pages):
        file = output_file(path)
        if any(segment in ('', '.', '..') for segment in file.split('/')):
            raise UnsafePagePathError(f'Page {path!r} has an unsafe export path')
        if file in owners:
            raise PageConflictError(
                f'Pages {owners[file]!r} and {path!r} both export to {file!r}'
            )
        owners[file] = path
        files[path] = file
    return files


def media_type(path: str) -> str:
    """Returns the content type a page is served with."""
    if path.endswith('.xml'):
        return feed.FEED_MEDIA_TYPE
    return 'text/html'
