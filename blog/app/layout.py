"""Page layouts rendered through the site's Jinja2 templates."""

import datetime
import pathlib

import common.templates

from . import archive, highlight
from .assets import RenderContext
from .post import Post, sort_posts, tag_slug

APP_DIR = pathlib.Path(__file__).resolve().parent
TEMPLATES_DIR = APP_DIR / 'templates'

MONTH_ABBREVIATIONS = (
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec',
)  # fmt: skip

ARCHIVE_LINK_HTML = '<div class="pagination"><a href="/archive/">Blog Archive</a></div>'


def format_date(value: datetime.date) -> str:
    """Format a date as e.g. ``Jan 02, 2020`` regardless of locale."""
    return f'{MONTH_ABBREVIATIONS[value.month - 1]} {value.day:02d}, {value.year}'


def format_atom_date(value: datetime.date | None) -> str:
    """Format a date as an RFC 3339 timestamp; undated posts get the earliest date."""
    return f'{(value or datetime.date.min).isoformat()}T00:00:00Z'


templates = common.templates.make_templates(TEMPLATES_DIR)
templates.env.filters['datefmt'] = format_date  # type: ignore[assignment]
templates.env.filters['atomdate'] = format_atom_date  # type: ignore[assignment]
templates.env.filters['tagslug'] = tag_slug  # type: ignore[assignment]


def render(name: str, ctx: RenderContext, **context: object) -> str:
    """Render a template with the per-request context and shell globals."""
    return templates.get_template(name).render(  # type: ignore[reportUnknownMemberType]
        ctx=ctx, current_year=datetime.date.today().year, **context
    )


def post_page(ctx: RenderContext, post: Post) -> str:
    """Render a single post; the comments section needs a Disqus shortname."""
    html = render('post.html.jinja2', ctx, post=post)
    if not templates.env.globals.get('disqus_shortname'):  # type: ignore[reportUnknownMemberType]
        return highlight.drop_sections(html)
    return html


def home_page(ctx: RenderContext, posts: list[Post]) -> str:
    """Render the newest post, linking to the archive instead of comments."""
    ordered = sort_posts(posts)
    if not ordered:
        return listing_page(ctx, [], 'Blog')
    html = render('post.html.jinja2', ctx, post=ordered[0])
    return highlight.replace_sections(html, ARCHIVE_LINK_HTML)


def listing_page(
    ctx: RenderContext, posts: list[Post], title: str, feed: str | None = None
) -> str:
    """Render posts grouped by year under a title."""
    return render(
        'listing.html.jinja2',
        ctx,
        title=title,
        groups=archive.group_by_year(posts),
        feed=feed,
    )


def archive_page(ctx: RenderContext, posts: list[Post]) -> str:
    """Render the archive of every post."""
    return listing_page(ctx, posts, 'Archive')


def tag_page(ctx: RenderContext, posts: list[Post], tag: str, feed: str) -> str:
    """Render the listing for one tag; posts are the posts carrying it."""
    return listing_page(ctx, posts, tag, feed=feed)


def tags_page(ctx: RenderContext, posts: list[Post]) -> str:
    """Render the index of every tag with links to its posts."""
    entries = [
        (tag, archive.by_path_descending(tag_posts))
        for tag, tag_posts in archive.group_by_tag(posts).items()
    ]
    return render('tags.html.jinja2', ctx, entries=entries)


def partial_page(ctx: RenderContext, title: str, fragment: str) -> str:
    """Wrap a standalone HTML fragment in the site shell."""
    return render('partial.html.jinja2', ctx, title=title, fragment=fragment)
