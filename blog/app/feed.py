"""Atom feed generation for the whole site and for each tag."""

import common.settings

from . import layout
from .post import Post, sort_posts, tag_slug

FEED_TEMPLATE_FILE = 'atom.xml.jinja2'
FEED_MEDIA_TYPE = 'application/atom+xml'


def feed_path(tag: str | None = None) -> str:
    """Returns the URL path of the site feed, or of a tag's feed."""
    if tag is None:
        return '/atom.xml'
    return f'/{tag_slug(tag)}-atom.xml'


def atom_xml(posts: list[Post], tag: str | None = None) -> str:
    """Render posts as an Atom document, newest entry first.

    The feed's updated timestamp is the newest post's date.
    """
    ordered = sort_posts(posts)
    title = common.settings.SITE_TITLE
    feed_id = common.settings.FEED_ID
    if tag is not None:
        title = f'{title} - {tag}'
        feed_id = f'{feed_id}:tag:{tag}'

    template = layout.templates.get_template(FEED_TEMPLATE_FILE)  # type: ignore[reportUnknownMemberType]
    return template.render(
        posts=ordered,
        title=title,
        feed_id=feed_id,
        entry_id_prefix=common.settings.FEED_ID,
        updated=layout.format_atom_date(ordered[0].date if ordered else None),
        self_path=feed_path(tag),
    )
