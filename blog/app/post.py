"""Blog post parsing and URL path derivation."""

import datetime
import logging
import pathlib
import re

import frontmatter.default_handlers  # type: ignore[reportMissingTypeStubs]
import markdown
import pydantic

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Random Thought'

MARKDOWN_EXTENSIONS = ['fenced_code', 'pymdownx.magiclink', 'pymdownx.tilde']

# Posts first published under /code/...; they keep a mirror at their old URL
LEGACY_SLUGS = (
    'rx-the-importance-of-honoring-unsubscribe',
    'rxPlay-making-iteratees-and-observables-play-nice',
    'anatomy-of-a-clojure-macro',
    'escaping-callback-hell-with-core-async',
    'action-composition-auth',
    'anorm-pk-json',
)

TITLE_RE = re.compile(
    r'^[ \t]*title[ \t]*:[ \t]*(.*?)[ \t]*$', re.IGNORECASE | re.MULTILINE
)
TAGS_RE = re.compile(
    r'^[ \t]*tags[ \t]*:[ \t]*\[(.*?)\]', re.IGNORECASE | re.MULTILINE
)
DATE_RE = re.compile(r'(\d{4})-(\d{2})-(\d{2})')
DATED_NAME_RE = re.compile(r'(\d{4})-(\d{2})-(\d{2})-')
MD_SUFFIX_RE = re.compile(r'\.md$')
TAG_SLUG_RE = re.compile(r'[^\w-]+')

_HEADER_HANDLER = frontmatter.default_handlers.YAMLHandler()


def tag_slug(tag: str) -> str:
    """Returns the URL path segment for a tag, e.g. ``c#`` becomes ``c``.

    Runs of anything but word characters and hyphens collapse to one hyphen,
    so a slug never contains a path separator or a dot segment.
    """
    return TAG_SLUG_RE.sub('-', tag).strip('-')


class PostMetadata(pydantic.BaseModel):
    """Fields read from the header block of a post."""

    title: str = DEFAULT_TITLE
    tags: list[str] = pydantic.Field(default_factory=list)

    @pydantic.field_validator('title')
    @classmethod
    def default_blank_title(cls, value: str) -> str:
        return value.strip() or DEFAULT_TITLE

    @pydantic.field_validator('tags')
    @classmethod
    def strip_tags(cls, value: list[str]) -> list[str]:
        tags: list[str] = []
        for tag in (t.strip() for t in value):
            if not tag:
                continue
            if not tag_slug(tag):
                logger.warning('Dropping tag with no usable URL: %r', tag)
                continue
            tags.append(tag)
        return tags


class Post(pydantic.BaseModel):
    """A single published article, built once from its source file."""

    model_config = pydantic.ConfigDict(frozen=True)

    raw_path: str
    title: str
    tags: list[str]
    date: datetime.date | None
    path: str
    legacy_path: str | None
    content: str

    @property
    def comments_path(self) -> str:
        """Path identifying the post's comment thread.

        Legacy posts keep the thread they accumulated under their old URL.
        """
        return self.legacy_path or self.path

    @property
    def sort_key(self) -> tuple[datetime.date, str]:
        """Key ordering posts by date, undated posts counting as the earliest."""
        return (self.date or datetime.date.min, self.path)


def split_header(raw_content: str) -> tuple[str | None, str]:
    """Split a post into its metadata header and body.

    Returns ``(None, raw_content)`` when there is no header or it is never
    closed.
    """
    if not _HEADER_HANDLER.detect(raw_content):
        return None, raw_content
    try:
        header, body = _HEADER_HANDLER.split(raw_content)
    except ValueError:
        return None, raw_content
    return header, body


def parse_metadata(header: str | None) -> PostMetadata:
    """Extract title and tags from a header block; first match wins."""
    if header is None:
        return PostMetadata()

    fields: dict[str, object] = {}
    title_match = TITLE_RE.search(header)
    if title_match:
        fields['title'] = title_match.group(1)
    tags_match = TAGS_RE.search(header)
    if tags_match:
        fields['tags'] = tags_match.group(1).split(',')

    try:
        return PostMetadata.model_validate(fields)
    except pydantic.ValidationError:
        logger.warning('Invalid post metadata, using defaults: %r', fields)
        return PostMetadata()


def extract_date(raw_path: str) -> datetime.date | None:
    """Returns the first YYYY-MM-DD date in a filename, if it is a real date."""
    match = DATE_RE.search(raw_path)
    if match is None:
        return None
    year, month, day = (int(group) for group in match.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError:
        return None


def derive_path(raw_path: str) -> str:
    """Map a source filename to its public URL path.

    ``2020-01-02-foo.md`` becomes ``blog/2020/01/02/foo``; names without a
    date prefix only lose their ``.md`` suffix.
    """
    path = MD_SUFFIX_RE.sub('', raw_path)
    return DATED_NAME_RE.sub(r'blog/\1/\2/\3/', path)


def derive_legacy_path(path: str) -> str | None:
    """Returns the pre-migration URL for posts on the legacy list, else None."""
    if not any(slug in path for slug in LEGACY_SLUGS):
        return None
    return path.replace('blog', 'code') + '/'


def render_markdown(text: str) -> str:
    """Returns markdown-rendered HTML of a post body."""
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def parse_post(raw_path: str, raw_content: str) -> Post:
    """Build a Post from a source filename and its raw content."""
    header, body = split_header(raw_content)
    if header is None and raw_content.startswith('---'):
        logger.warning('Unterminated metadata block in %s', raw_path)
    metadata = parse_metadata(header)
    path = derive_path(raw_path)
    return Post(
        raw_path=raw_path,
        title=metadata.title,
        tags=metadata.tags,
        date=extract_date(raw_path),
        path=path,
        legacy_path=derive_legacy_path(path),
        content=render_markdown(body),
    )


def load_posts(posts_dir: pathlib.Path) -> list[Post]:
    """Parse every markdown file in posts_dir.

    Raw paths are given relative to the directory with a leading slash, so
    the derived paths are absolute URL paths.
    """
    if not posts_dir.is_dir():
        raise FileNotFoundError(f'Posts directory not found: {posts_dir}')

    posts: list[Post] = []
    for md_path in sorted(posts_dir.glob('*.md')):
        raw_content = md_path.read_text(encoding='utf-8')
        posts.append(parse_post('/' + md_path.name, raw_content))
    logger.debug('Loaded %d posts from %s', len(posts), posts_dir)
    return posts


def sort_posts(posts: list[Post]) -> list[Post]:
    """Returns posts newest first; undated posts sort last."""
    return sorted(posts, key=lambda p: p.sort_key, reverse=True)


def legacy_posts(posts: list[Post]) -> list[Post]:
    """Returns the posts that are also served under a legacy path."""
    return [p for p in posts if p.legacy_path is not None]
