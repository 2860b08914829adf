"""Shared fixtures for blog tests."""

import pathlib
from collections.abc import Callable

import pytest

from blog.app import post

WritePost = Callable[..., pathlib.Path]


def post_source(title: str | None = None, tags: list[str] | None = None, body: str = '') -> str:
    """Returns markdown source with a metadata header."""
    header: list[str] = []
    if title is not None:
        header.append(f'title : {title}')
    if tags is not None:
        header.append(f'tags : [{", ".join(tags)}]')
    return '---\n' + '\n'.join(header) + '\n---\n\n' + body


@pytest.fixture
def resources_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """An empty site resources directory with a posts/ folder."""
    (tmp_path / 'posts').mkdir()
    return tmp_path


@pytest.fixture
def write_post(resources_dir: pathlib.Path) -> WritePost:
    """Returns a function writing a post file into the resources directory."""

    def write(
        name: str,
        title: str | None = 'Test Post',
        tags: list[str] | None = None,
        body: str = 'Some text.',
    ) -> pathlib.Path:
        path = resources_dir / 'posts' / name
        path.write_text(post_source(title, tags, body), encoding='utf-8')
        return path

    return write


@pytest.fixture
def make_post() -> Callable[..., post.Post]:
    """Returns a function building a Post from a filename."""

    def make(
        name: str, title: str = 'Test Post', tags: list[str] | None = None, body: str = ''
    ) -> post.Post:
        return post.parse_post('/' + name, post_source(title, tags or [], body))

    return make
