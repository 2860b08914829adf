"""Grouping of posts into year and tag listings."""

import itertools

from .post import Post


def by_path_descending(posts: list[Post]) -> list[Post]:
    """Returns posts ordered by path, newest dated path first."""
    return sorted(posts, key=lambda p: p.path, reverse=True)


def group_by_year(posts: list[Post]) -> list[tuple[int | None, list[Post]]]:
    """Group posts by publish year, newest year first.

    Posts within a year are ordered by path descending, which follows the
    date prefix baked into each path. Undated posts form a final group keyed
    by None.
    """

    def year_of(post: Post) -> int | None:
        return post.date.year if post.date is not None else None

    def group_order(post: Post) -> int:
        year = year_of(post)
        return year if year is not None else -1

    ordered = sorted(posts, key=group_order, reverse=True)
    return [
        (year, by_path_descending(list(group)))
        for year, group in itertools.groupby(ordered, key=year_of)
    ]


def unique_tags(posts: list[Post]) -> list[str]:
    """Returns the sorted, deduplicated union of every post's tags."""
    return sorted({tag for post in posts for tag in post.tags})


def tag_posts(tag: str, posts: list[Post]) -> list[Post]:
    """Returns the posts carrying tag, in input order."""
    return [p for p in posts if tag in p.tags]


def group_by_tag(posts: list[Post]) -> dict[str, list[Post]]:
    """Map every unique tag to the posts carrying it."""
    return {tag: tag_posts(tag, posts) for tag in unique_tags(posts)}
