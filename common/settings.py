"""Shared site settings read from environment variables."""

import os
import pathlib

REPO_DIR = pathlib.Path(__file__).resolve().parent.parent

SITE_URL: str = os.environ.get('BLOG_SITE_URL', 'https://example.com').rstrip('/')
SITE_TITLE: str = os.environ.get('BLOG_SITE_TITLE', 'Random.next()')
AUTHOR: str = os.environ.get('BLOG_AUTHOR', 'Site Author')
FEED_ID: str = os.environ.get('BLOG_FEED_ID', 'urn:random-next:feed')
DISQUS_SHORTNAME: str = os.environ.get('BLOG_DISQUS_SHORTNAME', '')

RESOURCES_DIR = pathlib.Path(
    os.environ.get('BLOG_RESOURCES_DIR', str(REPO_DIR / 'blog' / 'resources'))
)
EXPORT_DIR = pathlib.Path(os.environ.get('BLOG_EXPORT_DIR', 'dist'))

LOG_LEVEL: str = os.environ.get('LOG_LEVEL', 'INFO').upper()

SERVE_HOST: str = os.environ.get('BLOG_SERVE_HOST', '127.0.0.1')
SERVE_PORT: int = int(os.environ.get('BLOG_SERVE_PORT', '8000'))
