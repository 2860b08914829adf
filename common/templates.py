"""Factory for creating Jinja2Templates with standard site globals."""

import pathlib

import fastapi.templating

import common.settings


def make_templates(
    directory: pathlib.Path | str,
) -> fastapi.templating.Jinja2Templates:
    """Create a Jinja2Templates instance with the site globals pre-set."""
    templates = fastapi.templating.Jinja2Templates(directory=str(directory))
    # Names end in .jinja2, which select_autoescape() does not match
    templates.env.autoescape = True
    templates.env.globals['site_title'] = common.settings.SITE_TITLE  # type: ignore[reportUnknownMemberType]
    templates.env.globals['site_url'] = common.settings.SITE_URL  # type: ignore[reportUnknownMemberType]
    templates.env.globals['author'] = common.settings.AUTHOR  # type: ignore[reportUnknownMemberType]
    templates.env.globals['disqus_shortname'] = common.settings.DISQUS_SHORTNAME  # type: ignore[reportUnknownMemberType]
    return templates
