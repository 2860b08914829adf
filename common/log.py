"""Shared logging utilities for the site generator and development server."""

import logging

import common.settings

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

ASSET_SUFFIXES = ('.css', '.js', '.png', '.jpg', '.gif', '.svg', '.ico', '.woff2')


class AssetRequestFilter(logging.Filter):
    """Filter out static asset requests from uvicorn access logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Return False to suppress access log entries for asset files."""
        message = record.getMessage()
        return not any(f'{suffix} HTTP/' in message for suffix in ASSET_SUFFIXES)


def configure_logging(level: str | None = None) -> None:
    """Configure root logging and quiet asset requests in the access log."""
    logging.basicConfig(
        level=level or common.settings.LOG_LEVEL,
        format=LOG_FORMAT,
    )
    access_logger = logging.getLogger('uvicorn.access')
    if not any(isinstance(f, AssetRequestFilter) for f in access_logger.filters):
        access_logger.addFilter(AssetRequestFilter())
