"""Static asset loading, fingerprinting and URL resolution."""

import dataclasses
import hashlib
import logging
import pathlib
import shutil

logger = logging.getLogger(__name__)

# Raw HTML files in the public directory are pages, not assets
PAGE_SUFFIXES = ('.html',)
FINGERPRINT_LENGTH = 12


@dataclasses.dataclass(frozen=True)
class Asset:
    """A static file served under a URL path."""

    path: str
    file: pathlib.Path
    digest: str

    @property
    def fingerprinted_path(self) -> str:
        """URL path with a content hash inserted before the extension."""
        stem, dot, suffix = self.path.rpartition('.')
        if not dot or '/' in suffix:
            return f'{self.path}-{self.digest[:FINGERPRINT_LENGTH]}'
        return f'{stem}-{self.digest[:FINGERPRINT_LENGTH]}.{suffix}'


@dataclasses.dataclass(frozen=True)
class RenderContext:
    """Per-request context for rendering a page.

    Only resolves asset URLs; page content is otherwise identical on every
    render.
    """

    asset_urls: dict[str, str] = dataclasses.field(default_factory=dict)

    def asset_url(self, path: str) -> str:
        """Returns the URL a page should use to reference an asset."""
        return self.asset_urls.get(path, path)

    @classmethod
    def live(cls) -> 'RenderContext':
        """Context for the development server, which serves assets as-is."""
        return cls()

    @classmethod
    def for_export(cls, assets: list[Asset]) -> 'RenderContext':
        """Context pointing pages at fingerprinted asset copies."""
        return cls({asset.path: asset.fingerprinted_path for asset in assets})


def hash_file(path: pathlib.Path) -> str:
    """Returns the sha256 hex digest of a file's content."""
    return hashlib.sha256(path.read_bytes()).hexdigest()


def load_assets(public_dir: pathlib.Path) -> list[Asset]:
    """Collect every non-page file under public_dir as an asset."""
    if not public_dir.is_dir():
        return []
    return [
        Asset(
            path='/' + file.relative_to(public_dir).as_posix(),
            file=file,
            digest=hash_file(file),
        )
        for file in sorted(public_dir.rglob('*'))
        if file.is_file() and file.suffix not in PAGE_SUFFIXES
    ]


def find_asset(assets: list[Asset], path: str) -> Asset | None:
    """Returns the asset served at path, if any."""
    return next((a for a in assets if path in (a.path, a.fingerprinted_path)), None)


def save_assets(assets: list[Asset], out_dir: pathlib.Path) -> None:
    """Copy each asset to out_dir under its plain and fingerprinted paths."""
    for asset in assets:
        for url_path in (asset.path, asset.fingerprinted_path):
            target = out_dir / url_path.lstrip('/')
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(asset.file, target)
    logger.info('Saved %d assets to %s', len(assets), out_dir)
