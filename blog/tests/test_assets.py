"""Unit tests for assets.py module."""

import hashlib
import pathlib

from blog.app import assets


def _asset(path: str, digest: str = 'abcdef0123456789') -> assets.Asset:
    return assets.Asset(path=path, file=pathlib.Path('unused'), digest=digest)


class TestAsset:
    """Tests for Asset."""

    def test_fingerprinted_path(self) -> None:
        """The digest prefix is inserted before the extension."""
        assert _asset('/css/theme.css').fingerprinted_path == '/css/theme-abcdef012345.css'

    def test_fingerprinted_path_without_extension(self) -> None:
        """Files without an extension get the digest appended."""
        assert _asset('/v1.2/LICENSE').fingerprinted_path == '/v1.2/LICENSE-abcdef012345'


class TestRenderContext:
    """Tests for RenderContext."""

    def test_live_context_is_identity(self) -> None:
        """The development server references assets at their own paths."""
        assert assets.RenderContext.live().asset_url('/css/theme.css') == '/css/theme.css'

    def test_export_context_fingerprints(self) -> None:
        """Exported pages reference the fingerprinted copies."""
        ctx = assets.RenderContext.for_export([_asset('/css/theme.css')])
        assert ctx.asset_url('/css/theme.css') == '/css/theme-abcdef012345.css'

    def test_unknown_asset_unchanged(self) -> None:
        """Paths that are not assets are returned as given."""
        ctx = assets.RenderContext.for_export([_asset('/css/theme.css')])
        assert ctx.asset_url('/img/logo.png') == '/img/logo.png'


class TestLoadAndSave:
    """Tests for load_assets, find_asset and save_assets."""

    def test_load_assets(self, tmp_path: pathlib.Path) -> None:
        """Every non-HTML file is an asset keyed by its URL path."""
        (tmp_path / 'css').mkdir()
        (tmp_path / 'css' / 'theme.css').write_text('body {}')
        (tmp_path / 'page.html').write_text('<p>page</p>')

        loaded = assets.load_assets(tmp_path)
        assert [a.path for a in loaded] == ['/css/theme.css']
        assert loaded[0].digest == hashlib.sha256(b'body {}').hexdigest()

    def test_missing_directory(self, tmp_path: pathlib.Path) -> None:
        """A site without a public directory has no assets."""
        assert assets.load_assets(tmp_path / 'public') == []

    def test_find_asset(self) -> None:
        """Assets are found by plain or fingerprinted path."""
        asset = _asset('/css/theme.css')
        assert assets.find_asset([asset], '/css/theme.css') == asset
        assert assets.find_asset([asset], asset.fingerprinted_path) == asset
        assert assets.find_asset([asset], '/css/other.css') is None

    def test_save_assets(self, tmp_path: pathlib.Path) -> None:
        """Both the plain and fingerprinted copies are written."""
        public = tmp_path / 'public'
        (public / 'js').mkdir(parents=True)
        (public / 'js' / 'site.js').write_text('var x;')
        out = tmp_path / 'out'

        loaded = assets.load_assets(public)
        assets.save_assets(loaded, out)
        assert (out / 'js' / 'site.js').read_text() == 'var x;'
        assert (out / loaded[0].fingerprinted_path.lstrip('/')).read_text() == 'var x;'
