"""FastAPI development server rendering the site live from disk."""

import logging

import fastapi
import fastapi.responses
import uvicorn

import common.log
import common.settings

from . import assets, pages

logger = logging.getLogger(__name__)

RESOURCES_DIR = common.settings.RESOURCES_DIR
NOT_FOUND_PAGE = '/404.html'

app = fastapi.FastAPI(title='Blog')

common.log.configure_logging()


@app.get('/{path:path}')
async def page(path: str) -> fastapi.responses.Response:
    """Serve a registered page, falling back to the static assets.

    The registry is rebuilt from disk on every request so edits show up on
    reload. Misses get the site's own ``/404.html`` page when it has one.
    """
    url_path = '/' + path
    registry = pages.get_pages(RESOURCES_DIR)
    key = pages.resolve(registry, url_path)
    if key is not None:
        html = registry[key](assets.RenderContext.live())
        return fastapi.responses.Response(
            content=html, media_type=pages.media_type(key)
        )

    public_assets = assets.load_assets(RESOURCES_DIR / pages.PUBLIC_DIR_NAME)
    asset = assets.find_asset(public_assets, url_path)
    if asset is not None:
        return fastapi.responses.FileResponse(asset.file)

    logger.debug('No page or asset at %s', url_path)
    if NOT_FOUND_PAGE in registry:
        return fastapi.responses.HTMLResponse(
            registry[NOT_FOUND_PAGE](assets.RenderContext.live()), status_code=404
        )
    raise fastapi.HTTPException(status_code=404, detail='Page not found')


def serve() -> None:
    """Run the development server."""
    uvicorn.run(app, host=common.settings.SERVE_HOST, port=common.settings.SERVE_PORT)


if __name__ == '__main__':
    serve()
