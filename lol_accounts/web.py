# lol_accounts/web.py
from __future__ import annotations
from typing import Optional
import logging
from aiohttp import web

from .config import Settings
from .crypto import CredentialCipher
from .db import AccountStore
from .riot import RiotClient
from .routes import CIPHER, RIOT, STORE, routes

logger = logging.getLogger(__name__)

CORS_ORIGIN = web.AppKey("cors_origin", str)


def _add_cors(request: web.Request, headers):
    headers["Access-Control-Allow-Origin"] = request.app[CORS_ORIGIN]
    headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
    headers["Access-Control-Allow-Headers"] = "Content-Type"


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        resp = web.Response(status=204)
    else:
        try:
            resp = await handler(request)
        except web.HTTPException as e:
            _add_cors(request, e.headers)
            raise
    _add_cors(request, resp.headers)
    return resp


async def _on_startup(app: web.Application):
    # Init DB avant la première requête
    await app[STORE].init()
    logger.info("Database initialized: %s", app[STORE].db_path)


async def _on_cleanup(app: web.Application):
    await app[RIOT].close()


def create_app(
    settings: Settings,
    *,
    store: Optional[AccountStore] = None,
    riot: Optional[RiotClient] = None,
    cipher: Optional[CredentialCipher] = None,
) -> web.Application:
    app = web.Application(middlewares=[cors_middleware])
    app[CORS_ORIGIN] = settings.CORS_ORIGIN
    app[STORE] = store or AccountStore(settings.DB_PATH)
    app[RIOT] = riot or RiotClient(
        settings.RIOT_API_KEY,
        account_routing=settings.ACCOUNT_ROUTING,
        timeout=settings.RIOT_TIMEOUT,
    )
    # lève RuntimeError si SECRET_KEY est vide
    app[CIPHER] = cipher or CredentialCipher(settings.SECRET_KEY)
    app.add_routes(routes)
    app.on_startup.append(_on_startup)
    app.on_cleanup.append(_on_cleanup)
    return app
