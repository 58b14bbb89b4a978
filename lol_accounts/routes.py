# lol_accounts/routes.py
from __future__ import annotations
import json
import logging
from aiohttp import web

from .crypto import CredentialCipher
from .db import AccountStore
from .errors import PersistenceFailed, StatsLookupFailed
from .models import parse_new_account
from .riot import RiotClient, SUPPORTED_REGIONS
from .service import create_account, refresh_all, reveal_credentials

logger = logging.getLogger(__name__)

STORE = web.AppKey("store", AccountStore)
RIOT = web.AppKey("riot", RiotClient)
CIPHER = web.AppKey("cipher", CredentialCipher)

routes = web.RouteTableDef()


def _error(status: int, message: str) -> web.Response:
    return web.json_response({"error": message}, status=status)


# bornes d'un INTEGER SQLite (64 bits signé)
_MAX_ID = 2**63 - 1


def _account_id(request: web.Request) -> int:
    try:
        account_id = int(request.match_info["id"])
    except ValueError:
        account_id = None
    if account_id is None or not -_MAX_ID - 1 <= account_id <= _MAX_ID:
        raise web.HTTPBadRequest(
            text=json.dumps({"error": "Invalid account id"}), content_type="application/json"
        )
    return account_id


@routes.get("/api/regions")
async def list_regions(request: web.Request) -> web.Response:
    return web.json_response(list(SUPPORTED_REGIONS))


@routes.get("/api/accounts")
async def list_accounts(request: web.Request) -> web.Response:
    try:
        accounts = await request.app[STORE].list_all()
    except PersistenceFailed:
        logger.exception("❌ Error fetching accounts")
        return _error(500, "Failed to fetch accounts")
    logger.debug("📤 Sending %d accounts", len(accounts))
    return web.json_response([a.to_json() for a in accounts])


@routes.get("/api/accounts/refresh")
async def refresh_accounts(request: web.Request) -> web.Response:
    try:
        accounts = await refresh_all(request.app[STORE], request.app[RIOT])
    except PersistenceFailed:
        # seul le chargement initial peut échouer ici
        logger.exception("❌ Error refreshing accounts")
        return _error(500, "Failed to refresh accounts")
    return web.json_response([a.to_json() for a in accounts])


@routes.post("/api/accounts")
async def add_account(request: web.Request) -> web.Response:
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    fields = parse_new_account(payload)
    if fields is None:
        return _error(400, "Missing required fields")
    logger.info("📥 Received request to add account: %s (%s)", fields["riotId"], fields["region"])

    try:
        account = await create_account(
            request.app[STORE], request.app[RIOT], request.app[CIPHER],
            fields["login"], fields["riotId"], fields["region"], fields["password"],
        )
    except ValueError as e:  # Riot ID invalide ou UnknownRegion
        return _error(400, str(e))
    except (StatsLookupFailed, PersistenceFailed) as e:
        logger.error("❌ Error adding account %s: %s", fields["riotId"], e)
        return _error(500, "Failed to add account")
    return web.json_response(account.to_json(), status=201)


@routes.delete("/api/accounts/{id}")
async def delete_account(request: web.Request) -> web.Response:
    account_id = _account_id(request)
    try:
        deleted = await request.app[STORE].delete_by_id(account_id)
    except PersistenceFailed:
        logger.exception("Failed to delete account %s", account_id)
        return _error(500, "Failed to delete account")
    if not deleted:
        return _error(404, "Account not found")
    return web.Response(status=204)


@routes.get("/api/accounts/{id}/credentials")
async def account_credentials(request: web.Request) -> web.Response:
    account_id = _account_id(request)
    try:
        creds = await reveal_credentials(request.app[STORE], request.app[CIPHER], account_id)
    except PersistenceFailed:
        logger.exception("Failed to read account %s", account_id)
        return _error(500, "Failed to read account")
    if creds is None:
        return _error(404, "Account not found")
    return web.json_response(creds)
