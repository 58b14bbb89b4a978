# main.py
import logging
from aiohttp import web
from lol_accounts.config import load_settings
from lol_accounts.web import create_app


def main():
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    print(f"[startup] DB: {settings.DB_PATH} — routing: {settings.ACCOUNT_ROUTING} — port: {settings.PORT}")
    app = create_app(settings)
    web.run_app(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
