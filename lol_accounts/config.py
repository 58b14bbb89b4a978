# lol_accounts/config.py
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
from dotenv import load_dotenv


def _int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} doit être un entier (reçu: {raw!r})") from None


def _float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} doit être un nombre (reçu: {raw!r})") from None


# .env à la racine du dépôt, à côté de .env.example
ENV_PATH = Path(__file__).parents[1] / ".env"


@dataclass(frozen=True)
class Settings:
    SECRET_KEY: str
    RIOT_API_KEY: str
    PORT: int
    HOST: str
    DB_PATH: Path
    ACCOUNT_ROUTING: str
    RIOT_TIMEOUT: float
    CORS_ORIGIN: str
    LOG_LEVEL: str


def load_settings(env_path: Optional[Path] = None) -> Settings:
    # les variables déjà définies dans l'environnement gagnent sur le fichier
    load_dotenv(dotenv_path=env_path or ENV_PATH)

    secret = os.getenv("SECRET_KEY")
    if not secret:
        raise RuntimeError("SECRET_KEY manquant")
    riot_key = os.getenv("RIOT_API_KEY")
    if not riot_key:
        raise RuntimeError("RIOT_API_KEY manquant")

    return Settings(
        SECRET_KEY=secret,
        RIOT_API_KEY=riot_key,
        PORT=_int("PORT", "4000"),
        HOST=os.getenv("HOST", "0.0.0.0"),
        DB_PATH=Path(os.getenv("DB_PATH", str(Path(__file__).parents[1] / "accounts.db"))),
        ACCOUNT_ROUTING=os.getenv("ACCOUNT_ROUTING", "americas").lower(),
        RIOT_TIMEOUT=_float("RIOT_TIMEOUT", "10"),
        CORS_ORIGIN=os.getenv("CORS_ORIGIN", "*"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
