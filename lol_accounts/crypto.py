# lol_accounts/crypto.py
from __future__ import annotations
import base64, binascii, logging, secrets
from typing import Optional
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .errors import DecryptionFailed

logger = logging.getLogger(__name__)

# Sel fixe : la clé dérivée doit rester identique d'un démarrage à l'autre
_KDF_SALT = b"lol-accounts/credential-cipher/v1"
_NONCE_LEN = 12


def derive_key(secret: str) -> bytes:
    return Scrypt(salt=_KDF_SALT, length=32, n=2**14, r=8, p=1).derive(secret.encode("utf-8"))


class CredentialCipher:
    """AES-GCM sur les mots de passe stockés.

    Format stocké : base64 url-safe de ``nonce (12 octets) || ciphertext+tag``.
    La clé est dérivée une seule fois du secret partagé (``SECRET_KEY``).
    """

    def __init__(self, secret: Optional[str]):
        if not secret:
            raise RuntimeError("SECRET_KEY manquant : chiffrement impossible")
        self._aes = AESGCM(derive_key(secret))

    def encrypt(self, plaintext: str) -> str:
        nonce = secrets.token_bytes(_NONCE_LEN)
        ct = self._aes.encrypt(nonce, plaintext.encode("utf-8"), None)
        return base64.urlsafe_b64encode(nonce + ct).decode("ascii")

    def decrypt_or_raise(self, ciphertext: str) -> str:
        if not ciphertext:
            raise DecryptionFailed("No encrypted text provided")
        try:
            raw = base64.urlsafe_b64decode(ciphertext.encode("ascii"))
        except (binascii.Error, ValueError, UnicodeEncodeError) as e:
            raise DecryptionFailed("Malformed ciphertext") from e
        # nonce + tag GCM (16 octets) au minimum
        if len(raw) < _NONCE_LEN + 16:
            raise DecryptionFailed("Ciphertext too short")
        try:
            pt = self._aes.decrypt(raw[:_NONCE_LEN], raw[_NONCE_LEN:], None)
            return pt.decode("utf-8")
        except (InvalidTag, UnicodeDecodeError) as e:
            raise DecryptionFailed("Wrong key or corrupted ciphertext") from e

    def decrypt(self, ciphertext: str) -> str:
        try:
            return self.decrypt_or_raise(ciphertext)
        except DecryptionFailed as e:
            logger.warning("Decryption failed: %s", e)
            return ""
