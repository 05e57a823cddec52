"""
Vault Encryption for toml-env

AES-256-GCM with the blob layout ``nonce(12) || ciphertext || tag(16)``,
base64-encoded as a single token.
"""

import base64
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import DecryptionFailedError, InvalidKeyLengthError


class VaultCipher:
    """
    AES-256-GCM cipher for vault fields.

    Only the trailing 64 hex characters of the key string are significant,
    so key material may carry a readable prefix (``key_...``).
    """

    NONCE_SIZE = 12
    TAG_SIZE = 16
    KEY_HEX_LENGTH = 64

    def __init__(self, key: str):
        """
        Initialize the cipher.

        Args:
            key: Key string ending in 64 hex characters

        Raises:
            InvalidKeyLengthError: If the trailing characters are not a
                32-byte hex key
        """
        self.key = self._load_key(key)

    @classmethod
    def _load_key(cls, key: str) -> bytes:
        try:
            raw = bytes.fromhex(key[-cls.KEY_HEX_LENGTH:])
        except (TypeError, ValueError):
            raw = b""

        if len(raw) != 32:
            raise InvalidKeyLengthError(
                "INVALID_KEY: It must be 64 characters long (or more)"
            )
        return raw

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt data with AES-256-GCM.

        Args:
            plaintext: Data to encrypt

        Returns:
            nonce + ciphertext + tag
        """
        nonce = os.urandom(self.NONCE_SIZE)

        cipher = Cipher(
            algorithms.AES(self.key),
            modes.GCM(nonce),
            backend=default_backend()
        )
        encryptor = cipher.encryptor()
        ciphertext = encryptor.update(plaintext) + encryptor.finalize()

        return nonce + ciphertext + encryptor.tag

    def decrypt(self, blob: bytes) -> bytes:
        """
        Decrypt and authenticate an AES-256-GCM blob.

        Args:
            blob: nonce + ciphertext + tag

        Returns:
            Decrypted plaintext

        Raises:
            DecryptionFailedError: If the authentication tag does not verify
        """
        nonce = blob[:self.NONCE_SIZE]
        tag = blob[-self.TAG_SIZE:]
        ciphertext = blob[self.NONCE_SIZE:-self.TAG_SIZE]

        cipher = Cipher(
            algorithms.AES(self.key),
            modes.GCM(nonce, tag),
            backend=default_backend()
        )
        decryptor = cipher.decryptor()
        try:
            return decryptor.update(ciphertext) + decryptor.finalize()
        except InvalidTag:
            raise DecryptionFailedError(
                "DECRYPTION_FAILED: Please check your TOML_ENV_KEY"
            ) from None

    def encrypt_string(self, plaintext: str) -> str:
        """Encrypt a string and return the base64 blob."""
        blob = self.encrypt(plaintext.encode("utf-8"))
        return base64.b64encode(blob).decode("ascii")

    def decrypt_string(self, ciphertext_b64: str) -> str:
        """Decrypt a base64 blob back to a string."""
        blob = base64.b64decode(ciphertext_b64)
        return self.decrypt(blob).decode("utf-8")


def decrypt(ciphertext_b64: str, key: str) -> str:
    """
    Decrypt a base64 vault blob.

    Raises:
        InvalidKeyLengthError: Key is not usable as an AES-256 key
        DecryptionFailedError: Tag verification failed (wrong key or
            tampered ciphertext)

    Any other failure from base64 or the cipher primitive propagates
    unchanged.
    """
    return VaultCipher(key).decrypt_string(ciphertext_b64)


def encrypt(plaintext: str, key: str) -> str:
    """Encrypt plaintext into a base64 vault blob under ``key``."""
    return VaultCipher(key).encrypt_string(plaintext)
