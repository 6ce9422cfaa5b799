"""RSA broadcast channel adapter — implements ChannelCryptoPort with `cryptography`."""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
import logging

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from noob_channel.application.ports.channel_crypto_port import ChannelCryptoPort, RandomSource
from noob_channel.domain.exceptions import ChannelGenerationError, MalformedChannelError
from noob_channel.domain.value_objects.channel import AdminCredential, ChannelDefinition
from noob_channel.domain.value_objects.enums import ChannelLevel
from noob_channel.domain.value_objects.manager_identity import ManagerIdentity

logger = logging.getLogger(__name__)

SALT_LENGTH = 32
PUBLIC_EXPONENT = 65537
DEFAULT_KEY_BITS = 2048
IDENTITY_VERSION = 1
_ED25519_KEY_LENGTH = 32


def derive_channel_id(
    name: str,
    description: str,
    level: ChannelLevel,
    max_payload_length: int,
    salt: bytes,
    rsa_public_key_pem: str,
) -> str:
    """Hash every public field so a tampered definition no longer matches its id."""
    h = hashlib.blake2b(digest_size=32)
    for part in (
        name.encode("utf-8"),
        description.encode("utf-8"),
        level.value.encode("ascii"),
        str(max_payload_length).encode("ascii"),
        salt,
        rsa_public_key_pem.encode("ascii"),
    ):
        h.update(len(part).to_bytes(4, "big"))
        h.update(part)
    return base64.b64encode(h.digest()).decode("ascii")


class RsaChannelCrypto(ChannelCryptoPort):
    """Public channels keyed by an RSA admin key.

    The serialized form is canonical JSON (sorted keys, bytes as base64),
    which is also what lands in ``channelInfo.json``.
    """

    def __init__(self, key_bits: int = DEFAULT_KEY_BITS):
        if key_bits < 1024:
            raise ValueError("RSA key size must be at least 1024 bits")
        self._key_bits = key_bits

    def new_channel(
        self,
        name: str,
        description: str,
        max_payload_length: int,
        rng: RandomSource,
    ) -> tuple[ChannelDefinition, AdminCredential]:
        if not name:
            raise ChannelGenerationError("Channel name cannot be empty")
        if max_payload_length <= 0:
            raise ChannelGenerationError(
                f"Max payload length must be positive, got {max_payload_length}"
            )

        salt = rng(SALT_LENGTH)
        if len(salt) != SALT_LENGTH:
            raise ChannelGenerationError(
                f"Random source returned {len(salt)} bytes, expected {SALT_LENGTH}"
            )

        try:
            private_key = rsa.generate_private_key(
                public_exponent=PUBLIC_EXPONENT, key_size=self._key_bits
            )
        except ValueError as e:
            raise ChannelGenerationError("failed to generate channel RSA key") from e

        public_pem = private_key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ).decode("ascii")

        channel_id = derive_channel_id(
            name, description, ChannelLevel.PUBLIC, max_payload_length, salt, public_pem
        )
        definition = ChannelDefinition(
            name=name,
            description=description,
            level=ChannelLevel.PUBLIC,
            max_payload_length=max_payload_length,
            rsa_public_key_pem=public_pem,
            salt=salt,
            channel_id=channel_id,
        )
        logger.debug("Built channel %s with id %s", name, channel_id)
        return definition, AdminCredential(channel_id=channel_id, private_key=private_key)

    def marshal(self, definition: ChannelDefinition) -> bytes:
        doc = {
            "receptionID": definition.channel_id,
            "name": definition.name,
            "description": definition.description,
            "level": definition.level.value,
            "maxPayloadLength": definition.max_payload_length,
            "salt": base64.b64encode(definition.salt).decode("ascii"),
            "rsaPubKey": definition.rsa_public_key_pem,
        }
        return json.dumps(doc, sort_keys=True, separators=(",", ":")).encode("utf-8")

    def unmarshal(self, data: bytes) -> ChannelDefinition:
        try:
            doc = json.loads(data)
            definition = ChannelDefinition(
                name=str(doc["name"]),
                description=str(doc["description"]),
                level=ChannelLevel(doc["level"]),
                max_payload_length=int(doc["maxPayloadLength"]),
                rsa_public_key_pem=str(doc["rsaPubKey"]),
                salt=base64.b64decode(doc["salt"], validate=True),
                channel_id=str(doc["receptionID"]),
            )
        except (ValueError, TypeError, KeyError, binascii.Error) as e:
            raise MalformedChannelError(f"invalid channel definition: {e}") from e

        expected = derive_channel_id(
            definition.name,
            definition.description,
            definition.level,
            definition.max_payload_length,
            definition.salt,
            definition.rsa_public_key_pem,
        )
        if expected != definition.channel_id:
            raise MalformedChannelError("channel id does not match channel contents")
        return definition

    def pem_encode(self, credential: AdminCredential) -> bytes:
        key = credential.private_key
        if not isinstance(key, rsa.RSAPrivateKey):
            raise TypeError("Admin credential does not hold an RSA private key")
        return key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.TraditionalOpenSSL,
            serialization.NoEncryption(),
        )

    # ─── Manager identity ────────────────────────────────────────────

    def generate_identity(self, rng: RandomSource) -> ManagerIdentity:
        seed = rng(_ED25519_KEY_LENGTH)
        if len(seed) != _ED25519_KEY_LENGTH:
            raise ChannelGenerationError(
                f"Random source returned {len(seed)} bytes, expected {_ED25519_KEY_LENGTH}"
            )
        return self._identity_from_seed(seed)

    def marshal_identity(self, identity: ManagerIdentity) -> bytes:
        return bytes([IDENTITY_VERSION]) + identity.private_key

    def unmarshal_identity(self, data: bytes) -> ManagerIdentity:
        if len(data) != 1 + _ED25519_KEY_LENGTH:
            raise ValueError(f"Identity must be {1 + _ED25519_KEY_LENGTH} bytes, got {len(data)}")
        if data[0] != IDENTITY_VERSION:
            raise ValueError(f"Unsupported identity version {data[0]}")
        return self._identity_from_seed(bytes(data[1:]))

    @staticmethod
    def _identity_from_seed(seed: bytes) -> ManagerIdentity:
        private_key = Ed25519PrivateKey.from_private_bytes(seed)
        public = private_key.public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )
        return ManagerIdentity(public_key=public, private_key=seed)
