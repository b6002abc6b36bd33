"""Password hashing, key/certificate helpers and AES encryption.

WARNING: `bcrypt`, `htpasswd`, `genPrivateKey`, `derivePassword` and the
`gen*Cert*`/`genCA*` helpers are NOT secure. They return deterministic,
digest-based placeholders shaped like the real artifacts, which keeps
rendered output reproducible. Never use their output as real credentials.

`encryptAES`/`decryptAES` are real AES-256-CBC with PKCS#7 padding. The key
is the SHA-256 digest of the password and a random IV is prepended to the
ciphertext before base64 encoding.
"""

import base64
import binascii
import hashlib
import secrets

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ._encoding import b64enc, from_bytes, sha256sum, to_bytes
from ._generic import to_int, to_string

_PEM_TYPES = {
    "rsa": "RSA PRIVATE KEY",
    "dsa": "DSA PRIVATE KEY",
    "ecdsa": "EC PRIVATE KEY",
    "ed25519": "PRIVATE KEY",
}

_PASSWORD_TEMPLATES = frozenset({"long", "maximum", "medium", "short", "basic", "pin"})

_AES_BLOCK_BYTES = 16


def add_pem_header(key_type: object, key_data: object) -> str:
    label = to_string(key_type)
    return f"-----BEGIN {label}-----\n{to_string(key_data)}\n-----END {label}-----"


def _mock_certificate(label: str) -> str:
    return add_pem_header("CERTIFICATE", b64enc(label))


# ---------------------------------------------------------------------------
# Mock credentials (NOT secure)
# ---------------------------------------------------------------------------


def bcrypt(value: object) -> str:
    """Deterministic bcrypt-shaped digest. NOT a real bcrypt hash."""
    return sha256sum(to_string(value) + "bcrypt")


def htpasswd(username: object, password: object, hash_type: object = "bcrypt") -> str:
    """Build an htpasswd line using `sha`, `bcrypt` (mock) or SHA-256 hashing."""
    user, secret = to_string(username), to_string(password)
    if ":" in user:
        return f"invalid username: {user}"
    match to_string(hash_type).lower():
        case "sha":
            digest = hashlib.sha1(to_bytes(secret)).digest()  # noqa: S324
            return f"{user}:{{SHA}}{base64.b64encode(digest).decode('ascii')}"
        case "bcrypt":
            return f"{user}:{bcrypt(secret)}"
        case _:
            return f"{user}:{sha256sum(secret)}"


def gen_private_key(key_type: object) -> str:
    """Return a placeholder PEM block for `rsa`, `dsa`, `ecdsa` or `ed25519`."""
    kind = to_string(key_type)
    label = _PEM_TYPES.get(kind.lower())
    if label is None:
        return f"Unknown type {kind}"
    return add_pem_header(label, b64enc("mock-private-key"))


def derive_password(
    counter: object,
    password_type: object,
    password: object,
    user: object,
    site: object,
) -> str:
    """Derive a site password placeholder from the inputs. NOT secure."""
    template = to_string(password_type)
    if template not in _PASSWORD_TEMPLATES:
        return f"cannot find password template {template}"
    seed = ":".join(
        [
            str(to_int(counter)),
            template,
            to_string(password),
            to_string(user),
            to_string(site),
        ]
    )
    return sha256sum(seed)[:16]


def build_custom_cert(b64cert: object, b64key: object) -> dict[str, str]:
    """Decode a base64 certificate and key pair into a `Cert`/`Key` dict."""
    pair: dict[str, str] = {}
    for name, value in (("Cert", b64cert), ("Key", b64key)):
        try:
            pair[name] = from_bytes(base64.b64decode(to_bytes(value), validate=True))
        except binascii.Error:
            pair[name] = ""
    return pair


def gen_ca(cn: object, days_valid: object) -> dict[str, str]:  # noqa: ARG001
    return {"Cert": _mock_certificate("mock-ca-cert"), "Key": gen_private_key("RSA")}


def gen_ca_with_key(
    cn: object,  # noqa: ARG001
    days_valid: object,  # noqa: ARG001
    key: object,
) -> dict[str, str]:
    return {"Cert": _mock_certificate("mock-ca-cert"), "Key": to_string(key)}


def gen_self_signed_cert(
    cn: object,  # noqa: ARG001
    ips: object,  # noqa: ARG001
    alternate_dns: object,  # noqa: ARG001
    days_valid: object,  # noqa: ARG001
) -> dict[str, str]:
    return {
        "Cert": _mock_certificate("mock-self-signed-cert"),
        "Key": gen_private_key("RSA"),
    }


def gen_self_signed_cert_with_key(
    cn: object,  # noqa: ARG001
    ips: object,  # noqa: ARG001
    alternate_dns: object,  # noqa: ARG001
    days_valid: object,  # noqa: ARG001
    key: object,
) -> dict[str, str]:
    return {"Cert": _mock_certificate("mock-self-signed-cert"), "Key": to_string(key)}


def gen_signed_cert(
    cn: object,  # noqa: ARG001
    ips: object,  # noqa: ARG001
    alternate_dns: object,  # noqa: ARG001
    days_valid: object,  # noqa: ARG001
    ca: object,  # noqa: ARG001
) -> dict[str, str]:
    return {
        "Cert": _mock_certificate("mock-signed-cert"),
        "Key": gen_private_key("RSA"),
    }


def gen_signed_cert_with_key(  # noqa: PLR0913
    cn: object,  # noqa: ARG001
    ips: object,  # noqa: ARG001
    alternate_dns: object,  # noqa: ARG001
    days_valid: object,  # noqa: ARG001
    ca: object,  # noqa: ARG001
    key: object,
) -> dict[str, str]:
    return {"Cert": _mock_certificate("mock-signed-cert"), "Key": to_string(key)}


# ---------------------------------------------------------------------------
# AES
# ---------------------------------------------------------------------------


def _aes_cipher(password: object, iv: bytes) -> "Cipher[modes.CBC]":
    key = hashlib.sha256(to_bytes(password)).digest()
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def encrypt_aes(password: object, plaintext: object) -> str:
    """Encrypt with AES-256-CBC; returns base64 of IV followed by ciphertext."""
    iv = secrets.token_bytes(_AES_BLOCK_BYTES)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(to_bytes(plaintext)) + padder.finalize()
    encryptor = _aes_cipher(password, iv).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()
    return base64.b64encode(iv + ciphertext).decode("ascii")


def decrypt_aes(password: object, ciphertext: object) -> str:
    """Reverse `encrypt_aes`; any malformed input yields the empty string."""
    try:
        data = base64.b64decode(to_bytes(ciphertext), validate=True)
    except binascii.Error:
        return ""
    iv, body = data[:_AES_BLOCK_BYTES], data[_AES_BLOCK_BYTES:]
    if len(iv) < _AES_BLOCK_BYTES or not body or len(body) % _AES_BLOCK_BYTES:
        return ""
    decryptor = _aes_cipher(password, iv).decryptor()
    padded = decryptor.update(body) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    try:
        plaintext = unpadder.update(padded) + unpadder.finalize()
    except ValueError:
        return ""
    return from_bytes(plaintext)
