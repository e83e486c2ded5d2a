import secrets

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

password_hash = PasswordHash.recommended()  # argon2id


def get_password_hash(plain: str) -> str:
    return password_hash.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return password_hash.verify(plain, hashed)
    except UnknownHashError:
        return False


def gen_temp_password() -> str:
    return secrets.token_hex(16)


def gen_reset_token() -> str:
    return secrets.token_hex(32)
