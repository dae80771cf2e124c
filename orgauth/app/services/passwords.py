import bcrypt

# Checked against when the user does not exist, so response time does not
# reveal which emails are registered
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (cost factor 12)"""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(12)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def burn_password_check(password: str) -> None:
    bcrypt.checkpw(password.encode("utf-8"), _DUMMY_HASH)
