"""Credential hashing and verification.

Call sites only talk to ``PasswordVerifier``; swapping the hashing scheme
means providing another verifier, not touching login code.
"""

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordVerifier:
    """Interface: ``hash`` produces a stored credential, ``verify`` checks one."""

    def hash(self, password: str) -> str:
        raise NotImplementedError

    def verify(self, stored: str, password: str) -> bool:
        raise NotImplementedError


class WerkzeugPasswordVerifier(PasswordVerifier):
    """Salted scrypt/pbkdf2 hashes from werkzeug; comparison is constant-time."""

    def __init__(self, method: str = "scrypt"):
        self.method = method

    def hash(self, password: str) -> str:
        return generate_password_hash(password, method=self.method)

    def verify(self, stored: str, password: str) -> bool:
        if not stored or password is None:
            return False
        try:
            return check_password_hash(stored, password)
        except ValueError:
            # unknown hash format (e.g. a legacy plaintext row) never matches
            return False


password_verifier: PasswordVerifier = WerkzeugPasswordVerifier()


def hash_password(password: str) -> str:
    return password_verifier.hash(password)


def verify_password(stored: str, password: str) -> bool:
    return password_verifier.verify(stored, password)
