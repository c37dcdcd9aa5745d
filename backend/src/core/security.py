"""Password hashing with argon2id."""
from argon2 import PasswordHasher as Argon2Hasher
from argon2.exceptions import VerifyMismatchError


class PasswordHasher:
    """
    One-way, salted password hashing.

    Wraps argon2-cffi's hasher (argon2id, memory-hard). Every call to hash() draws a
    fresh salt, so hashing the same password twice yields two different digests that
    both verify. Digests embed their own salt and cost parameters.
    """

    def __init__(self, hasher: Argon2Hasher | None = None) -> None:
        self._hasher = hasher or Argon2Hasher()

    def hash(self, plaintext: str) -> str:
        """Return a storable digest for the plaintext password."""
        return self._hasher.hash(plaintext)

    def verify(self, digest: str, plaintext: str) -> bool:
        """
        Check a plaintext password against a stored digest.

        Returns False on mismatch. Raises argon2.exceptions.InvalidHashError if the
        digest itself is malformed.
        """
        try:
            return self._hasher.verify(digest, plaintext)
        except VerifyMismatchError:
            return False

    def needs_rehash(self, digest: str) -> bool:
        """True if the digest was produced with different cost parameters."""
        return self._hasher.check_needs_rehash(digest)
