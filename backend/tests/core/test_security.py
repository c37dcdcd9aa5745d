"""Tests for password hashing."""
import pytest
from argon2.exceptions import InvalidHashError

from core.security import PasswordHasher


def test__hash__verifies_against_original_password(password_hasher: PasswordHasher) -> None:
    """A digest verifies against the password it was made from."""
    digest = password_hasher.hash("correct horse battery staple")

    assert password_hasher.verify(digest, "correct horse battery staple") is True


def test__hash__is_salted(password_hasher: PasswordHasher) -> None:
    """Hashing the same password twice gives different digests that both verify."""
    first = password_hasher.hash("123")
    second = password_hasher.hash("123")

    assert first != second
    assert password_hasher.verify(first, "123") is True
    assert password_hasher.verify(second, "123") is True


def test__hash__does_not_contain_plaintext(password_hasher: PasswordHasher) -> None:
    """The digest never embeds the plaintext."""
    digest = password_hasher.hash("s3cret-value")

    assert "s3cret-value" not in digest
    assert digest.startswith("$argon2id$")


def test__verify__wrong_password_returns_false(password_hasher: PasswordHasher) -> None:
    """A wrong password is a False result, not an exception."""
    digest = password_hasher.hash("right")

    assert password_hasher.verify(digest, "wrong") is False


def test__verify__empty_password_returns_false(password_hasher: PasswordHasher) -> None:
    """An empty candidate password does not verify."""
    digest = password_hasher.hash("right")

    assert password_hasher.verify(digest, "") is False


def test__verify__malformed_digest_raises(password_hasher: PasswordHasher) -> None:
    """A digest that is not an argon2 hash is an error, not a mismatch."""
    with pytest.raises(InvalidHashError):
        password_hasher.verify("not-a-real-digest", "password")


def test__needs_rehash__false_for_same_parameters(password_hasher: PasswordHasher) -> None:
    """Digests made with the current parameters do not need rehashing."""
    digest = password_hasher.hash("password")

    assert password_hasher.needs_rehash(digest) is False


def test__needs_rehash__true_after_parameter_change(password_hasher: PasswordHasher) -> None:
    """Digests made with other parameters are flagged for rehashing."""
    digest = password_hasher.hash("password")

    assert PasswordHasher().needs_rehash(digest) is True
