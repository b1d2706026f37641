"""Password hashing with bcrypt."""

from __future__ import annotations

import bcrypt

from usermanagement.core.exceptions import ConfigurationError

# bcrypt accepts cost factors 4..31; each step doubles the work.
MIN_ROUNDS = 4
MAX_ROUNDS = 31


class PasswordHasher:
    """One-way salted hashing and verification of plaintext credentials.

    Neither the plaintext nor the hash is ever logged by this class.
    """

    def __init__(self, rounds: int = 12) -> None:
        if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
            raise ConfigurationError(
                f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}"
            )
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``.

        A malformed hash verifies as False instead of raising.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False
