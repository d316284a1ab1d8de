"""Password hashing with bcrypt."""
import bcrypt


class PasswordHasher:
    """
    Salted bcrypt hashing with a configurable work factor.

    Both operations are CPU-bound; async callers should run them in a worker
    thread (see ``services.auth_service``).
    """

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds
        # Stand-in hash for logins with an unknown email
        self._dummy_hash = self.hash("dummy-password-for-unknown-users")

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Return a bcrypt hash string for ``plaintext``."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plaintext.encode(), salt).decode()

    def verify(self, plaintext: str, password_hash: str) -> bool:
        """Check ``plaintext`` against a stored hash. A malformed hash is a mismatch."""
        try:
            return bcrypt.checkpw(plaintext.encode(), password_hash.encode())
        except ValueError:
            return False

    def verify_dummy(self, plaintext: str) -> None:
        """
        Spend the same bcrypt work as ``verify`` without a stored hash.

        Used when the account does not exist, so a failed login takes about as
        long for an unknown email as for a wrong password.
        """
        self.verify(plaintext, self._dummy_hash)
