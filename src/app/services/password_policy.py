"""
Password Policy

Length and composition rules applied to every new password.
"""

from dataclasses import dataclass

from libs.result import Error, Result, Return

# bcrypt only accepts this many bytes of input
BCRYPT_MAX_BYTES = 72

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?/~`'\"\\"


@dataclass(frozen=True)
class PasswordPolicy:
    """
    Configurable password strength policy.

    Business Rules:
    - Minimum length (8 by default)
    - At most 72 bytes once UTF-8 encoded, the bcrypt input limit
    - Optional composition rules: uppercase, lowercase, digit, special char
    - The first failed rule is reported as WEAK_PASSWORD
    """

    min_length: int = 8
    require_uppercase: bool = True
    require_lowercase: bool = True
    require_digit: bool = True
    require_special: bool = True
    max_bytes: int = BCRYPT_MAX_BYTES

    @classmethod
    def from_config(cls, config) -> "PasswordPolicy":
        return cls(
            min_length=config.PASSWORD_MIN_LENGTH,
            require_uppercase=config.PASSWORD_REQUIRE_UPPERCASE,
            require_lowercase=config.PASSWORD_REQUIRE_LOWERCASE,
            require_digit=config.PASSWORD_REQUIRE_DIGIT,
            require_special=config.PASSWORD_REQUIRE_SPECIAL,
        )

    def validate(self, password: str) -> Result[None]:
        """
        Validate password strength.

        Args:
            password: Candidate password

        Returns:
            Result with None if valid, or Error(WEAK_PASSWORD) if not
        """
        if len(password) < self.min_length:
            return self._weak(f"Password must be at least {self.min_length} characters long")

        if len(password.encode("utf-8")) > self.max_bytes:
            return self._weak(f"Password must be at most {self.max_bytes} bytes long")

        if self.require_uppercase and not any(c.isupper() for c in password):
            return self._weak("Password must contain at least one uppercase letter")

        if self.require_lowercase and not any(c.islower() for c in password):
            return self._weak("Password must contain at least one lowercase letter")

        if self.require_digit and not any(c.isdigit() for c in password):
            return self._weak("Password must contain at least one digit")

        if self.require_special and not any(c in SPECIAL_CHARACTERS for c in password):
            return self._weak("Password must contain at least one special character")

        return Return.ok(None)

    @staticmethod
    def _weak(message: str) -> Result[None]:
        return Return.err(Error("WEAK_PASSWORD", message))
