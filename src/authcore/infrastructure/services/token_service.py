"""Token generation service.

Provides cryptographically secure random tokens for the email verification
and password reset flows. Tokens are opaque bearer secrets.
"""

import secrets

RESET_TOKEN_BYTES = 20  # 160 bits


class TokenService:
    """Service for generating secure random tokens."""

    def __init__(self, verification_code_length: int = 6) -> None:
        """Initialize the token service.

        Args:
            verification_code_length: Number of digits in a verification code.
        """
        self.verification_code_length = verification_code_length

    def verification_token(self) -> str:
        """Generate a fixed-length numeric verification code.

        Leading zeros are kept, so every code has exactly
        ``verification_code_length`` digits.

        Returns:
            Numeric code string, e.g. ``"048213"``.
        """
        upper = 10**self.verification_code_length
        return str(secrets.randbelow(upper)).zfill(self.verification_code_length)

    @staticmethod
    def reset_token(length: int = RESET_TOKEN_BYTES) -> str:
        """Generate a high-entropy password reset token.

        Args:
            length: Number of random bytes. Default is 20 bytes (40 hex chars).

        Returns:
            Hexadecimal token string.
        """
        return secrets.token_hex(length)
