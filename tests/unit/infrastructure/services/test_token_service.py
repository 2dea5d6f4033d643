"""Unit tests for TokenService."""

from authcore.infrastructure.services.token_service import TokenService


class TestVerificationToken:
    """Tests for verification code generation."""

    def test_six_digits_by_default(self):
        for _ in range(200):
            code = TokenService().verification_token()
            assert len(code) == 6
            assert code.isdigit()

    def test_configurable_length(self):
        code = TokenService(verification_code_length=8).verification_token()

        assert len(code) == 8
        assert code.isdigit()

    def test_codes_vary(self):
        service = TokenService()
        codes = {service.verification_token() for _ in range(50)}

        assert len(codes) > 1


class TestResetToken:
    """Tests for reset token generation."""

    def test_forty_hex_chars(self):
        token = TokenService.reset_token()

        assert len(token) == 40
        int(token, 16)

    def test_tokens_are_unique(self):
        tokens = {TokenService.reset_token() for _ in range(100)}

        assert len(tokens) == 100
