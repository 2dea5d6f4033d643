"""Built-in email templates.

Each template has a subject, an HTML body and a plain text body, all
rendered with the same variables. ``app_name`` is always available.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html_body: str
    text_body: str


_LAYOUT_OPEN = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"><title>{{ app_name }}</title></head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
"""

_LAYOUT_CLOSE = """
<p>Best regards,<br>The {{ app_name }} Team</p>
<p style="color: #888; font-size: 0.8em;">This is an automated message, please do not reply to this email.</p>
</body>
</html>
"""

VERIFICATION_EMAIL = EmailTemplate(
    subject="Verify your email",
    html_body=_LAYOUT_OPEN
    + """
<h1>Verify your email</h1>
<p>Thank you for signing up! Your verification code is:</p>
<p style="font-size: 32px; font-weight: bold; letter-spacing: 5px;">{{ verification_code }}</p>
<p>Enter this code on the verification page to complete your registration.</p>
<p>This code will expire in {{ expires_in_hours }} hours for security reasons.</p>
<p>If you didn't create an account with us, please ignore this email.</p>
"""
    + _LAYOUT_CLOSE,
    text_body="""Verify your email

Thank you for signing up! Your verification code is: {{ verification_code }}

Enter this code on the verification page to complete your registration.
This code will expire in {{ expires_in_hours }} hours.

If you didn't create an account with us, please ignore this email.
""",
)

WELCOME_EMAIL = EmailTemplate(
    subject="Welcome to {{ app_name }}",
    html_body=_LAYOUT_OPEN
    + """
<h1>Welcome, {{ name }}!</h1>
<p>Your email address has been verified and your account is ready to use.</p>
"""
    + _LAYOUT_CLOSE,
    text_body="""Welcome, {{ name }}!

Your email address has been verified and your account is ready to use.
""",
)

PASSWORD_RESET_REQUEST_EMAIL = EmailTemplate(
    subject="Reset your password",
    html_body=_LAYOUT_OPEN
    + """
<h1>Password reset</h1>
<p>We received a request to reset your password. If you didn't make this request, please ignore this email.</p>
<p>To reset your password, click the link below:</p>
<p><a href="{{ reset_url }}" style="background-color: #4CAF50; color: white; padding: 12px 20px; text-decoration: none; border-radius: 5px;">Reset Password</a></p>
<p>This link will expire in {{ expires_in_hours }} hour(s) for security reasons.</p>
"""
    + _LAYOUT_CLOSE,
    text_body="""Password reset

We received a request to reset your password. If you didn't make this request, please ignore this email.

To reset your password, open this link:
{{ reset_url }}

This link will expire in {{ expires_in_hours }} hour(s).
""",
)

PASSWORD_RESET_SUCCESS_EMAIL = EmailTemplate(
    subject="Password reset successful",
    html_body=_LAYOUT_OPEN
    + """
<h1>Password reset successful</h1>
<p>We're writing to confirm that your password has been successfully reset.</p>
<p>If you did not initiate this password reset, please contact our support team immediately.</p>
<p>For security reasons, we recommend that you use a strong, unique password and avoid using the same password across multiple sites.</p>
"""
    + _LAYOUT_CLOSE,
    text_body="""Password reset successful

We're writing to confirm that your password has been successfully reset.
If you did not initiate this password reset, please contact our support team immediately.
""",
)
