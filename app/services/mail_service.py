import logging

import resend

from app.core.config import settings
from app.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, html: str) -> bool:
    """Send an email through Resend.

    Returns False (and only logs) when Resend is not configured. Raises
    UpstreamFailure when the provider rejects the request; callers that
    treat email as optional catch it and carry on.
    """
    if not settings.RESEND_API_KEY:
        logger.info("Resend not configured; skipping email to %s (%s)", to, subject)
        return False

    resend.api_key = settings.RESEND_API_KEY
    try:
        resp = resend.Emails.send(
            {
                "from": settings.EMAIL_FROM,
                "to": to,
                "subject": subject,
                "html": html,
            }
        )
    except Exception as e:
        logger.exception("Failed to send email via Resend")
        raise UpstreamFailure("Failed to send email") from e

    logger.info("Email sent to %s id=%s", to, resp.get("id") if isinstance(resp, dict) else None)
    return True


def _role_label(role: str) -> str:
    return "Head of Department" if role == "SUPER_ADMIN" else role.replace("_", " ").title()


def invitation_email_html(email: str, temp_password: str, role: str) -> str:
    return f"""
    <html>
      <body style="font-family: sans-serif; color: #333; max-width: 600px; margin: 0 auto;">
        <h1>Welcome to Departmental Portal</h1>
        <p>You have been invited to join the Departmental Portal as <strong>{_role_label(role)}</strong>.</p>
        <p><strong>Email:</strong> {email}</p>
        <p><strong>Temporary Password:</strong> <code>{temp_password}</code></p>
        <p>Please change your password immediately after logging in.</p>
        <p><a href="{settings.APP_URL}/login">Login Now</a></p>
      </body>
    </html>
    """


def password_reset_email_html(reset_token: str) -> str:
    reset_link = f"{settings.APP_URL}/reset-password?token={reset_token}"
    return f"""
    <html>
      <body style="font-family: sans-serif; color: #333; max-width: 600px; margin: 0 auto;">
        <h1>Password Reset Request</h1>
        <p>We received a request to reset your password for your Departmental Portal account.</p>
        <p>This link will expire in <strong>{settings.PASSWORD_RESET_EXPIRE_HOURS} hour(s)</strong>.</p>
        <p><a href="{reset_link}">Reset Password</a></p>
        <p>{reset_link}</p>
        <p>If you didn't request this password reset, please ignore this email.</p>
      </body>
    </html>
    """
