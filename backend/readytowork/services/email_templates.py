"""
Branded email templates for Ready to Work.

All templates share one wrapper with the brand colors:
- Primary: #4644b8 (purple)
- Text: #16252d (dark)
- Accent: #ecf2ff (light purple)

Every interpolated value is HTML-escaped.
"""

import logging
from datetime import datetime
from html import escape
from typing import Optional, Union
from urllib.parse import urlencode

from readytowork.core.config import settings

logger = logging.getLogger(__name__)

LOGO_URL = "https://readytowork.sa/assets/03bdd9d6f0fa9e8b68944b910c59a8474fc37999.svg"

BASE_STYLES = """
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: 'Inter', -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Arial, sans-serif;
      line-height: 1.6; color: #16252d; background-color: #f5f5f5; padding: 20px;
    }
    .email-container {
      max-width: 600px; margin: 0 auto; background-color: #ffffff;
      border-radius: 12px; overflow: hidden; box-shadow: 0 4px 6px rgba(0, 0, 0, 0.1);
    }
    .email-header {
      background: linear-gradient(135deg, #4644b8 0%, #3a3aa0 100%);
      padding: 32px 24px; text-align: center;
    }
    .logo { max-width: 200px; height: auto; margin-bottom: 16px; }
    .email-body { padding: 40px 32px; }
    .email-title { font-size: 24px; font-weight: 700; color: #16252d; margin-bottom: 16px; line-height: 1.3; }
    .email-content { font-size: 16px; color: #16252d; margin-bottom: 24px; line-height: 1.6; }
    .button {
      display: inline-block; padding: 14px 32px; background-color: #4644b8;
      color: #ffffff !important; text-decoration: none; border-radius: 8px;
      font-weight: 600; font-size: 16px; margin: 24px 0; text-align: center;
    }
    .button-secondary { background-color: #ecf2ff; color: #4644b8 !important; }
    .link { color: #4644b8; text-decoration: underline; word-break: break-all; }
    .divider { height: 1px; background-color: #e5e5e5; margin: 32px 0; }
    .footer {
      background-color: #f9f9f9; padding: 24px 32px; text-align: center;
      font-size: 14px; color: #757575; border-top: 1px solid #e5e5e5;
    }
    .footer-links { margin-top: 16px; }
    .footer-links a { color: #4644b8; text-decoration: none; margin: 0 8px; }
    .alert { background-color: #fff3cd; border-left: 4px solid #ffc107; padding: 16px; border-radius: 4px; margin: 24px 0; }
    .alert-info { background-color: #e7f3ff; border-left-color: #4644b8; }
    .alert-success { background-color: #d4edda; border-left-color: #28a745; }
    @media only screen and (max-width: 600px) {
      .email-body { padding: 24px 20px; }
      .email-title { font-size: 20px; }
      .button { display: block; width: 100%; }
    }
"""


def get_app_url() -> str:
    """Base URL for links in emails."""
    url = settings.app_url
    if settings.is_production and "localhost" in url:
        logger.warning(
            "Email templates are using a localhost URL in production. "
            "Set APP_URL or NEXT_PUBLIC_APP_URL."
        )
    return url


def base_email_template(content: str, title: str) -> str:
    """Wrap rendered body content in the branded layout."""
    app_url = get_app_url()
    locale = settings.DEFAULT_LOCALE
    support_email = escape(settings.SUPPORT_EMAIL)
    year = datetime.now().year

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <title>{escape(title)}</title>
  <style>{BASE_STYLES}</style>
</head>
<body>
  <div class="email-container">
    <div class="email-header">
      <img src="{LOGO_URL}" alt="Ready to Work" class="logo" />
    </div>
    <div class="email-body">
      {content}
    </div>
    <div class="footer">
      <p>&copy; {year} Ready to Work. All rights reserved.</p>
      <div class="footer-links">
        <a href="{app_url}/{locale}/about">About Us</a> |
        <a href="{app_url}/{locale}/contact">Contact</a> |
        <a href="{app_url}/{locale}/privacy-policy">Privacy Policy</a>
      </div>
      <p style="margin-top: 12px; font-size: 12px;">
        If you have any questions, contact us at <a href="mailto:{support_email}" style="color: #4644b8;">{support_email}</a>
      </p>
    </div>
  </div>
</body>
</html>
"""


def verification_url(email: str, token: str, user_type: str = "candidate") -> str:
    query = urlencode({"token": token, "email": email, "type": user_type})
    return f"{get_app_url()}/api/auth/verify-email?{query}"


def reset_password_url(email: str, token: str, user_type: str = "candidate") -> str:
    query = urlencode({"token": token, "email": email, "type": user_type})
    return f"{get_app_url()}/{settings.DEFAULT_LOCALE}/reset-password?{query}"


def dashboard_url(user_type: str = "candidate") -> str:
    path = "employer/dashboard" if user_type == "employer" else "dashboard"
    return f"{get_app_url()}/{settings.DEFAULT_LOCALE}/{path}"


def verification_email_template(email: str, token: str, user_type: str = "candidate") -> str:
    """Email verification for new registrations and email changes."""
    url = escape(verification_url(email, token, user_type))
    label = "employer" if user_type == "employer" else "candidate"

    content = f"""
    <h1 class="email-title">Verify Your Email Address</h1>
    <p class="email-content">
      Welcome to Ready to Work! We're excited to have you join our platform.
    </p>
    <p class="email-content">
      To complete your {label} account registration, please verify your email address by clicking the button below:
    </p>
    <div style="text-align: center;">
      <a href="{url}" class="button">Verify Email Address</a>
    </div>
    <div class="divider"></div>
    <p class="email-content" style="font-size: 14px; color: #757575;">
      Or copy and paste this link into your browser:
    </p>
    <p class="email-content" style="font-size: 14px;">
      <a href="{url}" class="link">{url}</a>
    </p>
    <div class="alert alert-info">
      <strong>This verification link will expire in {settings.EMAIL_VERIFICATION_TTL_HOURS} hours.</strong>
      <p style="margin-top: 8px; font-size: 14px;">If you didn't create an account, you can safely ignore this email.</p>
    </div>
    """

    return base_email_template(content, "Verify Your Email - Ready to Work")


def welcome_email_template(email: str, user_type: str = "candidate") -> str:
    """Sent once the email address has been verified."""
    url = escape(dashboard_url(user_type))
    label = "employer" if user_type == "employer" else "candidate"
    if user_type == "employer":
        next_steps = (
            "<li>Browse and search qualified candidates</li>"
            "<li>Schedule interviews with top talent</li>"
            "<li>Access candidate contact details</li>"
        )
    else:
        next_steps = (
            "<li>Complete your profile to increase visibility</li>"
            "<li>Browse available job opportunities</li>"
            "<li>Get matched with employers</li>"
        )

    content = f"""
    <h1 class="email-title">Welcome to Ready to Work!</h1>
    <p class="email-content">Hi there,</p>
    <p class="email-content">
      Your email has been successfully verified! Your {label} account is now fully activated and ready to use.
    </p>
    <div class="alert alert-success">
      <strong>Account Verified</strong>
      <p style="margin-top: 8px; font-size: 14px;">You can now access all features of your account.</p>
    </div>
    <div style="text-align: center;">
      <a href="{url}" class="button">Go to Dashboard</a>
    </div>
    <div class="divider"></div>
    <p class="email-content"><strong>What's next?</strong></p>
    <ul style="color: #16252d; line-height: 1.8; margin-left: 20px;">
      {next_steps}
    </ul>
    <p class="email-content">If you have any questions, our support team is here to help!</p>
    """

    return base_email_template(content, "Welcome to Ready to Work")


def employer_welcome_email_template(company_name: str, responsible_person: str) -> str:
    app_url = get_app_url()
    locale = settings.DEFAULT_LOCALE

    content = f"""
    <h1 class="email-title">Welcome to Ready to Work, {escape(responsible_person)}!</h1>
    <p class="email-content">
      Thank you for registering <strong>{escape(company_name)}</strong> on Ready to Work.
    </p>
    <p class="email-content">
      Your employer account is now active and ready to help you find the best talent for your team.
    </p>
    <div class="alert alert-success">
      <strong>Account Ready</strong>
      <p style="margin-top: 8px; font-size: 14px;">Start exploring our pool of qualified candidates today.</p>
    </div>
    <div style="text-align: center;">
      <a href="{app_url}/{locale}/employer/dashboard" class="button">Go to Employer Dashboard</a>
    </div>
    <div class="divider"></div>
    <p class="email-content"><strong>What you can do:</strong></p>
    <ul style="color: #16252d; line-height: 1.8; margin-left: 20px;">
      <li>Browse thousands of qualified candidates</li>
      <li>Use advanced filters to find the perfect match</li>
      <li>Schedule interviews directly through the platform</li>
      <li>Access candidate contact details after interviews</li>
      <li>Manage your subscription and credits</li>
    </ul>
    <p class="email-content">
      Need help getting started? Check out our <a href="{app_url}/{locale}/pricing" class="link">pricing plans</a> or contact our support team.
    </p>
    """

    return base_email_template(content, "Welcome to Ready to Work")


def password_reset_email_template(email: str, token: str, user_type: str = "candidate") -> str:
    url = escape(reset_password_url(email, token, user_type))

    content = f"""
    <h1 class="email-title">Reset Your Password</h1>
    <p class="email-content">
      We received a request to reset your password for your Ready to Work account.
    </p>
    <p class="email-content">Click the button below to create a new password:</p>
    <div style="text-align: center;">
      <a href="{url}" class="button">Reset Password</a>
    </div>
    <div class="divider"></div>
    <p class="email-content" style="font-size: 14px; color: #757575;">
      Or copy and paste this link into your browser:
    </p>
    <p class="email-content" style="font-size: 14px;">
      <a href="{url}" class="link">{url}</a>
    </p>
    <div class="alert">
      <strong>This link will expire in {settings.PASSWORD_RESET_TTL_MINUTES} minutes.</strong>
      <p style="margin-top: 8px; font-size: 14px;">
        If you didn't request a password reset, you can safely ignore this email. Your password won't be changed until you create a new one.
      </p>
    </div>
    """

    return base_email_template(content, "Reset Your Password - Ready to Work")


def password_changed_email_template() -> str:
    app_url = get_app_url()

    content = f"""
    <h1 class="email-title">Password Successfully Changed</h1>
    <p class="email-content">This is a confirmation that your password was successfully changed.</p>
    <div class="alert alert-success">
      <strong>Password Updated</strong>
      <p style="margin-top: 8px; font-size: 14px;">Your account is now secured with your new password.</p>
    </div>
    <div class="alert">
      <strong>Security Notice</strong>
      <p style="margin-top: 8px; font-size: 14px;">
        <strong>Didn't make this change?</strong><br/>
        If you didn't change your password, please contact our support team immediately as your account may be compromised.
      </p>
    </div>
    <p class="email-content">For security reasons, you may need to sign in again on your devices.</p>
    <div style="text-align: center; margin-top: 32px;">
      <a href="{app_url}/{settings.DEFAULT_LOCALE}/login" class="button button-secondary">Sign In</a>
    </div>
    """

    return base_email_template(content, "Password Changed - Ready to Work")


def interview_invitation_email_template(
    candidate_first_name: str,
    employer_name: str,
    scheduled_at: Union[datetime, str],
    job_position: Optional[str] = None,
    job_location: Optional[str] = None,
    salary: Optional[str] = None,
    accommodation_included: Optional[bool] = None,
    transportation: Optional[bool] = None,
) -> str:
    """Sent to a candidate when an interview request is approved."""
    if isinstance(scheduled_at, str):
        scheduled_at = datetime.fromisoformat(scheduled_at.replace("Z", "+00:00"))

    formatted_date = f"{scheduled_at:%A}, {scheduled_at:%B} {scheduled_at.day}, {scheduled_at.year}"
    formatted_time = scheduled_at.strftime("%I:%M %p")

    details: list[str] = []
    if job_position:
        details.append(f"<strong>Position:</strong> {escape(job_position)}")
    if job_location:
        details.append(f"<strong>Location:</strong> {escape(job_location)}")
    if salary:
        details.append(f"<strong>Salary:</strong> {escape(salary)}")
    if accommodation_included is not None:
        details.append(
            f"<strong>Accommodation:</strong> {'Included' if accommodation_included else 'Not included'}"
        )
    if transportation is not None:
        details.append(f"<strong>Transportation:</strong> {'Provided' if transportation else 'Not provided'}")

    details_html = ""
    if details:
        details_html = (
            '<div class="alert alert-info" style="margin: 20px 0;">'
            f'<p style="margin: 0; font-size: 14px;">{" &middot; ".join(details)}</p></div>'
        )

    interviews_url = f"{get_app_url()}/{settings.DEFAULT_LOCALE}/dashboard/interviews"

    content = f"""
    <h1 class="email-title">New Interview Invitation</h1>
    <p class="email-content">Hi {escape(candidate_first_name)},</p>
    <p class="email-content">
      <strong>{escape(employer_name)}</strong> has invited you to an interview via Ready to Work.
    </p>
    <div class="alert alert-success">
      <strong>{formatted_date}</strong><br/>
      <strong>{formatted_time}</strong>
    </div>
    {details_html}
    <p class="email-content">
      Log in to your dashboard to view full details, accept or decline, and manage your interviews.
    </p>
    <div style="text-align: center;">
      <a href="{interviews_url}" class="button">View interview in dashboard</a>
    </div>
    <div class="divider"></div>
    <p class="email-content" style="font-size: 14px; color: #757575;">
      You're also receiving an in-app notification. If you have any questions, contact our support team.
    </p>
    """

    return base_email_template(content, "New Interview Invitation - Ready to Work")
