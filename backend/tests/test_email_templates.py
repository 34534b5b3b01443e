from datetime import datetime

from readytowork.core.config import settings
from readytowork.services import email_templates


def test_verification_url_points_at_the_api(monkeypatch):
    monkeypatch.setattr(settings, "APP_URL", "https://readytowork.sa/")

    url = email_templates.verification_url("a+b@example.com", "abc123", "employer")

    assert url == (
        "https://readytowork.sa/api/auth/verify-email"
        "?token=abc123&email=a%2Bb%40example.com&type=employer"
    )


def test_reset_url_is_localized(monkeypatch):
    monkeypatch.setattr(settings, "APP_URL", "https://readytowork.sa")
    monkeypatch.setattr(settings, "DEFAULT_LOCALE", "ar")

    url = email_templates.reset_password_url("ahmed@example.com", "tok", "candidate")

    assert url.startswith("https://readytowork.sa/ar/reset-password?")
    assert "token=tok" in url
    assert "type=candidate" in url


def test_verification_email_contains_link_and_expiry():
    html = email_templates.verification_email_template("ahmed@example.com", "deadbeef", "candidate")

    assert "/api/auth/verify-email?token=deadbeef&amp;email=ahmed%40example.com&amp;type=candidate" in html
    assert "expire in 24 hours" in html
    assert "candidate account" in html


def test_interpolated_values_are_escaped():
    html = email_templates.employer_welcome_email_template("<script>alert(1)</script>", "Tom & Jerry")

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "Tom &amp; Jerry" in html


def test_welcome_email_links_to_the_right_dashboard():
    employer_html = email_templates.welcome_email_template("hr@example.com", "employer")
    candidate_html = email_templates.welcome_email_template("ahmed@example.com", "candidate")

    assert "/employer/dashboard" in employer_html
    assert "/employer/dashboard" not in candidate_html
    assert "/dashboard" in candidate_html


def test_password_templates_render_in_the_shared_layout():
    reset_html = email_templates.password_reset_email_template("ahmed@example.com", "tok", "employer")
    changed_html = email_templates.password_changed_email_template()

    for html in (reset_html, changed_html):
        assert html.startswith("<!DOCTYPE html>")
        assert settings.SUPPORT_EMAIL in html
    assert "expire in 60 minutes" in reset_html
    assert "Password Successfully Changed" in changed_html


def test_interview_invitation_formats_schedule_and_details():
    html = email_templates.interview_invitation_email_template(
        candidate_first_name="Ahmed",
        employer_name="Gulf <Builders>",
        scheduled_at=datetime(2025, 3, 4, 14, 30),
        job_position="Electrician",
        salary="SAR 3,000",
        accommodation_included=True,
        transportation=False,
    )

    assert "Tuesday, March 4, 2025" in html
    assert "02:30 PM" in html
    assert "Gulf &lt;Builders&gt;" in html
    assert "<strong>Accommodation:</strong> Included" in html
    assert "<strong>Transportation:</strong> Not provided" in html
    assert "Location:" not in html


def test_interview_invitation_accepts_iso_strings():
    html = email_templates.interview_invitation_email_template("Ahmed", "Gulf Builders", "2025-03-04T14:30:00Z")

    assert "Tuesday, March 4, 2025" in html
    assert "alert alert-info" not in html
