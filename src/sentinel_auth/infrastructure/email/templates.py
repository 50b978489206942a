"""Bodies for outbound account emails.

Each template is a ``RenderedEmail`` factory; the HTML variant wraps the
same paragraphs in a single shared layout.
"""

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


_LAYOUT = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"></head>
<body style="font-family: sans-serif; background: #f9fafb; padding: 20px;">
  <div style="max-width: 600px; margin: 0 auto; background: #fff; padding: 32px;">
    <h2 style="margin-top: 0;">{heading}</h2>
    {paragraphs}
    <p style="margin: 28px 0; text-align: center;">
      <a href="{link}" style="padding: 12px 24px; background: #2563eb; color: #fff;
         text-decoration: none; border-radius: 6px;">{button}</a>
    </p>
    <p style="color: #6b7280; font-size: 13px; word-break: break-all;">{link}</p>
    <p style="color: #9ca3af; font-size: 12px;">{footer}</p>
  </div>
</body>
</html>
"""


def _render(
    subject: str,
    heading: str,
    paragraphs: list[str],
    button: str,
    link: str,
    footer: str,
    app_name: str,
) -> RenderedEmail:
    text = "\n\n".join(["Hello,", *paragraphs, link, footer, f"-- {app_name}"]) + "\n"
    html = _LAYOUT.format(
        heading=escape(heading),
        paragraphs="\n    ".join(f"<p>{escape(p)}</p>" for p in paragraphs),
        button=escape(button),
        link=escape(link, quote=True),
        footer=escape(footer),
    )
    return RenderedEmail(subject=subject, text=text, html=html)


def verification_email(app_name: str, link: str) -> RenderedEmail:
    return _render(
        subject=f"Verify your email address - {app_name}",
        heading="Verify your email address",
        paragraphs=[
            f"Thanks for registering with {app_name}.",
            "Confirm your email address by opening the link below.",
        ],
        button="Verify Email",
        link=link,
        footer="If you didn't create an account, you can safely ignore this email.",
        app_name=app_name,
    )


def password_reset_email(app_name: str, link: str, expiry_hours: int) -> RenderedEmail:
    return _render(
        subject=f"Password Reset Request - {app_name}",
        heading="Password Reset Request",
        paragraphs=[
            f"You requested a password reset for your {app_name} account.",
            f"The link below is valid for {expiry_hours} hour(s).",
        ],
        button="Reset Password",
        link=link,
        footer="If you didn't request this, you can safely ignore this email.",
        app_name=app_name,
    )
