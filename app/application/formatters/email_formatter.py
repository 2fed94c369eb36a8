"""Email notification formatter."""

import mimetypes
import os
from datetime import datetime
from typing import Iterable, Optional

from jinja2 import Environment, select_autoescape

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import EmailAttachment, EmailPayload
from app.application.formatters.common import (
    NOT_PROVIDED,
    NOT_SPECIFIED,
    assigned_to,
    dependents_display,
    eastern_time,
    filing_method_display,
    filing_status_display,
    full_address,
    full_name,
    mask_ssn,
    or_fallback,
)

_env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))

_HTML_TEMPLATE = _env.from_string(
    """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 650px; margin: 0 auto; padding: 20px; }
    .header { background: {{ accent }}; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
    .header h1 { margin: 0; font-size: 22px; }
    .content { background: #f9fafb; padding: 24px; border: 1px solid #e5e7eb; }
    .section { margin-bottom: 24px; }
    .section-title { font-weight: bold; color: #1e40af; font-size: 14px; text-transform: uppercase; border-bottom: 2px solid #1e40af; padding-bottom: 6px; margin-bottom: 12px; }
    .label { font-weight: bold; color: #6b7280; font-size: 12px; min-width: 140px; }
    .cta { display: inline-block; background: #1e40af; color: white; padding: 12px 24px; text-decoration: none; border-radius: 6px; }
    .footer { background: #f3f4f6; padding: 15px; text-align: center; font-size: 12px; color: #6b7280; }
  </style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>{{ heading }}</h1>
      <p>Submitted: {{ submitted }} EST</p>
    </div>
    <div class="content">
      {% for section in sections %}
      <div class="section">
        <div class="section-title">{{ section.title }}</div>
        {% for label, value in section.rows %}
        <div class="field"><span class="label">{{ label }}:</span> <span class="value">{{ value }}</span></div>
        {% endfor %}
        {% for link_label, href in section.links %}
        <div class="field"><a href="{{ href }}" target="_blank">{{ link_label }}</a></div>
        {% endfor %}
      </div>
      {% endfor %}
      {% if phone_href %}<a href="tel:{{ phone_href }}" class="cta">📞 Call Client Now</a>{% endif %}
    </div>
    <div class="footer">
      <p>This is an automated notification from the Tax Genius Pro intake form.</p>
    </div>
  </div>
</body>
</html>
"""
)


class _Section:
    def __init__(self, title: str, rows: list, links: Optional[list] = None) -> None:
        self.title = title
        self.rows = rows
        self.links = links or []


def build_subject(lead: LeadRecord) -> str:
    """Subject line, prefixed for advance requests."""
    suffix = f"{full_name(lead)} - {lead.zip_code}"
    if lead.form_variant.is_simple:
        return f"💰 ADVANCE REQUEST: {suffix}"
    if lead.wants_advance:
        return f"💰 ADVANCE: Tax Intake: {suffix}"
    return f"Tax Intake: {suffix}"


def resolve_recipient(lead: LeadRecord, notification_email: Optional[str]) -> Optional[str]:
    """Assigned preparer's email, else the configured notification address."""
    recipient = (lead.preparer.email or "").strip() or (notification_email or "").strip()
    return recipient or None


def build_cc_list(recipient: Optional[str], oversight_emails: Iterable[str]) -> tuple[str, ...]:
    """
    Oversight addresses to copy, without the primary recipient.

    Comparison is case-insensitive and duplicates are dropped.

    Args:
        recipient: Primary recipient address
        oversight_emails: Configured oversight addresses

    Returns:
        CC addresses in configured order
    """
    seen = {recipient.strip().lower()} if recipient else set()
    cc = []
    for address in oversight_emails:
        address = (address or "").strip()
        if not address or address.lower() in seen:
            continue
        seen.add(address.lower())
        cc.append(address)
    return tuple(cc)


def build_attachments(lead: LeadRecord) -> tuple[EmailAttachment, ...]:
    """Attach every uploaded document still present on local disk."""
    attachments = []
    base_name = f"{lead.first_name}_{lead.last_name}"

    if lead.id_document_path and os.path.exists(lead.id_document_path):
        extension = os.path.splitext(lead.id_document_path)[1]
        attachments.append(
            EmailAttachment(
                filename=f"ID_{base_name}{extension}",
                path=lead.id_document_path,
                content_type=mimetypes.guess_type(lead.id_document_path)[0] or "image/jpeg",
            )
        )

    for document in lead.tax_documents:
        if document.path and os.path.exists(document.path):
            attachments.append(
                EmailAttachment(
                    filename=document.name,
                    path=document.path,
                    content_type=mimetypes.guess_type(document.name)[0]
                    or "application/octet-stream",
                )
            )

    return tuple(attachments)


def _sections(lead: LeadRecord) -> list[_Section]:
    advance_status = "YES - Wants Tax Advance" if lead.wants_advance else "No - Standard Filing"
    sections = [
        _Section(
            "Personal Information",
            [
                ("Full Name", or_fallback(full_name(lead))),
                ("Date of Birth", or_fallback(lead.dob)),
                ("SSN", mask_ssn(lead.ssn) or NOT_PROVIDED),
            ],
        ),
        _Section(
            "Contact Information",
            [
                ("Phone", or_fallback(lead.phone)),
                ("Email", or_fallback(lead.email)),
                ("Address", full_address(lead) or NOT_PROVIDED),
            ],
        ),
    ]

    if not lead.form_variant.is_simple:
        sections.append(
            _Section(
                "Tax Information",
                [
                    ("Filing Status", filing_status_display(lead)),
                    ("Employment Type", or_fallback(lead.employment_type, NOT_SPECIFIED)),
                    ("Occupation", or_fallback(lead.occupation, NOT_SPECIFIED)),
                    ("Has Dependents", dependents_display(lead)),
                ],
            )
        )
        id_links = [("View Uploaded ID", lead.id_document_url)] if lead.id_document_url else []
        sections.append(
            _Section(
                "ID / License Information",
                [
                    ("License/ID Number", or_fallback(lead.license_number)),
                    ("Expiration Date", or_fallback(lead.license_expiration)),
                ],
                id_links,
            )
        )
        if lead.tax_documents:
            sections.append(
                _Section(
                    "Uploaded Tax Documents",
                    [],
                    [(f"📄 {doc.name}", doc.url) for doc in lead.tax_documents],
                )
            )

    sections += [
        _Section(
            "Filing Preference",
            [("Method", filing_method_display(lead)), ("Wants Advance", advance_status)],
        ),
        _Section("Assigned To", [("Tax Preparer", assigned_to(lead))]),
    ]
    return sections


def _render_text(lead: LeadRecord, sections: list[_Section], submitted: str) -> str:
    kind = "ADVANCE REQUEST" if lead.wants_advance else "STANDARD FILING"
    lines = [f"TAX INTAKE FORM - {kind}", "=" * 40]
    for section in sections:
        lines += ["", section.title.upper()]
        lines += [f"- {label}: {value}" for label, value in section.rows]
        lines += [f"- {label}: {href}" for label, href in section.links]
    lines += ["", f"Submitted: {submitted} EST"]
    return "\n".join(lines)


def format_email(
    lead: LeadRecord,
    notification_email: Optional[str] = None,
    oversight_emails: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> EmailPayload:
    """
    Render a lead as a notification email.

    Args:
        lead: Lead record to render
        notification_email: Fallback recipient when the preparer has no email
        oversight_emails: Addresses copied on every lead
        now: Submission time shown in the body (defaults to lead.submitted_at)

    Returns:
        EmailPayload (to is None when no recipient can be resolved)
    """
    recipient = resolve_recipient(lead, notification_email)
    sections = _sections(lead)
    attachments = build_attachments(lead)
    submitted = eastern_time(now or lead.submitted_at).strftime("%A, %B %d, %Y at %I:%M %p")

    if lead.form_variant.is_simple:
        heading = "💰 TAX ADVANCE REQUEST"
    elif lead.wants_advance:
        heading = "💰 TAX INTAKE + ADVANCE REQUEST"
    else:
        heading = "📋 NEW TAX INTAKE FORM"

    html = _HTML_TEMPLATE.render(
        heading=heading,
        accent="#f59e0b" if lead.wants_advance else "#1e40af",
        submitted=submitted,
        sections=sections,
        phone_href=lead.phone,
    )

    return EmailPayload(
        to=recipient,
        cc=build_cc_list(recipient, oversight_emails),
        subject=build_subject(lead),
        html=html,
        text=_render_text(lead, sections, submitted),
        attachments=attachments,
    )
