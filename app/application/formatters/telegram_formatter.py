"""Telegram notification formatter."""

import re
from datetime import datetime
from typing import Optional

from app.application.dtos.lead import LeadRecord
from app.application.formatters.common import (
    NOT_PROVIDED,
    NOT_SPECIFIED,
    assigned_to,
    eastern_time,
    filing_status_display,
    full_address,
    full_name,
    mask_ssn,
    or_fallback,
    yes_no,
)

# Telegram MarkdownV2 reserved characters
_MARKDOWN_SPECIAL = re.compile(r"([_*\[\]()~`>#+\-=|{}.!\\])")

DIVIDER = "━━━━━━━━━━━━━━━━━━━━━━"


def escape_markdown(text: Optional[str]) -> str:
    """
    Escape every Telegram Markdown special character in user-supplied text.

    Args:
        text: Raw text (None is rendered as an empty string)

    Returns:
        Text safe to interpolate into a Markdown message
    """
    if not text:
        return ""
    return _MARKDOWN_SPECIAL.sub(r"\\\1", str(text))


def _submitted(moment: datetime) -> str:
    return escape_markdown(eastern_time(moment).strftime("%m/%d/%y, %I:%M %p"))


def format_telegram(lead: LeadRecord, now: Optional[datetime] = None) -> str:
    """
    Render a lead as a Telegram Markdown message.

    Simple advance requests carry only personal and contact details; full
    intakes add the tax and ID sections. SSN is shown as the last four digits.

    Args:
        lead: Lead record to render
        now: Submission time shown in the message (defaults to lead.submitted_at)

    Returns:
        Message text
    """
    name = escape_markdown(full_name(lead))
    dob = escape_markdown(or_fallback(lead.dob))
    phone = escape_markdown(lead.phone)
    email = escape_markdown(lead.email)
    address = escape_markdown(full_address(lead) or lead.zip_code) or NOT_PROVIDED
    preparer = escape_markdown(assigned_to(lead))
    submitted = _submitted(now or lead.submitted_at)

    masked = mask_ssn(lead.ssn)
    ssn = escape_markdown(masked) if masked else NOT_PROVIDED

    if lead.form_variant.is_simple:
        lines = [
            "💰 *TAX ADVANCE REQUEST*",
            DIVIDER,
            "",
            "👤 *PERSONAL INFORMATION*",
            f"Name: {name}",
            f"DOB: {dob}",
            f"SSN: {ssn}",
            "",
            "📞 *CONTACT*",
            f"Phone: {phone}",
            f"Email: {email}",
            f"Address: {address}",
            "",
            f"👨‍💼 *Assigned To:* {preparer}",
            "",
            f"🕐 *Submitted:* {submitted} EST",
            DIVIDER,
        ]
        return "\n".join(lines)

    if yes_no(lead.has_irs_pin) == "Yes" and lead.irs_pin:
        irs_pin = escape_markdown(lead.irs_pin)
    else:
        irs_pin = "No"
    dependents = escape_markdown(lead.num_dependents) if yes_no(lead.has_dependents) == "Yes" else "0"

    lines = [
        "📋 *NEW TAX INTAKE FORM*",
        DIVIDER,
        "",
        "👤 *PERSONAL INFORMATION*",
        f"Name: {name}",
        f"DOB: {dob}",
        f"SSN: {ssn}",
        "",
        "📞 *CONTACT*",
        f"Phone: {phone}",
        f"Email: {email}",
        f"Address: {address}",
        "",
        "📋 *TAX INFORMATION*",
        f"Claimed as Dependent: {yes_no(lead.claimed_as_dependent)}",
        f"Filing Status: {escape_markdown(filing_status_display(lead))}",
        f"Employment: {escape_markdown(or_fallback(lead.employment_type, NOT_SPECIFIED))}",
        f"Occupation: {escape_markdown(or_fallback(lead.occupation, NOT_SPECIFIED))}",
        f"In College: {yes_no(lead.in_college)}",
        f"Dependents: {dependents or '0'}",
        f"Dependents under 24/disabled: {yes_no(lead.dependents_under_24)}",
        f"Dependents in College: {yes_no(lead.dependents_in_college)}",
        f"Child Care: {yes_no(lead.child_care)}",
        f"Mortgage: {yes_no(lead.has_mortgage)}",
        f"Denied EITC: {yes_no(lead.denied_eitc)}",
        f"IRS PIN: {irs_pin}",
        f"Cash Advance: {'Yes' if lead.wants_advance else 'No'}",
        "",
        "🪪 *ID INFORMATION*",
        f"License/ID \\#: {escape_markdown(or_fallback(lead.license_number))}",
        f"Expiration: {escape_markdown(or_fallback(lead.license_expiration))}",
    ]
    if lead.id_document_url:
        lines.append(f"Download ID: {escape_markdown(lead.id_document_url)}")
    lines += [
        "",
        f"👨‍💼 *Assigned To:* {preparer}",
        "",
        f"🕐 *Submitted:* {submitted} EST",
    ]
    if lead.tax_documents:
        lines += ["", f"📄 *Tax Docs:* {len(lead.tax_documents)} file\\(s\\) uploaded"]
    lines.append(DIVIDER)
    return "\n".join(lines)
