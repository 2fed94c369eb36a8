"""Discord notification formatter."""

from datetime import datetime
from typing import Any, Optional

from app.application.dtos.lead import LeadRecord
from app.application.dtos.notification import DiscordPayload
from app.application.formatters.common import (
    NOT_PROVIDED,
    NOT_SPECIFIED,
    assigned_to,
    dependents_display,
    filing_method_display,
    filing_status_display,
    full_address,
    full_name,
    mask_ssn,
    or_fallback,
    phone_digits,
)

GOLD = 16766720
GREEN = 3066993

EMBED_STYLE = "embed"
COMPACT_STYLE = "compact"

FOOTER_TEXT = "Tax Genius Pro Intake Form"


def _field(name: str, value: str, inline: bool = True) -> dict[str, Any]:
    return {"name": name, "value": value, "inline": inline}


def _phone_link(phone: str) -> str:
    digits = phone_digits(phone)
    if not digits:
        return or_fallback(phone)
    return f"[{phone}](tel:{digits})"


def _email_link(email: str) -> str:
    if not email:
        return NOT_PROVIDED
    return f"[{email}](mailto:{email})"


def _advance_status(lead: LeadRecord) -> str:
    return "✅ YES - Wants Advance" if lead.wants_advance else "❌ No - Standard Filing"


def _content(lead: LeadRecord) -> str:
    if lead.wants_advance:
        return "@here 💰 **TAX ADVANCE REQUEST!**"
    return "@here New tax intake form submitted!"


def build_embed(lead: LeadRecord, timestamp: datetime) -> dict[str, Any]:
    """
    Build the rich embed for a lead.

    Advance requests are gold, standard filings green. Simple advance requests
    leave out the tax and ID fields.

    Args:
        lead: Lead record to render
        timestamp: Embed timestamp

    Returns:
        Discord embed object
    """
    fields = [
        _field("👤 Full Name", or_fallback(full_name(lead))),
        _field("📅 Date of Birth", or_fallback(lead.dob)),
        _field("🔐 SSN", mask_ssn(lead.ssn) or NOT_PROVIDED),
        _field("📱 Phone", _phone_link(lead.phone)),
        _field("📧 Email", _email_link(lead.email)),
        _field("📍 Location", full_address(lead) or NOT_PROVIDED),
    ]

    if not lead.form_variant.is_simple:
        fields += [
            _field("📋 Filing Status", filing_status_display(lead)),
            _field("💼 Employment", or_fallback(lead.employment_type, NOT_SPECIFIED)),
            _field("👔 Occupation", or_fallback(lead.occupation, NOT_SPECIFIED)),
            _field("👨‍👩‍👧 Dependents", dependents_display(lead)),
            _field("🪪 License/ID #", or_fallback(lead.license_number)),
            _field("📆 ID Expiration", or_fallback(lead.license_expiration)),
        ]

    fields += [
        _field("🏢 Filing Method", filing_method_display(lead)),
        _field("💵 Tax Advance", _advance_status(lead)),
        _field("👨‍💼 Assigned To", assigned_to(lead), inline=False),
    ]

    if lead.tax_documents and not lead.form_variant.is_simple:
        links = "\n".join(f"[{doc.name}]({doc.url})" for doc in lead.tax_documents)
        fields.append(_field("📎 Tax Documents", links, inline=False))

    embed: dict[str, Any] = {
        "title": "💰 TAX ADVANCE REQUEST" if lead.wants_advance else "📋 New Tax Intake Form",
        "color": GOLD if lead.wants_advance else GREEN,
        "fields": fields,
        "timestamp": timestamp.isoformat(),
        "footer": {"text": FOOTER_TEXT},
    }

    if lead.id_document_url:
        embed["image"] = {"url": lead.id_document_url}

    return embed


def build_compact_summary(lead: LeadRecord) -> str:
    """Condensed plain-text summary used instead of an embed."""
    lines = [
        _content(lead),
        f"**Name:** {or_fallback(full_name(lead))}",
        f"**Phone:** {_phone_link(lead.phone)}",
        f"**Email:** {or_fallback(lead.email)}",
        f"**Zip:** {lead.zip_code}",
    ]
    if not lead.form_variant.is_simple:
        lines += [
            f"**SSN:** {mask_ssn(lead.ssn) or NOT_PROVIDED}",
            f"**Filing Status:** {filing_status_display(lead)}",
            f"**Dependents:** {dependents_display(lead)}",
        ]
    lines += [
        f"**Filing Method:** {filing_method_display(lead)}",
        f"**Assigned To:** {assigned_to(lead)}",
    ]
    if lead.id_document_url:
        lines.append(f"**ID:** {lead.id_document_url}")
    return "\n".join(lines)


def format_discord(
    lead: LeadRecord,
    style: str = EMBED_STYLE,
    timestamp: Optional[datetime] = None,
) -> DiscordPayload:
    """
    Render a lead as a Discord webhook payload.

    Args:
        lead: Lead record to render
        style: 'embed' for a rich embed, 'compact' for a plain-text summary
        timestamp: Embed timestamp (defaults to lead.submitted_at)

    Returns:
        DiscordPayload
    """
    if style == COMPACT_STYLE:
        return DiscordPayload(content=build_compact_summary(lead))

    embed = build_embed(lead, timestamp or lead.submitted_at)
    return DiscordPayload(content=_content(lead), embeds=(embed,))
