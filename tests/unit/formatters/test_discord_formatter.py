"""Unit tests for the Discord formatter."""

from app.application.dtos.lead import TaxDocument
from app.application.formatters.discord_formatter import GOLD, GREEN, format_discord


def _fields(payload) -> dict[str, str]:
    """Embed field values keyed by field name without its emoji."""
    fields = payload.embeds[0]["fields"]
    return {field["name"].split(" ", 1)[1]: field["value"] for field in fields}


def test_simple_advance_is_gold_without_tax_fields(simple_advance_lead):
    """Test the Jane Doe advance request renders as a gold, condensed embed."""
    payload = format_discord(simple_advance_lead)

    embed = payload.embeds[0]
    fields = _fields(payload)
    assert embed["color"] == GOLD
    assert embed["title"] == "💰 TAX ADVANCE REQUEST"
    assert payload.content == "@here 💰 **TAX ADVANCE REQUEST!**"
    assert "Filing Status" not in fields
    assert "License/ID #" not in fields
    assert fields["SSN"] == "Not provided"
    assert fields["Location"] == "30301"


def test_full_intake_masks_ssn(full_intake_lead):
    """Test the SSN field shows only the last four digits."""
    payload = format_discord(full_intake_lead)

    fields = _fields(payload)
    assert fields["SSN"] == "***-**-6789"
    assert "123456789" not in str(payload.to_json())
    assert payload.embeds[0]["color"] == GREEN
    assert fields["Filing Status"] == "Head of Household"
    assert fields["Dependents"] == "Yes (2)"
    assert fields["Assigned To"] == "Ray Hamilton (ray)"


def test_phone_and_email_are_links(full_intake_lead):
    """Test phone renders as a tel: link and email as a mailto: link."""
    fields = _fields(format_discord(full_intake_lead))
    assert fields["Phone"] == "[5551234567](tel:5551234567)"
    assert fields["Email"] == "[jane.doe@example.com](mailto:jane.doe@example.com)"


def test_formatted_phone_link_uses_digits(make_lead):
    """Test tel: links strip formatting characters."""
    fields = _fields(format_discord(make_lead(phone="(555) 123-4567")))
    assert fields["Phone"] == "[(555) 123-4567](tel:5551234567)"


def test_id_image_is_embedded(full_intake_lead):
    """Test the uploaded ID is shown as the embed image."""
    embed = format_discord(full_intake_lead).embeds[0]
    assert embed["image"] == {"url": "https://leads.example.com/uploads/lead-1.jpg"}


def test_no_image_without_id_document(make_lead):
    """Test no image key when no ID was uploaded."""
    assert "image" not in format_discord(make_lead()).embeds[0]


def test_tax_documents_listed_as_links(make_lead):
    """Test tax documents appear as markdown links."""
    lead = make_lead(
        ssn="123456789",
        tax_documents=(TaxDocument(name="w2.pdf", url="https://x/uploads/a.pdf"),),
    )
    fields = _fields(format_discord(lead))
    assert fields["Tax Documents"] == "[w2.pdf](https://x/uploads/a.pdf)"


def test_full_intake_wanting_advance_is_gold(make_lead):
    """Test advance color also applies to full intakes asking for an advance."""
    lead = make_lead(wants_advance=True, dob="1990-01-01")
    payload = format_discord(lead)
    assert payload.embeds[0]["color"] == GOLD
    assert "Filing Status" in _fields(payload)


def test_compact_style_has_no_embeds(full_intake_lead):
    """Test compact style renders a masked plain-text summary."""
    payload = format_discord(full_intake_lead, style="compact")

    assert payload.embeds == ()
    assert payload.to_json()["embeds"] == []
    assert "**SSN:** ***-**-6789" in payload.content
    assert "123456789" not in payload.content
    assert "[5551234567](tel:5551234567)" in payload.content


def test_compact_simple_omits_intake_fields(simple_advance_lead):
    """Test compact style leaves out intake-only fields for advance requests."""
    payload = format_discord(simple_advance_lead, style="compact")
    assert "SSN" not in payload.content
    assert "Filing Status" not in payload.content


def test_missing_optional_fields_use_fallbacks(make_lead):
    """Test formatting never fails on empty optional fields."""
    lead = make_lead(phone="", email="", dob="1990-01-01")
    fields = _fields(format_discord(lead))
    assert fields["Phone"] == "Not provided"
    assert fields["Email"] == "Not provided"
    assert fields["Employment"] == "Not specified"
