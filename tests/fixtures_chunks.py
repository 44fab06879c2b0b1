"""Chunk fixtures shaped like real generation output."""

from tedos.mergers.base import DocumentSchema, FieldKind
from tedos.mergers.emails import EMAIL_CHUNK_SLOTS
from tedos.mergers.sms import SMS_CHUNK_SLOTS


def _value_for(name: str, kind: FieldKind):
    if kind is FieldKind.LIST:
        return [f"{name} item 1", f"{name} item 2"]
    if kind is FieldKind.OBJECT:
        return {"say": f"{name} line", "listenFor": f"{name} cue"}
    return f"Generated copy for {name}."


def full_chunks(schema: DocumentSchema) -> list[dict]:
    """One fully populated chunk per generation call of the schema."""
    chunks: list[dict] = [{} for _ in range(schema.chunk_count)]
    for spec in schema.fields:
        chunks[spec.chunk][spec.name] = _value_for(spec.name, spec.kind)
    return chunks


def make_email(slot: str) -> dict:
    return {
        "subject": f"Subject for {slot}",
        "preview": f"Preview for {slot}",
        "body": f"<p>Body for {slot}</p>",
    }


def email_chunks() -> list[dict]:
    """Four flat email chunks covering all 19 slots."""
    return [{slot: make_email(slot) for slot in owned} for owned in EMAIL_CHUNK_SLOTS]


def sms_chunks() -> list[dict]:
    return [{slot: {"message": f"Text for {slot}"} for slot in owned} for owned in SMS_CHUNK_SLOTS]


def funnel_chunks() -> list[dict]:
    """Four page chunks, each above its minimum field count."""
    return [
        {
            "optinPage": {
                "headline_text": "Get the 5-minute funnel audit",
                "subheadline_text": "Find the leak costing you booked calls",
                "cta_text": "Get Instant Access",
                "footer_company_name": "Acme Coaching",
            }
        },
        {"salesPage": {f"sales_field_{i}": f"Sales copy {i}" for i in range(1, 23)}},
        {"bookingPage": {"headline": "Pick a time", "calendar_embedded_code": ""}},
        {
            "thankYouPage": {
                "headline": "You're booked",
                "subheadline": "Check your inbox",
                "next_step_1": "Add the call to your calendar",
                "next_step_2": "Watch the prep video",
                "footer_text": "Acme Coaching",
            }
        },
    ]
