"""
Section-to-section and field-level dependencies inside the content vault.

SECTION_DEPENDENCY_MAP answers "which generated sections read from this
section"; FIELD_DEPENDENCIES narrows that to single fields whose value can be
patched into dependent sections by placeholder replacement instead of a full
regeneration.
"""

import logging
import re
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_refinement import DependencyImpact

logger = get_logger(__name__)


# Source section -> sections that depend on it
SECTION_DEPENDENCY_MAP: dict[str, list[str]] = {
    "idealClient": [
        "message", "story", "offer", "vsl", "funnelCopy", "emails",
        "sms", "facebookAds", "setterScript", "salesScripts", "bio",
    ],
    "message": [
        "story", "offer", "vsl", "funnelCopy", "emails",
        "sms", "facebookAds", "setterScript", "salesScripts", "bio",
    ],
    "story": ["vsl", "funnelCopy", "bio"],
    "offer": ["vsl", "funnelCopy", "salesScripts", "emails"],
    "leadMagnet": ["funnelCopy", "emails", "sms", "facebookAds", "setterScript", "vsl"],
    "vsl": ["funnelCopy"],
    "bio": ["funnelCopy"],
}

FIELD_DEPENDENCIES: dict[str, dict[str, Any]] = {
    "offer.offerName": {
        "used_in": ["setterScript", "salesScripts", "emails", "vsl"],
        "placeholder": re.compile(
            r"\{offer_name\}|your program|the program|our program", re.IGNORECASE
        ),
    },
    "leadMagnet.mainTitle": {
        "used_in": ["facebookAds", "emails", "sms", "funnelCopy"],
        "placeholder": re.compile(
            r"\{lead_magnet\}|free gift|your free guide|the free guide", re.IGNORECASE
        ),
    },
    "message.oneLineMessage": {
        "used_in": ["bio", "funnelCopy"],
        "placeholder": re.compile(r"\{one_liner\}", re.IGNORECASE),
    },
}


def get_downstream_sections(section_id: str) -> list[str]:
    """Sections that read from section_id (direct dependents only)."""
    affected = list(SECTION_DEPENDENCY_MAP.get(section_id, []))
    logger.debug(f"Downstream of {section_id}: {affected or 'none'}")
    return affected


def get_dependent_sections(field_path: str) -> list[str]:
    """Sections that use the value at field_path (e.g. 'offer.offerName')."""
    dependency = FIELD_DEPENDENCIES.get(field_path)
    if not dependency:
        return []
    return list(dependency["used_in"])


def check_dependency_impact(section_id: str, field_id: str) -> DependencyImpact | None:
    """
    Check whether editing a field should warn the user about dependent sections.

    Args:
        section_id: Section being edited
        field_id: Field being edited

    Returns:
        DependencyImpact when other sections use this field, else None
    """
    field_path = f"{section_id}.{field_id}"
    used_in = get_dependent_sections(field_path)
    if not used_in:
        return None

    return DependencyImpact(
        field_path=field_path,
        affected_sections=used_in,
        message=(
            f'Updating "{field_id}" may affect {len(used_in)} other sections: '
            f"{', '.join(used_in)}"
        ),
    )


def _replace_in(value: Any, replacements: list[tuple[re.Pattern, str]]) -> Any:
    if isinstance(value, str):
        for pattern, source_value in replacements:
            value = pattern.sub(lambda _m: source_value, value)
        return value
    if isinstance(value, dict):
        return {k: _replace_in(v, replacements) for k, v in value.items()}
    if isinstance(value, list):
        return [_replace_in(v, replacements) for v in value]
    return value


def resolve_placeholders(content: Any, vault_data: dict[str, Any] | None) -> Any:
    """
    Replace placeholder phrases in section content with real vault values.

    Only string source values are used. The input is not modified; a new
    structure is returned.

    Args:
        content: Section content (dict or list of generated copy)
        vault_data: Full vault, keyed by section id

    Returns:
        Content with placeholders replaced. Non-container content is returned as is.
    """
    if not isinstance(content, (dict, list)):
        return content

    replacements: list[tuple[re.Pattern, str]] = []
    for field_path, config in FIELD_DEPENDENCIES.items():
        section_id, field_id = field_path.split(".", 1)
        section = (vault_data or {}).get(section_id)
        source_value = section.get(field_id) if isinstance(section, dict) else None
        if source_value and isinstance(source_value, str):
            replacements.append((config["placeholder"], source_value))

    if replacements:
        log_with_context(
            logger,
            logging.DEBUG,
            "Resolving placeholders",
            replacement_count=len(replacements),
        )
    return _replace_in(content, replacements)
