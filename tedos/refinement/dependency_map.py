"""
Answer dependency map.

Maps intake questionnaire answers to the content sections generated from
them. When an answer changes, every section listed for it is stale and has to
be regenerated.

The map is a direct lookup, not a graph: some answer keys share a name with a
content section (idealClient, message, story) but a section is never fed back
in as an answer key. One hop only.

Answer fields by intake question:
- Q1: businessType, industry
- Q2: idealClient
- Q3: message
- Q4: coreProblem
- Q5: outcomes
- Q6: uniqueAdvantage
- Q7: story
- Q8: testimonials
- Q9: offerProgram
- Q10: deliverables
- Q11: pricing
- Q12: assets
- Q13: revenue
- Q14: brandVoice
- Q15: brandColors
- Q16: callToAction
- Q17: platforms, platformsOther
- Q18: goal90Days
- Q19: businessStage
- Q20: helpNeeded
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from tedos.core.logging import get_logger, log_with_context
from tedos.core.schemas_refinement import RegenerationPlan, SectionMetadata

logger = get_logger(__name__)


# Content sections in generation order
CONTENT_SECTIONS: dict[str, dict[str, Any]] = {
    "idealClient": {"name": "Ideal Client Profile", "key": 1},
    "message": {"name": "Million-Dollar Message", "key": 2},
    "story": {"name": "Signature Story", "key": 3},
    "offer": {"name": "8-Week Program", "key": 4},
    "salesScripts": {"name": "Sales Scripts", "key": 5},
    "leadMagnet": {"name": "Lead Magnet", "key": 6},
    "vsl": {"name": "VSL Script", "key": 7},
    "emails": {"name": "Email Sequence", "key": 8},
    "facebookAds": {"name": "Facebook Ads", "key": 9},
    "funnelCopy": {"name": "Funnel Copy", "key": 10},
    "program12Month": {"name": "12-Month Program", "key": 11},
    "youtubeShow": {"name": "YouTube Show", "key": 12},
    "contentPillars": {"name": "Content Pillars", "key": 13},
    "bio": {"name": "Professional Bio", "key": 14},
    "appointmentReminders": {"name": "Appointment Reminders", "key": 15},
}

_CORE_IDENTITY_SECTIONS = [
    "idealClient", "message", "story", "offer", "salesScripts",
    "leadMagnet", "vsl", "emails", "facebookAds", "funnelCopy",
    "program12Month", "youtubeShow", "contentPillars", "bio",
]

ANSWER_DEPENDENCIES: dict[str, list[str]] = {
    # Core identity answers affect almost everything
    "businessType": list(_CORE_IDENTITY_SECTIONS),
    "industry": list(_CORE_IDENTITY_SECTIONS),
    # Targeting-based content
    "idealClient": [
        "idealClient", "message", "offer", "salesScripts",
        "leadMagnet", "vsl", "emails", "facebookAds", "funnelCopy",
    ],
    "message": [
        "message", "leadMagnet", "vsl", "facebookAds", "funnelCopy",
        "emails", "youtubeShow", "contentPillars",
    ],
    # Solution positioning
    "coreProblem": ["idealClient", "leadMagnet", "vsl", "emails", "salesScripts", "funnelCopy"],
    "outcomes": ["offer", "leadMagnet", "vsl", "funnelCopy", "salesScripts", "emails"],
    "uniqueAdvantage": ["offer", "salesScripts", "leadMagnet", "vsl", "funnelCopy", "bio"],
    # Narrative content
    "story": ["story", "vsl", "funnelCopy", "bio"],
    # Social proof
    "testimonials": ["salesScripts", "funnelCopy", "emails"],
    # Offer details
    "offerProgram": [
        "offer", "program12Month", "salesScripts", "leadMagnet", "vsl", "funnelCopy", "emails",
    ],
    "deliverables": ["offer", "program12Month", "salesScripts", "funnelCopy"],
    "pricing": ["offer", "salesScripts", "funnelCopy"],
    # Voice reaches every written section
    "brandVoice": [*_CORE_IDENTITY_SECTIONS, "appointmentReminders"],
    # Visual styling suggestions only
    "brandColors": ["funnelCopy"],
    "callToAction": [
        "leadMagnet", "vsl", "funnelCopy", "emails", "facebookAds", "appointmentReminders",
    ],
    # Content format
    "platforms": ["facebookAds", "youtubeShow", "contentPillars"],
    "platformsOther": ["contentPillars"],
    # Business context
    "goal90Days": ["offer", "leadMagnet", "funnelCopy", "emails"],
    "businessStage": ["offer", "salesScripts", "leadMagnet"],
    # Informational only
    "helpNeeded": [],
    "assets": [],
    "revenue": [],
}


def get_affected_sections(
    changed_answer_keys: Iterable[str],
    dependencies: Mapping[str, Iterable[str]] | None = None,
) -> list[str]:
    """
    Get all content sections that need regeneration after the given answers changed.

    Args:
        changed_answer_keys: Answer field names that changed. Unknown keys are
            allowed and contribute nothing.
        dependencies: Optional map to resolve against (defaults to
            ANSWER_DEPENDENCIES)

    Returns:
        Unique section keys, in the order they were first reached
    """
    deps = ANSWER_DEPENDENCIES if dependencies is None else dependencies

    affected: dict[str, None] = {}
    for answer_key in changed_answer_keys:
        for section in deps.get(answer_key, ()):
            affected.setdefault(section, None)

    return list(affected)


def get_section_metadata(section_key: str) -> SectionMetadata | None:
    """Get display metadata for a section, or None if the section is unknown."""
    meta = CONTENT_SECTIONS.get(section_key)
    if meta is None:
        return None
    return SectionMetadata(**meta)


def get_all_section_keys() -> list[str]:
    """All section keys in generation order (the "regenerate everything" fallback)."""
    return list(CONTENT_SECTIONS)


def get_changed_answer_keys(
    original_answers: Mapping[str, Any],
    new_answers: Mapping[str, Any],
) -> list[str]:
    """
    Determine which answers changed between two snapshots.

    Only keys present in new_answers are compared, so an answer that was
    removed is never reported. A key missing from original_answers counts as
    changed. Values are compared with deep equality: dict key order is
    ignored, list order is not, and 997 equals 997.0.

    Args:
        original_answers: Previously saved answers
        new_answers: Submitted answers

    Returns:
        Changed answer keys in new_answers order

    Raises:
        TypeError: If either snapshot is not a mapping
    """
    if not isinstance(original_answers, Mapping) or not isinstance(new_answers, Mapping):
        raise TypeError("Answer snapshots must be mappings")

    changed = []
    for key, new_value in new_answers.items():
        if key not in original_answers or original_answers[key] != new_value:
            changed.append(key)

    return changed


def plan_regeneration(
    original_answers: Mapping[str, Any],
    new_answers: Mapping[str, Any],
) -> RegenerationPlan:
    """
    Diff two answer snapshots and resolve the sections to regenerate.

    Args:
        original_answers: Previously saved answers
        new_answers: Submitted answers

    Returns:
        RegenerationPlan with changed keys and affected sections
    """
    changed = get_changed_answer_keys(original_answers, new_answers)
    affected = get_affected_sections(changed)

    log_with_context(
        logger,
        logging.INFO,
        "Resolved regeneration plan",
        changed_count=len(changed),
        affected_count=len(affected),
        changed=",".join(changed) or "-",
    )

    return RegenerationPlan(changed_answer_keys=changed, affected_sections=affected)
