"""Answer refinement: which content must be regenerated after an intake edit.

Usage:
    from tedos.refinement import get_changed_answer_keys, get_affected_sections

    changed = get_changed_answer_keys(saved_answers, submitted_answers)
    stale = get_affected_sections(changed)
"""

from tedos.refinement.dependency_map import (
    ANSWER_DEPENDENCIES,
    CONTENT_SECTIONS,
    get_affected_sections,
    get_all_section_keys,
    get_changed_answer_keys,
    get_section_metadata,
    plan_regeneration,
)
from tedos.refinement.section_graph import (
    FIELD_DEPENDENCIES,
    SECTION_DEPENDENCY_MAP,
    check_dependency_impact,
    get_dependent_sections,
    get_downstream_sections,
    resolve_placeholders,
)

__all__ = [
    "ANSWER_DEPENDENCIES",
    "CONTENT_SECTIONS",
    "FIELD_DEPENDENCIES",
    "SECTION_DEPENDENCY_MAP",
    "check_dependency_impact",
    "get_affected_sections",
    "get_all_section_keys",
    "get_changed_answer_keys",
    "get_dependent_sections",
    "get_downstream_sections",
    "get_section_metadata",
    "plan_regeneration",
    "resolve_placeholders",
]
