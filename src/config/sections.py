# src/config/sections.py — v1
"""Declarative section catalogue.

One SectionProfile per logical section: the human-readable label, the ranked
structural selectors, anchor marker ids, item shapes and the keywords used
when parsing counts. The markup of the source page drifts without notice, so
every list is ordered most-specific first and may grow over time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from profilescope.core.models import SectionName

# Generic item shapes, tried in order by the count reconciler.
DEFAULT_ITEM_SELECTORS: tuple[str, ...] = (
    ".pvs-list__paged-list-item",
    "li.artdeco-list__item",
    'div[data-view-name="profile-component-entity"]',
    ".pvs-entity",
)

# Expansion ("show all") controls, tried in order. ``{slug}`` is replaced with
# the section's details slug.
SHOW_ALL_CONTROL_SELECTORS: tuple[str, ...] = (
    'a[href*="/details/{slug}"]',
    '[aria-label*="Show all"]',
    'a[id*="navigation-index-Show-all"]',
    ".pvs-list__footer-wrapper a",
    ".pvs-list__footer-wrapper button",
)

# Inline "see more" text toggles.
SHOW_MORE_CONTROL_SELECTORS: tuple[str, ...] = (
    "button.inline-show-more-text__button",
    'button[aria-label*="more"]',
    '[class*="inline-show-more-text"] button',
)

ANCHOR_CLASS = "pv-profile-card__anchor"


@dataclass(frozen=True)
class SectionProfile:
    """Where and how to find one logical section."""

    name: SectionName
    label: str
    selectors: tuple[str, ...] = ()
    anchor_ids: tuple[str, ...] = ()
    item_selectors: tuple[str, ...] = DEFAULT_ITEM_SELECTORS
    count_keywords: tuple[str, ...] = ()
    details_slugs: tuple[str, ...] = ()
    # Selector that marks section-specific items inside an anchor sibling.
    item_marker: str | None = None
    # Skip the anchor's enclosing <section> and inspect siblings only.
    siblings_only: bool = False
    # Search headings for the label (top-card sections have no heading).
    heading_search: bool = True
    # Single-value sections report 1/1 counts when present.
    single_value: bool = False
    min_sibling_text: int = 20
    extra: dict[str, tuple[str, ...]] = field(default_factory=dict)


SECTION_PROFILES: dict[SectionName, SectionProfile] = {
    SectionName.PHOTO: SectionProfile(
        name=SectionName.PHOTO,
        label="Photo",
        selectors=(
            ".pv-top-card-profile-picture img",
            "img.profile-photo-edit__preview",
            ".pv-top-card__photo img",
            "img.pv-top-card-profile-picture__image",
            'img[class*="profile-photo"]',
        ),
        heading_search=False,
        single_value=True,
    ),
    SectionName.HEADLINE: SectionProfile(
        name=SectionName.HEADLINE,
        label="Headline",
        selectors=(
            ".text-body-medium[data-generated-suggestion-target]",
            ".pv-text-details__left-panel .text-body-medium",
            "section[data-member-id] .text-body-medium",
            ".pv-top-card .text-body-medium",
        ),
        heading_search=False,
        single_value=True,
    ),
    SectionName.ABOUT: SectionProfile(
        name=SectionName.ABOUT,
        label="About",
        selectors=(
            'section[data-section="summary"]',
            "section.pv-about-section",
            "section:has(> div#about)",
            "section.summary",
        ),
        anchor_ids=("about",),
        item_selectors=(),
        single_value=True,
        extra={
            "text": (
                '[class*="inline-show-more-text"] span[aria-hidden="true"]',
                '.pv-shared-text-with-see-more span[aria-hidden="true"]',
                '.pv-about__summary-text span[aria-hidden="true"]',
                '.pvs-list__outer-container span[aria-hidden="true"]',
            ),
        },
    ),
    SectionName.EXPERIENCE: SectionProfile(
        name=SectionName.EXPERIENCE,
        label="Experience",
        selectors=(
            'section[data-section="experience"]',
            "section#experience-section",
            "section:has(> div#experience)",
        ),
        anchor_ids=("experience",),
        item_selectors=(
            'div[data-view-name="profile-component-entity"]',
            ".pvs-list__paged-list-item",
            "li.artdeco-list__item",
            ".pvs-entity",
            "li.pv-entity__position-group-pager",
        ),
        count_keywords=("experiences", "positions", "roles", "experience"),
        details_slugs=("experience",),
    ),
    SectionName.SKILLS: SectionProfile(
        name=SectionName.SKILLS,
        label="Skills",
        selectors=(
            'section[data-section="skills"]',
            "section.pv-skill-categories-section",
            "section:has(> div#skills)",
        ),
        anchor_ids=("skills",),
        item_selectors=(
            'a[data-field="skill_card_skill_topic"]',
            ".pvs-list__paged-list-item",
            "li.artdeco-list__item",
            ".pv-skill-category-entity",
            ".pv-skill-entity",
        ),
        count_keywords=("skills", "skill"),
        details_slugs=("skills",),
        item_marker='[data-field="skill_card_skill_topic"]',
        siblings_only=True,
    ),
    SectionName.EDUCATION: SectionProfile(
        name=SectionName.EDUCATION,
        label="Education",
        selectors=(
            'section[data-section="education"]',
            "section#education-section",
            "section:has(> div#education)",
        ),
        anchor_ids=("education",),
        count_keywords=("educations", "schools", "education"),
        details_slugs=("education",),
    ),
    SectionName.RECOMMENDATIONS: SectionProfile(
        name=SectionName.RECOMMENDATIONS,
        label="Recommendations",
        selectors=(
            'section[data-section="recommendations"]',
            "section.pv-recommendations-section",
            "section:has(> div#recommendations)",
        ),
        anchor_ids=("recommendations",),
        count_keywords=("recommendations", "recommendation"),
        details_slugs=("recommendations",),
        extra={
            "received": ('[aria-label*="received"]', '[aria-label*="Received"]'),
            "given": ('[aria-label*="given"]', '[aria-label*="Given"]'),
        },
    ),
    SectionName.CERTIFICATIONS: SectionProfile(
        name=SectionName.CERTIFICATIONS,
        label="Licenses & certifications",
        selectors=(
            'section[data-section="certifications"]',
            "section#certifications-section",
            "section:has(> div#licenses_and_certifications)",
            "section:has(> div#certifications)",
        ),
        anchor_ids=(
            "licenses_and_certifications",
            "certifications",
            "licenses-and-certifications",
        ),
        count_keywords=("certifications", "licenses", "certificates"),
        details_slugs=("certifications", "licenses"),
    ),
    SectionName.PROJECTS: SectionProfile(
        name=SectionName.PROJECTS,
        label="Projects",
        selectors=(
            'section[data-section="projects"]',
            "section#projects-section",
            "section:has(> div#projects)",
        ),
        anchor_ids=("projects",),
        count_keywords=("projects", "project"),
        details_slugs=("projects",),
    ),
    SectionName.FEATURED: SectionProfile(
        name=SectionName.FEATURED,
        label="Featured",
        selectors=(
            'section[data-section="featured"]',
            "section.pv-featured-container",
            "section:has(> div#featured)",
        ),
        anchor_ids=("featured",),
        item_selectors=(
            ".pvs-list__paged-list-item",
            "li.artdeco-list__item",
            ".pv-featured-container__item",
            "li.artdeco-carousel__item",
        ),
        count_keywords=("featured", "items"),
        details_slugs=("featured",),
    ),
}


def get_profile(name: SectionName) -> SectionProfile:
    return SECTION_PROFILES[name]


def derived_anchor_ids(profile: SectionProfile) -> tuple[str, ...]:
    """Anchor marker ids: explicit ids first, then ids derived from the label."""
    label = profile.label.lower().replace("&", "and")
    words = label.split()
    candidates = list(profile.anchor_ids) + [
        "-".join(words),
        "".join(words),
        "_".join(words),
        words[0] if words else "",
        label,
    ]
    seen: list[str] = []
    for candidate in candidates:
        if candidate and candidate not in seen:
            seen.append(candidate)
    return tuple(seen)
