# src/extractors/registry.py — v1
"""Static section -> extractor map consumed by the coordinator.

A malformed registry is a programming error and the only condition that
aborts an analysis run.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from profilescope.core.models import SectionName
from profilescope.extractors.about_extractor import AboutExtractor
from profilescope.extractors.base_extractor import BaseSectionExtractor
from profilescope.extractors.certifications_extractor import CertificationsExtractor
from profilescope.extractors.education_extractor import EducationExtractor
from profilescope.extractors.experience_extractor import ExperienceExtractor
from profilescope.extractors.featured_extractor import FeaturedExtractor
from profilescope.extractors.headline_extractor import HeadlineExtractor
from profilescope.extractors.photo_extractor import PhotoExtractor
from profilescope.extractors.projects_extractor import ProjectsExtractor
from profilescope.extractors.recommendations_extractor import RecommendationsExtractor
from profilescope.extractors.skills_extractor import SkillsExtractor
from profilescope.locator.count_reconciler import CountReconciler
from profilescope.locator.section_locator import SectionLocator

if TYPE_CHECKING:
    from profilescope.config.settings import Settings


class RegistryError(Exception):
    """Raised when the extractor registry is malformed."""


# Registry maps section -> extractor class.
_EXTRACTOR_REGISTRY: dict[SectionName, type[BaseSectionExtractor]] = {}


def _register_defaults() -> None:
    """Register built-in extractors in section order."""
    for cls in [PhotoExtractor, HeadlineExtractor, AboutExtractor,
                ExperienceExtractor, SkillsExtractor, EducationExtractor,
                RecommendationsExtractor, CertificationsExtractor,
                ProjectsExtractor, FeaturedExtractor]:
        _EXTRACTOR_REGISTRY[cls.section] = cls


_register_defaults()


def registered_sections() -> list[SectionName]:
    return [name for name in SectionName if name in _EXTRACTOR_REGISTRY]


def register_extractor(section: SectionName, cls: type[BaseSectionExtractor]) -> None:
    """Register (or replace) the extractor for a section."""
    _EXTRACTOR_REGISTRY[SectionName(section)] = cls


def validate_registry(registry: Mapping[object, object]) -> None:
    """Check the section -> extractor invariants.

    Raises:
        RegistryError: On an empty registry, an unknown section key, a
            non-extractor value, or an extractor bound to another section.
    """
    if not registry:
        raise RegistryError("Extractor registry is empty")
    errors: list[str] = []
    for key, value in registry.items():
        if not isinstance(key, SectionName):
            errors.append(f"unknown section key {key!r}")
            continue
        extractor_section = getattr(value, "section", None)
        if isinstance(value, type):
            if not issubclass(value, BaseSectionExtractor):
                errors.append(f"{key.value}: {value!r} is not a section extractor")
                continue
        elif not isinstance(value, BaseSectionExtractor):
            errors.append(f"{key.value}: {value!r} is not a section extractor")
            continue
        if extractor_section is not key:
            errors.append(f"{key.value}: extractor declares section {extractor_section!r}")
    if errors:
        raise RegistryError("; ".join(errors))


def create_extractors(
    settings: Settings | None = None,
    registry: Mapping[SectionName, type[BaseSectionExtractor]] | None = None,
) -> dict[SectionName, BaseSectionExtractor]:
    """Instantiate one extractor per registered section, sharing locator and reconciler."""
    classes = registry if registry is not None else _EXTRACTOR_REGISTRY
    validate_registry(classes)
    lookahead = settings.locator_sibling_lookahead if settings else 5
    wait_timeout_s = settings.section_wait_timeout_s if settings else 3.0
    poll_interval_s = settings.section_poll_interval_s if settings else 0.1
    locator = SectionLocator(sibling_lookahead=lookahead)
    reconciler = CountReconciler()
    return {
        name: cls(
            locator=locator,
            reconciler=reconciler,
            wait_timeout_s=wait_timeout_s,
            poll_interval_s=poll_interval_s,
        )
        for name, cls in sorted(classes.items(), key=lambda kv: list(SectionName).index(kv[0]))
    }
