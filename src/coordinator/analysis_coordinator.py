# src/coordinator/analysis_coordinator.py — v1
"""Cache-first analysis coordinator.

Sequences cache lookup, per-section extraction, completeness scoring and
the optional AI quality assessment. Section and cache failures are
recovered here and become data on the AnalysisResult (absent sections,
section errors, stale flag, typed AIError). The only exception that
escapes ``run_analysis`` is a RegistryError for a malformed extractor map.

Every run takes a new generation number. When a newer run starts, the
older one keeps going to completion but its events are no longer
delivered, its result is flagged ``superseded`` and it never writes the
cache.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict, Field

from profilescope.ai.base_analyzer import BaseQualityAnalyzer
from profilescope.ai.errors import classify_ai_error
from profilescope.ai.models import AIError, AIErrorType, AnalysisContext, StructuredResult
from profilescope.cache.base_cache_store import BaseCacheStore
from profilescope.cache.models import CacheEntry
from profilescope.config.settings import Settings
from profilescope.coordinator.events import EventBus, ProgressCallback, ProgressEvent
from profilescope.coordinator.states import AnalysisState, check_transition
from profilescope.core.models import (
    CompletenessBreakdown,
    ExtractionDepth,
    ProfileRecord,
    ScanResult,
    SectionName,
    SectionResult,
)
from profilescope.core.record_builder import ProfileRecordBuilder
from profilescope.dom.document import BaseDocument
from profilescope.extractors.base_extractor import BaseSectionExtractor, ExtractionTimeout
from profilescope.extractors.registry import create_extractors, validate_registry
from profilescope.logging.context import (
    clear_context,
    set_phase_context,
    set_run_context,
    set_section_context,
)
from profilescope.scoring.completeness import CompletenessScorer
from profilescope.scoring.quality import QualityAssessment, assess_quality

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisOptions(BaseModel):
    """Per-run options. ``ai_enabled=None`` defers to AI_ENABLED."""

    model_config = ConfigDict(frozen=True)

    force_refresh: bool = False
    ai_enabled: bool | None = None
    context: AnalysisContext | None = None


class SectionError(BaseModel):
    """A section that degraded to absent because its extractor failed."""

    model_config = ConfigDict(frozen=True)

    section: SectionName
    phase: str
    error_type: str
    message: str


class AnalysisResult(BaseModel):
    """Terminal outcome of one run. Always carries a completeness breakdown."""

    model_config = ConfigDict(frozen=True)

    profile_id: str
    generation: int
    state: AnalysisState
    breakdown: CompletenessBreakdown
    quality: QualityAssessment | None = None
    ai_error: AIError | None = None
    from_cache: bool = False
    stale: bool = False
    superseded: bool = False
    record: ProfileRecord | None = None
    section_errors: list[SectionError] = Field(default_factory=list)
    estimate: CompletenessBreakdown | None = None
    completed_at: datetime

    @property
    def score(self) -> int:
        return self.breakdown.score


class _Run:
    """Mutable bookkeeping of one run; never shared outside the coordinator."""

    def __init__(self, profile_id: str, generation: int) -> None:
        self.profile_id = profile_id
        self.generation = generation
        self.state = AnalysisState.INIT
        self.section_errors: list[SectionError] = []


class AnalysisCoordinator:
    """The only component a UI layer talks to.

    Args:
        settings: Application settings (TTL, timeouts, AI defaults).
        cache_store: Cache backend. Ignored when CACHE_ENABLED is false.
        analyzer: AI capability. Created from settings on first AI run if None.
        extractors: Section -> extractor map. Defaults to the registry.
        clock: Source of timezone-aware "now" for timestamps and TTL checks.
    """

    def __init__(
        self,
        settings: Settings,
        cache_store: BaseCacheStore | None,
        analyzer: BaseQualityAnalyzer | None = None,
        extractors: Mapping[SectionName, BaseSectionExtractor] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._cache = cache_store if settings.cache_enabled else None
        self._analyzer = analyzer
        if extractors is None:
            self._extractors = create_extractors(settings)
        else:
            validate_registry(extractors)
            self._extractors = dict(extractors)
        self._clock = clock or _utcnow
        self._scorer = CompletenessScorer()
        self._events = EventBus()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def sections(self) -> list[SectionName]:
        return list(self._extractors)

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """Receive a ProgressEvent on every state transition of the current run."""
        return self._events.subscribe(callback)

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    async def run_analysis(
        self,
        profile_id: str,
        document: BaseDocument,
        options: AnalysisOptions | None = None,
    ) -> AnalysisResult:
        """Analyze ``document`` for ``profile_id``, cache first.

        Raises:
            RegistryError: If the extractor map is malformed.
        """
        options = options or AnalysisOptions()
        validate_registry(self._extractors)
        self._generation += 1
        run = _Run(profile_id, self._generation)
        ai_enabled = self._settings.ai_enabled if options.ai_enabled is None else options.ai_enabled

        set_run_context(profile_id, run.generation)
        logger.info(
            "Starting analysis (ai=%s, force_refresh=%s)", ai_enabled, options.force_refresh,
        )
        try:
            return await self._run(run, document, options, ai_enabled)
        finally:
            clear_context()

    async def _run(
        self,
        run: _Run,
        document: BaseDocument,
        options: AnalysisOptions,
        ai_enabled: bool,
    ) -> AnalysisResult:
        # --- CACHE_CHECK ---
        await self._transition(run, AnalysisState.CACHE_CHECK)
        cached = await self._check_cache(run, document, options, ai_enabled)
        if cached is not None:
            await self._transition(run, AnalysisState.CACHE_HIT, {
                "score": cached.completeness.score,
                "quality": cached.ai_result.score if cached.ai_result else None,
            })
            return await self._finish(
                run, AnalysisState.DONE,
                breakdown=cached.completeness,
                quality=cached.ai_result,
                record=cached.profile_record,
                from_cache=True,
            )
        await self._transition(run, AnalysisState.CACHE_MISS)

        # --- SCANNING ---
        await self._transition(run, AnalysisState.SCANNING, {
            "sections": [name.value for name in self._extractors],
        })
        scans = await self._run_phase(run, document, "scan")
        estimate = self._scorer.score(self._build_record(run.profile_id, scans))

        # --- EXTRACTING ---
        await self._transition(run, AnalysisState.EXTRACTING, {
            "estimate": estimate.score,
            "available": {name.value: result.exists for name, result in scans.items()},
        })
        results = await self._run_phase(run, document, "extract_deep" if ai_enabled else "extract")
        record = self._build_record(run.profile_id, results)

        # --- SCORING ---
        await self._transition(run, AnalysisState.SCORING, {
            "sections_found": sum(1 for r in record.sections.values() if r.exists),
            "section_errors": len(run.section_errors),
        })
        breakdown = self._scorer.score(record)
        logger.info("Completeness score %d (%s)", breakdown.score, breakdown.level)

        if not ai_enabled:
            await self._transition(run, AnalysisState.AI_DISABLED, {"score": breakdown.score})
            previous = await self._peek(run.profile_id)
            carried = (
                previous.ai_result
                if previous is not None and previous.content_hash == record.content_hash
                else None
            )
            await self._write_cache(run, record, breakdown, carried)
            return await self._finish(
                run, AnalysisState.DONE,
                breakdown=breakdown, quality=carried, record=record, estimate=estimate,
            )

        # --- AI_ANALYZING ---
        await self._transition(run, AnalysisState.AI_ANALYZING, {"score": breakdown.score})
        outcome = await self._analyze(record, options)

        if isinstance(outcome, StructuredResult):
            quality = assess_quality(outcome, record)
            logger.info("Quality score %.1f (raw %.1f)", quality.score, quality.raw_score)
            await self._write_cache(run, record, breakdown, quality)
            return await self._finish(
                run, AnalysisState.DONE,
                breakdown=breakdown, quality=quality, record=record, estimate=estimate,
            )

        # --- AI_FAILED ---
        previous = await self._peek(run.profile_id)
        fallback_status = await self._fallback_status(run.profile_id, previous, record)
        await self._transition(run, AnalysisState.AI_FAILED, {
            "error": outcome.model_dump(mode="json"),
            "fallback_status": fallback_status,
        })
        if previous is not None and previous.ai_result is not None:
            logger.info(
                "Falling back to stale AI result from %s (%s)",
                previous.timestamp.isoformat(), fallback_status,
            )
            return await self._finish(
                run, AnalysisState.DONE_WITH_STALE_CACHE,
                breakdown=breakdown, quality=previous.ai_result, ai_error=outcome,
                record=record, estimate=estimate, stale=True,
            )
        return await self._finish(
            run, AnalysisState.DONE_WITHOUT_AI,
            breakdown=breakdown, ai_error=outcome, record=record, estimate=estimate,
        )

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    async def _check_cache(
        self,
        run: _Run,
        document: BaseDocument,
        options: AnalysisOptions,
        ai_enabled: bool,
    ) -> CacheEntry | None:
        """Valid cached entry for the current page content, or None.

        The content hash comes from a shallow ``extract()`` pass over every
        section. That pass only reads the tree: it never activates controls,
        never waits and records no section errors. Scanning, deep extraction,
        scoring and AI are all skipped on a hit.
        """
        if self._cache is None:
            return None
        if options.force_refresh:
            logger.info("Force refresh: skipping cache lookup")
            return None
        fingerprint = self._build_record(
            run.profile_id, await self._run_phase(run, document, "extract", record_errors=False),
        )
        try:
            lookup = await self._cache.lookup(
                run.profile_id, fingerprint.content_hash, self._clock(),
            )
        except Exception as e:
            logger.warning("Cache lookup failed, treating as miss: %s", e)
            return None
        if not lookup.hit or lookup.entry is None:
            return None
        if ai_enabled and lookup.entry.ai_result is None:
            logger.info("Cached entry has no AI result, re-analyzing")
            return None
        return lookup.entry

    async def _run_phase(
        self,
        run: _Run,
        document: BaseDocument,
        phase: str,
        record_errors: bool = True,
    ) -> dict[SectionName, SectionResult]:
        """Run one extractor phase for every section as independent tasks."""
        names = list(self._extractors)
        outcomes = await asyncio.gather(
            *(self._run_section(name, phase, document) for name in names),
            return_exceptions=True,
        )
        depth = {
            "scan": ExtractionDepth.SCAN,
            "extract": ExtractionDepth.SHALLOW,
            "extract_deep": ExtractionDepth.DEEP,
        }[phase]
        results: dict[SectionName, SectionResult] = {}
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, SectionResult):
                results[name] = outcome
                continue
            if isinstance(outcome, ScanResult):
                results[name] = SectionResult.from_scan(outcome)
                continue
            if isinstance(outcome, BaseException) and not isinstance(outcome, Exception):
                raise outcome
            error = outcome if isinstance(outcome, Exception) else TypeError(
                f"extractor returned {type(outcome).__name__}"
            )
            logger.warning("Section %s failed during %s: %s", name.value, phase, error)
            if record_errors:
                run.section_errors.append(SectionError(
                    section=name,
                    phase=phase,
                    error_type=type(error).__name__,
                    message=str(error),
                ))
            results[name] = SectionResult.absent(name, depth)
        return results

    async def _run_section(
        self,
        name: SectionName,
        phase: str,
        document: BaseDocument,
    ) -> SectionResult | ScanResult:
        set_section_context(name.value)
        extractor = self._extractors[name]
        operation: Callable[[BaseDocument], Awaitable[Any]] = getattr(extractor, phase)
        timeout_s = self._settings.section_task_timeout_s
        try:
            return await asyncio.wait_for(operation(document), timeout=timeout_s)
        except asyncio.TimeoutError as e:
            raise ExtractionTimeout(name, timeout_s) from e

    def _build_record(
        self,
        profile_id: str,
        results: Mapping[SectionName, SectionResult],
    ) -> ProfileRecord:
        builder = ProfileRecordBuilder(profile_id, self._extractors)
        for name, result in results.items():
            builder.set_section(name, result)
        return builder.freeze(self._clock())

    async def _analyze(
        self,
        record: ProfileRecord,
        options: AnalysisOptions,
    ) -> StructuredResult | AIError:
        analyzer = self._get_analyzer()
        context = options.context or AnalysisContext(
            target_role=self._settings.target_role,
            seniority_level=self._settings.seniority_level,
            custom_instructions=self._settings.custom_instructions,
        )
        payloads = {name: result.payload() for name, result in record.sections.items()}
        timeout_s = self._settings.ai_timeout_s
        try:
            return await asyncio.wait_for(analyzer.analyze(payloads, context), timeout=timeout_s)
        except asyncio.TimeoutError:
            logger.warning("AI analysis timed out after %.0fs", timeout_s)
            return AIError(
                type=AIErrorType.NETWORK,
                message=f"AI analysis timed out after {timeout_s:.0f}s",
            )
        except Exception as e:
            logger.warning("AI analyzer raised %s: %s", type(e).__name__, e)
            return classify_ai_error(e)

    def _get_analyzer(self) -> BaseQualityAnalyzer:
        if self._analyzer is None:
            from profilescope.ai.llm_analyzer import create_quality_analyzer
            self._analyzer = create_quality_analyzer(self._settings)
        return self._analyzer

    # ------------------------------------------------------------------
    # Cache helpers
    # ------------------------------------------------------------------

    async def _peek(self, profile_id: str) -> CacheEntry | None:
        if self._cache is None:
            return None
        try:
            return await self._cache.peek(profile_id)
        except Exception as e:
            logger.warning("Cache read failed: %s", e)
            return None

    async def _fallback_status(
        self,
        profile_id: str,
        previous: CacheEntry | None,
        record: ProfileRecord,
    ) -> str:
        """Validity of the stale entry against the current content and clock."""
        if previous is None:
            return "miss"
        try:
            lookup = await self._cache.lookup(profile_id, record.content_hash, self._clock())
        except Exception as e:
            logger.warning("Cache lookup failed: %s", e)
            return "unknown"
        return lookup.status

    async def _write_cache(
        self,
        run: _Run,
        record: ProfileRecord,
        breakdown: CompletenessBreakdown,
        quality: QualityAssessment | None,
    ) -> None:
        if self._cache is None:
            return
        if not self._is_current(run):
            logger.info("Superseded run, not writing cache")
            return
        entry = CacheEntry(
            profile_id=run.profile_id,
            profile_record=record,
            completeness=breakdown,
            ai_result=quality,
            timestamp=self._clock(),
            ttl_days=self._settings.cache_ttl_days,
        )
        try:
            await self._cache.put(run.profile_id, entry)
        except Exception as e:
            logger.warning("Cache write failed: %s", e)

    # ------------------------------------------------------------------
    # State + events
    # ------------------------------------------------------------------

    def _is_current(self, run: _Run) -> bool:
        return run.generation == self._generation

    async def _transition(
        self,
        run: _Run,
        state: AnalysisState,
        payload: dict[str, Any] | None = None,
    ) -> None:
        check_transition(run.state, state)
        logger.debug("%s -> %s", run.state.value, state.value)
        run.state = state
        set_phase_context(state.value)
        if not self._is_current(run):
            return
        await self._events.publish(ProgressEvent(
            generation=run.generation,
            profile_id=run.profile_id,
            state=state,
            timestamp=self._clock(),
            payload=dict(payload or {}),
        ))

    async def _finish(
        self,
        run: _Run,
        state: AnalysisState,
        breakdown: CompletenessBreakdown,
        quality: QualityAssessment | None = None,
        ai_error: AIError | None = None,
        record: ProfileRecord | None = None,
        estimate: CompletenessBreakdown | None = None,
        from_cache: bool = False,
        stale: bool = False,
    ) -> AnalysisResult:
        await self._transition(run, state, {
            "score": breakdown.score,
            "quality": quality.score if quality else None,
            "from_cache": from_cache,
            "stale": stale,
            "ai_error": ai_error.type.value if ai_error else None,
        })
        superseded = not self._is_current(run)
        if superseded:
            logger.info("Run superseded by generation %d, discarding", self._generation)
        logger.info("Analysis finished in state %s (score=%d)", state.value, breakdown.score)
        return AnalysisResult(
            profile_id=run.profile_id,
            generation=run.generation,
            state=state,
            breakdown=breakdown,
            quality=quality,
            ai_error=ai_error,
            from_cache=from_cache,
            stale=stale,
            superseded=superseded,
            record=record,
            section_errors=list(run.section_errors),
            estimate=estimate,
            completed_at=self._clock(),
        )
