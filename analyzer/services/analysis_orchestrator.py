"""
Analysis orchestrator - runs one contract through the scoring pipeline.
Config check, cache lookup, LLM call, JSON parse, normalization.
"""
import logging

from analyzer.cache import analysis_cache, make_cache_key
from analyzer.config import Settings
from analyzer.errors import AnalysisError, AnalysisFailedError
from analyzer.rubric import label_for_score
from analyzer.schemas import AnalysisResult, normalize_result
from analyzer.services import llm_client

logger = logging.getLogger(__name__)


def _apply_rubric_label(result: AnalysisResult) -> AnalysisResult:
    label = label_for_score(result.score)
    if label != result.scoreLabel:
        logger.info(f"Replacing model label '{result.scoreLabel}' with '{label}' for score {result.score}")
    return result.model_copy(update={'scoreLabel': label})


def analyze_contract(contract_text: str, settings: Settings) -> AnalysisResult:
    """
    Score a contract with the configured backend.

    Args:
        contract_text: Validated, non-blank contract text.
        settings: Settings for this request.

    Returns:
        Normalized AnalysisResult.

    Raises:
        ConfigurationError: If the backend credential is missing. Raised
            before any network call.
        UpstreamFormatError: If the backend reply is not a JSON object.
        AnalysisFailedError: For any other failure, carrying its message.
    """
    settings.require_api_key()

    cache_key = None
    if settings.cache_ttl > 0:
        cache_key = make_cache_key(
            settings.provider.name, settings.model, settings.temperature,
            settings.json_mode, settings.enforce_rubric_label, contract_text,
        )
        cached = analysis_cache.get(cache_key)
        if cached is not None:
            logger.info("Returning cached analysis result")
            return cached

    logger.info(
        f"Starting contract analysis: provider={settings.provider.name}, "
        f"{len(contract_text)} chars"
    )

    try:
        raw = llm_client.request_completion(settings, contract_text)
        result = normalize_result(llm_client.parse_json_reply(raw))
    except AnalysisError:
        raise
    except Exception as e:
        logger.error(f"Analysis failed: provider={settings.provider.name}, error={type(e).__name__}: {e}")
        raise AnalysisFailedError(str(e) or type(e).__name__)

    if settings.enforce_rubric_label:
        result = _apply_rubric_label(result)

    logger.info(
        f"Analysis complete: score={result.score}, label={result.scoreLabel}, "
        f"{len(result.issues)} issues"
    )

    if cache_key is not None:
        analysis_cache.set(cache_key, result, ttl=settings.cache_ttl)

    return result
