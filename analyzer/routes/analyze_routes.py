from flask import Blueprint, request, jsonify
from werkzeug.exceptions import MethodNotAllowed
import logging

from analyzer.config import get_provider, load_settings
from analyzer.errors import AnalysisError, MethodNotAllowedError
from analyzer.schemas import parse_request
from analyzer.services.analysis_orchestrator import analyze_contract as run_analysis

analyze_bp = Blueprint('analyze', __name__, url_prefix='/api')
logger = logging.getLogger(__name__)


def _analyze(provider_name=None):
    # URL provider, then body, then environment: an unknown provider path is
    # a 404 and a bad body is a 400 whatever the server configuration.
    if provider_name is not None:
        get_provider(provider_name)
    analysis_request = parse_request(request.get_json(silent=True))
    settings = load_settings(provider_name)
    logger.info(
        f"Analysis requested: provider={settings.provider.name}, "
        f"{len(analysis_request.contractText)} chars"
    )
    result = run_analysis(analysis_request.contractText, settings)
    return jsonify(result.model_dump()), 200


@analyze_bp.route('/analyze', methods=['POST'])
def analyze():
    """Score a contract with the default provider (LLM_PROVIDER)."""
    return _analyze()


@analyze_bp.route('/analyze/<provider>', methods=['POST'])
def analyze_with_provider(provider):
    """Score a contract with the provider named in the URL."""
    return _analyze(provider)


@analyze_bp.route('/health', methods=['GET'])
def health():
    """Report which backend is selected and whether its credential is set."""
    settings = load_settings()
    return jsonify({
        'status': 'ok',
        'provider': settings.provider.name,
        'model': settings.model,
        'configured': settings.configured,
    })


@analyze_bp.app_errorhandler(AnalysisError)
def handle_analysis_error(error):
    if error.status_code >= 500:
        logger.error(f"{type(error).__name__}: {error}")
    else:
        logger.info(f"Rejected request: {type(error).__name__}: {error}")
    return jsonify(error.to_dict()), error.status_code


@analyze_bp.app_errorhandler(MethodNotAllowed)
def handle_method_not_allowed(error):
    response = jsonify(MethodNotAllowedError().to_dict())
    response.status_code = 405
    if error.valid_methods:
        response.headers['Allow'] = ', '.join(error.valid_methods)
    return response
