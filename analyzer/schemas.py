"""
Request and result schemas.

AnalysisResult never rejects model output: every validator runs in 'before'
mode and replaces unusable values with a default instead of raising.
"""
from typing import Any, List

from pydantic import BaseModel, Field, StrictStr, ValidationError, field_validator

from analyzer.errors import InvalidInputError
from analyzer.rubric import UNKNOWN_LABEL, canonical_label, clamp_score


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class AnalysisRequest(BaseModel):
    """Inbound request body."""
    contractText: StrictStr

    @field_validator('contractText')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("contractText must not be blank")
        return v


class Issue(BaseModel):
    id: int
    title: str = ""
    description: str = ""

    @field_validator('title', 'description', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class Clause(BaseModel):
    title: str = ""
    text: str = ""

    @field_validator('title', 'text', mode='before')
    @classmethod
    def coerce_text(cls, v):
        return _as_text(v)


class AnalysisResult(BaseModel):
    """The response shape returned to clients, whatever the model sent."""
    score: int = 0
    scoreLabel: str = UNKNOWN_LABEL
    summary: str = ""
    highlights: List[str] = Field(default_factory=list)
    issues: List[Issue] = Field(default_factory=list)
    clauses: List[Clause] = Field(default_factory=list)

    @field_validator('score', mode='before')
    @classmethod
    def coerce_score(cls, v):
        return clamp_score(v)

    @field_validator('scoreLabel', mode='before')
    @classmethod
    def coerce_label(cls, v):
        return canonical_label(v)

    @field_validator('summary', mode='before')
    @classmethod
    def coerce_summary(cls, v):
        return _as_text(v)

    @field_validator('highlights', mode='before')
    @classmethod
    def coerce_highlights(cls, v):
        if not isinstance(v, list):
            return []
        highlights = []
        for item in v:
            if isinstance(item, str):
                highlights.append(item)
            elif isinstance(item, (int, float)) and not isinstance(item, bool):
                highlights.append(str(item))
        return highlights

    @field_validator('issues', mode='before')
    @classmethod
    def coerce_issues(cls, v):
        if not isinstance(v, list):
            return []
        issues = []
        for item in v:
            if isinstance(item, str):
                item = {'title': item, 'description': ""}
            elif not isinstance(item, dict):
                continue
            issue_id = item.get('id')
            # Sequential fallback id, matching the position in the kept list
            if isinstance(issue_id, bool) or not isinstance(issue_id, int):
                issue_id = len(issues) + 1
            issues.append({
                'id': issue_id,
                'title': item.get('title'),
                'description': item.get('description'),
            })
        return issues

    @field_validator('clauses', mode='before')
    @classmethod
    def coerce_clauses(cls, v):
        if not isinstance(v, list):
            return []
        return [
            {'title': item.get('title'), 'text': item.get('text')}
            for item in v
            if isinstance(item, dict)
        ]


def parse_request(payload: Any) -> AnalysisRequest:
    """
    Validate an inbound JSON body.

    Args:
        payload: Decoded request JSON (may be None if the body was not JSON).

    Returns:
        Validated AnalysisRequest.

    Raises:
        InvalidInputError: If the body is not an object or contractText is
            missing, not a string, or blank.
    """
    if not isinstance(payload, dict):
        raise InvalidInputError(details="Request body must be a JSON object")
    try:
        return AnalysisRequest.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        raise InvalidInputError(details=first.get('msg', 'contractText is invalid'))


def normalize_result(data: dict) -> AnalysisResult:
    """
    Normalize a parsed model reply into the stable result shape.

    Missing keys fall back to the field defaults; present but mistyped
    values are coerced by the field validators. Unknown keys are dropped.
    """
    known = {name: data[name] for name in AnalysisResult.model_fields if name in data}
    return AnalysisResult.model_validate(known)
