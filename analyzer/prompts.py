"""
Prompt templates for the contract scoring request.
"""
from analyzer.rubric import BASE_SCORE, RISK_DEDUCTIONS, SCORE_BANDS


def _deduction_lines() -> str:
    return "\n".join(f"- {risk} → -{points}" for risk, points in RISK_DEDUCTIONS)


def _band_lines() -> str:
    lines = []
    upper = 100
    for lower, label in SCORE_BANDS:
        lines.append(f'- {lower}-{upper} → "{label}"')
        upper = lower - 1
    return "\n".join(lines)


SYSTEM_PROMPT = f'''
You are an AI contract-risk evaluator. Your job is to analyze the agreement text and subtract points from a base score of {BASE_SCORE} every time you detect a risk.

SCORING RULES:
Start with {BASE_SCORE} points. Subtract points based on the risks you detect. The score must NEVER go below 0.

Use these deductions:
{_deduction_lines()}

RISK ZONES:
{_band_lines()}

OUTPUT FORMAT:
Return ONLY this JSON structure:
{{
  "score": <number>,
  "scoreLabel": "<label>",
  "summary": "<short summary>",
  "highlights": ["point1", "point2"],
  "issues": [
    {{ "id": 1, "title": "Issue", "description": "Details" }}
  ],
  "clauses": [
    {{ "title": "Clause Name", "text": "Extracted text" }}
  ]
}}
'''

USER_PROMPT_TEMPLATE = "Analyze this contract and return ONLY JSON:\n\n{contract_text}"


def build_messages(contract_text: str) -> list:
    """
    Build the chat messages for one analysis request.

    The contract text is embedded verbatim; it is not truncated or cleaned.
    """
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": USER_PROMPT_TEMPLATE.format(contract_text=contract_text)},
    ]
