"""Evaluation prompt rendering."""

from __future__ import annotations

from ..schemas import ELIGIBILITY_VALUES, ProfileInput

EVALUATION_DIMENSIONS: tuple[str, ...] = (
    "Technical skills level",
    "Experience relevance",
    "Overall readiness for positions",
    "Growth potential",
)

RESPONSE_SHAPE = """{
  "strengths": ["strength 1", "strength 2", "strength 3"],
  "weaknesses": ["weakness 1", "weakness 2"],
  "suggestions": ["suggestion 1", "suggestion 2", "suggestion 3"],
  "readinessScore": 75,
  "eligibility": "Eligible"
}"""

PROMPT_TEMPLATE = """You are an expert recruiter and career coach evaluating a student's profile for a tech position.

STUDENT PROFILE:
- Name: {full_name}
- Skills: {skills}
- Experience: {experience}
- Education: {education}
- Bio: {bio}

Based on this profile, provide evaluation in JSON format with these EXACT fields:
{response_shape}

IMPORTANT:
- strengths: exactly 3 items
- weaknesses: exactly 2 items
- suggestions: exactly 3 items
- readinessScore: integer 0-100
- eligibility: must be exactly one of: {eligibility_values}
- Return ONLY valid JSON, no extra text

Evaluation based on:
{dimensions}
"""


class PromptBuilder:
    """Render a profile into the single-turn evaluation request."""

    def build(self, profile: ProfileInput) -> str:
        return PROMPT_TEMPLATE.format(
            full_name=profile.full_name,
            skills=profile.skills,
            experience=profile.experience,
            education=profile.education,
            bio=profile.bio,
            response_shape=RESPONSE_SHAPE,
            eligibility_values=", ".join(f'"{value}"' for value in ELIGIBILITY_VALUES),
            dimensions="\n".join(f"- {dimension}" for dimension in EVALUATION_DIMENSIONS),
        )
