from __future__ import annotations

from resume_analyzer.schemas.analysis import TIP_CATEGORIES, TIP_PRIORITIES

PROBE_PROMPT = 'respond with: {"test":true}'

_CATEGORY_ENUM = "|".join(TIP_CATEGORIES)
_PRIORITY_ENUM = "|".join(TIP_PRIORITIES)

OUTPUT_SCHEMA = (
    "{\n"
    '  "matchScore": <number 0-100>,\n'
    '  "missingKeywords": {\n'
    '    "hardSkills": [<array of technical skills/tools missing>],\n'
    '    "softSkills": [<array of soft skills missing>],\n'
    '    "certifications": [<array of certifications that would help>]\n'
    "  },\n"
    '  "foundKeywords": {\n'
    '    "hardSkills": [<array of technical skills/tools found>],\n'
    '    "softSkills": [<array of soft skills found>],\n'
    '    "certifications": [<array of certifications found>]\n'
    "  },\n"
    '  "actionableTips": [\n'
    "    {\n"
    f'      "category": "<{_CATEGORY_ENUM}>",\n'
    '      "suggestion": "<specific actionable tip>",\n'
    f'      "priority": "<{_PRIORITY_ENUM}>"\n'
    "    }\n"
    "  ],\n"
    '  "summary": "<2-3 sentence overall assessment>"\n'
    "}"
)

_JD_SCORING = (
    "1. **Match Score**: Score the compatibility of the resume with the job description above (0-100)."
)
_QUALITY_SCORING = (
    "1. **Match Score**: No job description was provided. Score the overall quality of the resume (0-100)."
)


def build_analysis_prompt(resume_text: str, job_description: str | None = None) -> str:
    jd = (job_description or "").strip()

    sections = [
        "You are an expert resume analyst and career coach. "
        "Analyze resumes and provide detailed, actionable feedback.",
        "Analyze the following resume and provide a detailed assessment in JSON format. "
        "Avoid commenting on any dates.",
        f"**RESUME TEXT:**\n{resume_text}",
    ]
    if jd:
        sections.append(f"**JOB DESCRIPTION:**\n{jd}\n\nCompare the resume against this job description.")

    sections.append(f"**REQUIRED JSON OUTPUT FORMAT:**\n{OUTPUT_SCHEMA}")
    sections.append(
        "**ANALYSIS CRITERIA:**\n"
        f"{_JD_SCORING if jd else _QUALITY_SCORING}\n"
        "2. **Keywords**: Identify technical skills, soft skills, and certifications.\n"
        "3. **Tips**: Focus on:\n"
        "   - Formatting improvements (bullet points, consistency)\n"
        "   - Content enhancements (quantify achievements, action verbs)\n"
        "   - Keyword optimization (ATS compatibility)\n"
        "   - Impact statements (results-oriented language)\n"
        "   - Structure (clear sections, logical flow)\n"
        f"   Each tip category must be exactly one of: {', '.join(TIP_CATEGORIES)}.\n"
        f"   Each tip priority must be exactly one of: {', '.join(TIP_PRIORITIES)}.\n"
        "4. **Summary**: Provide constructive, encouraging feedback."
    )
    sections.append("Return ONLY a single valid JSON object matching the exact format above.")
    return "\n\n".join(sections)
