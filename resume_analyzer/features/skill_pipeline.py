from __future__ import annotations

from dataclasses import dataclass, field

from resume_analyzer.schemas.resume import ResumeRecord


@dataclass(slots=True, frozen=True)
class SkillSet:
    hard_skills: list[str] = field(default_factory=list)
    soft_skills: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)

    @property
    def all_skills(self) -> list[str]:
        # Certifications stay out of the matching corpus; they rarely appear verbatim in ads.
        return [*self.hard_skills, *self.soft_skills]


def extract_skills(record: ResumeRecord) -> SkillSet:
    analysis = record.analysis
    if analysis is None:
        return SkillSet()
    found = analysis.found_keywords
    return SkillSet(
        hard_skills=list(found.hard_skills),
        soft_skills=list(found.soft_skills),
        certifications=list(found.certifications),
    )
