from .salary import RegionalSalaryFormatter, SalaryFormatter, estimate_salary_band
from .skill_pipeline import SkillSet, extract_skills

__all__ = [
    "RegionalSalaryFormatter",
    "SalaryFormatter",
    "estimate_salary_band",
    "SkillSet",
    "extract_skills",
]
