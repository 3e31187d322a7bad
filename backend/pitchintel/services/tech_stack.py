from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List

from ..schemas.brief import JobSignal, TechStackItem

# Order matters: it breaks ties between equally frequent technologies.
TECH_KEYWORDS: List[str] = [
    "React",
    "Node.js",
    "Python",
    "JavaScript",
    "TypeScript",
    "AWS",
    "Docker",
    "Kubernetes",
    "PostgreSQL",
    "MongoDB",
    "Redis",
    "GraphQL",
    "REST API",
    "Microservices",
    "CI/CD",
    "Git",
    "Jenkins",
    "Terraform",
    "Vue.js",
    "Angular",
]

TECH_CATEGORIES: Dict[str, str] = {
    "React": "Frontend",
    "Vue.js": "Frontend",
    "Angular": "Frontend",
    "Node.js": "Backend",
    "Python": "Backend",
    "JavaScript": "Language",
    "TypeScript": "Language",
    "AWS": "Cloud",
    "Docker": "DevOps",
    "Kubernetes": "DevOps",
    "PostgreSQL": "Database",
    "MongoDB": "Database",
    "Redis": "Database",
}

MAX_TECHNOLOGIES = 10
TECH_SOURCE = "Job Analysis"


def category_for(tech: str) -> str:
    return TECH_CATEGORIES.get(tech, "Other")


def confidence_for(count: int) -> str:
    if count > 2:
        return "High"
    if count == 2:
        return "Medium"
    return "Low"


def count_mentions(jobs: Iterable[JobSignal]) -> Dict[str, int]:
    """Number of postings mentioning each keyword (at most one hit per posting)."""
    counts: Dict[str, int] = {}
    for job in jobs:
        text = f"{job.title} {job.description}".lower()
        for tech in TECH_KEYWORDS:
            if tech.lower() in text:
                counts[tech] = counts.get(tech, 0) + 1
    return counts


def infer_tech_stack(
    jobs: Iterable[JobSignal],
    detected_at: datetime | None = None,
) -> List[TechStackItem]:
    """
    Infer the company's technology stack from its job postings.

    Keyword matching is a plain case-insensitive substring test, so
    "Git" also matches "GitHub"; that is accepted noise.
    """
    counts = count_mentions(jobs)
    ranked = sorted(counts.items(), key=lambda kv: (-kv[1], TECH_KEYWORDS.index(kv[0])))
    stamp = (detected_at or datetime.utcnow()).isoformat() + "Z"

    return [
        TechStackItem(
            name=name,
            confidence=confidence_for(count),
            source=TECH_SOURCE,
            category=category_for(name),
            first_detected=stamp,
        )
        for name, count in ranked[:MAX_TECHNOLOGIES]
    ]
