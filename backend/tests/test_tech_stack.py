"""
Tests for tech-stack inference from job postings.
"""
import itertools
from datetime import datetime

from pitchintel.schemas.brief import JobSignal
from pitchintel.services.tech_stack import (
    TECH_KEYWORDS,
    category_for,
    confidence_for,
    count_mentions,
    infer_tech_stack,
)

FIXED = datetime(2026, 10, 1, 12, 0, 0)


def job(title: str, description: str = "") -> JobSignal:
    return JobSignal(title=title, description=description)


class TestCounting:

    def test_one_hit_per_posting(self):
        jobs = [job("Python Engineer", "Python, python and more PYTHON")]
        assert count_mentions(jobs) == {"Python": 1}

    def test_case_insensitive_across_title_and_description(self):
        jobs = [job("Backend engineer", "we run on kubernetes and DOCKER")]
        assert count_mentions(jobs) == {"Docker": 1, "Kubernetes": 1}

    def test_confidence_bands(self):
        assert confidence_for(1) == "Low"
        assert confidence_for(2) == "Medium"
        assert confidence_for(3) == "High"
        assert confidence_for(12) == "High"

    def test_categories(self):
        assert category_for("React") == "Frontend"
        assert category_for("Python") == "Backend"
        assert category_for("TypeScript") == "Language"
        assert category_for("AWS") == "Cloud"
        assert category_for("Kubernetes") == "DevOps"
        assert category_for("Redis") == "Database"
        assert category_for("GraphQL") == "Other"
        assert category_for("Terraform") == "Other"


class TestInferTechStack:

    def test_react_and_python_scenario(self):
        jobs = [
            job("React Developer"),
            job("Senior React Engineer"),
            job("React Native Lead"),
            job("Python Engineer"),
            job("Python Data Analyst"),
            job("Office Manager"),
        ]
        stack = infer_tech_stack(jobs, detected_at=FIXED)

        assert [(t.name, t.confidence, t.category) for t in stack] == [
            ("React", "High", "Frontend"),
            ("Python", "Medium", "Backend"),
        ]
        assert all(t.source == "Job Analysis" for t in stack)
        assert all(t.first_detected == "2026-10-01T12:00:00Z" for t in stack)

    def test_no_matches_is_empty(self):
        assert infer_tech_stack([job("Office Manager", "filing and scheduling")]) == []
        assert infer_tech_stack([]) == []

    def test_order_independent_of_job_order(self):
        jobs = [
            job("Go developer", "AWS and Docker"),
            job("Platform", "Docker, Terraform"),
            job("Data", "PostgreSQL and AWS"),
            job("Web", "TypeScript"),
        ]
        expected = [t.name for t in infer_tech_stack(jobs, detected_at=FIXED)]
        for perm in itertools.permutations(jobs):
            assert [t.name for t in infer_tech_stack(list(perm), detected_at=FIXED)] == expected
        # AWS and Docker tie at two; vocabulary order puts AWS first
        assert expected[:2] == ["AWS", "Docker"]

    def test_idempotent(self):
        jobs = [job("Full stack", "React, Node.js, MongoDB"), job("SRE", "Kubernetes")]
        first = infer_tech_stack(jobs, detected_at=FIXED)
        second = infer_tech_stack(jobs, detected_at=FIXED)
        assert first == second

    def test_capped_at_ten_with_non_increasing_counts(self):
        everything = " ".join(TECH_KEYWORDS)
        jobs = [job("Engineer", everything), job("Engineer", "Python React")]
        stack = infer_tech_stack(jobs, detected_at=FIXED)

        assert len(stack) == 10
        assert [t.name for t in stack[:2]] == ["React", "Python"]
        assert stack[0].confidence == "Medium"
        assert all(t.confidence == "Low" for t in stack[2:])
        assert len({t.name for t in stack}) == 10
