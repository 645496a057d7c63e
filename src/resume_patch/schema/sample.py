from __future__ import annotations

import copy
from typing import Any

from resume_patch.schema.resume import ResumeData, default_resume_tree

# Overlaid on the default tree; keys left out keep their default values.
SAMPLE_RESUME: dict[str, Any] = {
    "picture": {"url": "https://i.imgur.com/o4Jpt1p.jpeg", "size": 100},
    "basics": {
        "name": "David Kowalski",
        "headline": "Game Developer | Unity & Unreal Engine Specialist",
        "email": "david.kowalski@email.com",
        "phone": "+1 (555) 291-4756",
        "location": "Seattle, WA",
        "website": {"url": "https://davidkowalski.games", "label": "davidkowalski.games"},
        "customFields": [
            {
                "id": "cf1",
                "icon": "github-logo",
                "text": "github.com/dkowalski-dev",
                "link": "https://github.com/dkowalski-dev",
            }
        ],
    },
    "summary": {
        "title": "Professional Summary",
        "content": (
            "<p>Game developer with 5+ years of professional experience building "
            "gameplay systems in Unity and Unreal Engine for PC, console and mobile.</p>"
        ),
    },
    "sections": {
        "profiles": {
            "title": "Online Presence",
            "columns": 2,
            "items": [
                {
                    "id": "profile1",
                    "icon": "github-logo",
                    "network": "GitHub",
                    "username": "dkowalski-dev",
                    "website": {
                        "url": "https://github.com/dkowalski-dev",
                        "label": "github.com/dkowalski-dev",
                    },
                },
                {
                    "id": "profile2",
                    "icon": "linkedin-logo",
                    "network": "LinkedIn",
                    "username": "davidkowalski",
                    "website": {
                        "url": "https://linkedin.com/in/davidkowalski",
                        "label": "linkedin.com/in/davidkowalski",
                    },
                },
            ],
        },
        "experience": {
            "title": "Professional Experience",
            "items": [
                {
                    "id": "exp1",
                    "company": "Cascade Studios",
                    "position": "Senior Game Developer",
                    "location": "Seattle, WA",
                    "period": "March 2022 - Present",
                    "description": (
                        "<ul><li>Lead gameplay programmer on an unannounced action-adventure "
                        "title built in Unreal Engine 5</li><li>Built the core combat system "
                        "and enemy AI behaviour trees</li></ul>"
                    ),
                },
                {
                    "id": "exp2",
                    "company": "Pixel Forge Interactive",
                    "position": "Game Developer",
                    "location": "Bellevue, WA",
                    "period": "June 2020 - February 2022",
                    "description": (
                        "<ul><li>Core developer on a sci-fi roguelike with 500K+ sales on "
                        "Steam</li><li>Implemented procedural level generation in Unity and "
                        "C#</li></ul>"
                    ),
                },
            ],
        },
        "education": {
            "title": "Education",
            "items": [
                {
                    "id": "edu1",
                    "school": "University of Washington",
                    "degree": "Bachelor of Science",
                    "area": "Computer Science",
                    "grade": "3.6 GPA",
                    "location": "Seattle, WA",
                    "period": "2014 - 2018",
                }
            ],
        },
        "projects": {
            "title": "Notable Projects",
            "items": [
                {
                    "id": "proj1",
                    "name": "Open Source: Unity Dialogue Framework",
                    "period": "2021 - 2023",
                    "website": {
                        "url": "https://github.com/dkowalski-dev/unity-dialogue",
                        "label": "View on GitHub",
                    },
                }
            ],
        },
        "skills": {
            "title": "Technical Skills",
            "items": [
                {
                    "id": "skill1",
                    "name": "Unreal Engine",
                    "proficiency": "Expert",
                    "level": 5,
                    "keywords": ["C++", "Blueprints"],
                },
                {
                    "id": "skill2",
                    "name": "Unity",
                    "proficiency": "Expert",
                    "level": 5,
                    "keywords": ["C#", "Shader Graph"],
                },
            ],
        },
        "languages": {
            "title": "Languages",
            "items": [
                {"id": "lang1", "language": "English", "fluency": "Native", "level": 5},
                {"id": "lang2", "language": "Polish", "fluency": "B2", "level": 3},
            ],
        },
        "awards": {
            "title": "Awards",
            "items": [
                {
                    "id": "award1",
                    "title": "Best Gameplay - Ludum Dare 48",
                    "awarder": "Ludum Dare",
                    "date": "April 2021",
                }
            ],
        },
    },
    "metadata": {"template": "onyx", "notes": ""},
}


def _overlay(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    # Objects merge key by key, arrays and scalars are replaced.
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _overlay(base[key], value)
        else:
            base[key] = copy.deepcopy(value)
    return base


def sample_resume_tree() -> dict[str, Any]:
    return _overlay(default_resume_tree(), SAMPLE_RESUME)


def sample_resume() -> ResumeData:
    """A populated resume, used to seed new documents and in demos."""
    return ResumeData.model_validate(sample_resume_tree())
