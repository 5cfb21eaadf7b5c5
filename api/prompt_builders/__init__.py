"""
App prompt builders: build provider prompts using the library core template.
All prompt content and templates live here; services pass the built prompt to the provider.
"""

from api.prompt_builders.quiz_advisor import build_quiz_advisor_prompt
from api.prompt_builders.learning_path import build_learning_path_prompt
from api.prompt_builders.doubt import build_doubt_prompt

__all__ = [
    "build_quiz_advisor_prompt",
    "build_learning_path_prompt",
    "build_doubt_prompt",
]
