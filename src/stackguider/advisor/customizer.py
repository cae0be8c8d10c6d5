"""Rewrite an implementation prompt around the user's chosen technologies.

Advisor prompts follow the shape "Build X using A, B, C. Create: 1) ...".
``customize_prompt`` swaps the "A, B, C" list for the user's selection and
keeps the instructions around it. Three tiers are tried in order, each one
looser than the last; the final tier always succeeds.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

# Words that open the instruction block after the tech-stack sentence
CONTINUATION_KEYWORDS = ("Create", "Setup", "Build", "Implementation", "Steps", "Step", "1)")

_TECH_SENTENCE = re.compile(
    r"^(?P<description>.*?)\s+using\s+(?P<techs>.*?)\.\s+"
    r"(?P<keyword>" + "|".join(re.escape(k) for k in CONTINUATION_KEYWORDS) + ")",
    re.IGNORECASE | re.DOTALL,
)
_USING_CLAUSE = re.compile(
    r"^(?P<description>.*?)\s+using\s+(?P<rest>.*)$",
    re.IGNORECASE | re.DOTALL,
)


def replace_tech_sentence(prompt: str, tech_list: str) -> str | None:
    """Replace the list in "<desc> using <list>. <keyword>...", keeping the rest."""
    match = _TECH_SENTENCE.match(prompt)
    if match is None:
        return None
    description = match.group("description").strip()
    instructions = prompt[match.start("keyword"):].strip()
    return f"{description} using {tech_list}. {instructions}"


def replace_after_using(prompt: str, tech_list: str) -> str | None:
    """Replace everything after the first "using" with the tech list.

    Whatever followed "using" is dropped, instructions included.
    """
    match = _USING_CLAUSE.match(prompt)
    if match is None:
        return None
    return f"{match.group('description').strip()} using {tech_list}"


def prepend_tech(prompt: str, tech_list: str) -> str:
    return f"Using {tech_list}: {prompt}"


def customize_prompt(prompt: str, selected: Sequence[str]) -> str:
    """Return ``prompt`` rewritten to use the ``selected`` technologies.

    An empty selection returns the prompt unchanged.
    """
    if not selected:
        return prompt

    tech_list = ", ".join(selected)

    customized = replace_tech_sentence(prompt, tech_list)
    if customized is None:
        customized = replace_after_using(prompt, tech_list)
    if customized is None:
        customized = prepend_tech(prompt, tech_list)
    return customized
