"""Prompt builder — fills the analysis template from metadata and README."""

from __future__ import annotations

from repo_star_advisor.domain.entities import ReadmeContent, RepositoryMetadata

ANALYSIS_PROMPT = """\
You are analyzing a GitHub repository to decide if it should be starred. Here's the information:

Repository: {name}
Owner: {owner}
Description: {description}
Language: {language}
Current Stars: {stars}
Created: {created_at}

README/Content:
{readme}

Please analyze this repository step by step:

1. ANALYSIS: First, provide your detailed analysis of the repository considering:
   - Is it useful, innovative, or well-documented?
   - Does it solve a real problem?
   - Is the code quality likely to be good based on the README?
   - Would this be valuable to developers?

2. DECISION: Then, respond with EXACTLY one of these options:
   - "STAR: [reason]" if it should be starred
   - "SKIP: [reason]" if it should not be starred

Format your response like this:
ANALYSIS: [your detailed thinking here]
DECISION: STAR/SKIP: [brief reason]
"""


def build_analysis_prompt(metadata: RepositoryMetadata, readme: ReadmeContent) -> str:
    """Return the prompt for *metadata*; identical inputs give identical text."""
    return ANALYSIS_PROMPT.format(
        name=metadata.name,
        owner=metadata.owner_login,
        description=metadata.description or "No description",
        language=metadata.language or "Not specified",
        stars=metadata.stargazers_count,
        created_at=metadata.created_at,
        readme=readme.text,
    )
