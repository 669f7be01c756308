# services/prompts.py
"""
Prompt templates shared by every AI provider.
"""

SKILL_CATEGORIES = [
    "Frontend", "Backend", "AI", "ML", "Database", "DevOps", "Git",
    "Azure", "AWS", "Learning", "Problem Solving", "Bug Fix", "Other",
]

COMPLEXITY_LEVELS = ["Easy", "Medium", "Hard"]

# Long report text is expensive to read aloud
REPORT_MAX_CHARS = 1500


def create_analysis_prompt(title: str, description: str) -> str:
    categories = "/".join(SKILL_CATEGORIES)
    complexity = "/".join(COMPLEXITY_LEVELS)
    return f"""
Analyze this work entry and extract structured information.

=== WORK ENTRY ===
Title: {title}
Description: {description}

=== REQUIRED FIELDS ===
1. extracted_skills: list of objects with name, category ({categories}) and confidence (0-1)
2. technologies: list of technology names
3. problems_solved: number of problems or issues solved (estimate from the content)
4. accomplishments: list of key accomplishments
5. productivity: object with hours_spent (estimate), tasks_completed (count) and complexity ({complexity})

=== OUTPUT FORMAT (strict JSON) ===
{{
  "extracted_skills": [
    {{"name": "React", "category": "Frontend", "confidence": 0.95}},
    {{"name": "API Integration", "category": "Backend", "confidence": 0.88}}
  ],
  "technologies": ["React", "FastAPI", "MongoDB"],
  "problems_solved": 3,
  "accomplishments": ["Built user authentication", "Optimized database queries"],
  "productivity": {{"hours_spent": 4, "tasks_completed": 2, "complexity": "Medium"}}
}}

Do not include commentary or markdown. Return only JSON.
"""


def create_solution_prompt(query: str, context: str) -> str:
    return f"""Based on these similar bugs I've solved before, help me with this new issue:

QUERY: {query}

SIMILAR PAST SOLUTIONS:
{context}

Please provide:
1. A short and effective suggested solution based on the similar bugs
2. Key steps to resolve the issue

Format your response clearly with sections."""


def create_report_prompt(data_context: str) -> str:
    return f"""Generate a productivity report based on this data:

{data_context}

Write a quick summary under {REPORT_MAX_CHARS} characters. No preamble. Keep the tone casual,
be specific and use the keywords from the data. Use these sections:
1. **Executive Summary**: Overview of the period
2. **Key Accomplishments**: Major achievements
3. **Skills Development**: Skills learned and improved (categorized)
4. **Technology Stack**: Technologies used and proficiency
5. **Problem Solving**: Analysis of problems solved
6. **Productivity Metrics**: Task completion, time management insights
7. **Areas for Growth**: Suggestions for improvement
8. **Recommendations**: Next steps and focus areas

Make it motivating and data-driven. Use specific numbers and be encouraging."""
