"""Prompt for problem statement analysis."""

PROBLEM_STATEMENT_ANALYZER_PROMPT = """\
You are an AI assistant that analyzes problem statements and generates structured data for a project discovery platform.

Analyze the following problem statement and extract structured information:

Problem Statement: {problem_statement}

Guidelines:
- tags should be lowercase and concise
- techStack should only contain real technologies or methodologies, not abstract themes
- summary should be objective and not exceed 120 words
- approach should break down the problem into logical solution steps
- difficultyLevel should be a single value from: easy, medium, hard

Extract the following information:
1. Tags: Descriptive keywords about the problem (themes, domain, purpose)
2. Tech Stack: Actual technologies, programming languages, frameworks, or methods
3. Summary: Short, clear summary describing the problem and expected solution
4. Approach: Ordered list of steps to solve the problem
5. Difficulty Level: Assessment based on technical complexity and resource needs

Respond with structured data only."""

# Gemini response schema (OpenAPI subset)
RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "tags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Descriptive keywords about the problem (themes, domain, purpose)",
        },
        "techStack": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Technologies, languages, frameworks, or methods that could solve it",
        },
        "summary": {
            "type": "STRING",
            "description": "A short, clear summary (3-4 sentences) of the problem and expected solution",
        },
        "approach": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Ordered steps explaining how to approach the problem",
        },
        "difficultyLevel": {
            "type": "STRING",
            "enum": ["easy", "medium", "hard"],
            "description": "Difficulty based on technical complexity and resource needs",
        },
    },
    "required": ["tags", "techStack", "summary", "approach", "difficultyLevel"],
}


def build_prompt(problem_statement: str) -> str:
    """Render the analyzer prompt for one problem statement."""
    return PROBLEM_STATEMENT_ANALYZER_PROMPT.format(problem_statement=problem_statement)
