# src/dtoshield/config.py

# Directories never descended into (gitwildmatch patterns, root-relative)
DEFAULT_PRUNE_PATTERNS = [
    ".*/",
    "node_modules/",
]

ACCEPTED_EXTENSIONS = (".ts", ".js")

# Used when no custom filename pattern is given; any one match is enough
DEFAULT_NAME_PATTERNS = ("request.ts", "dto.ts")

CONTENT_MARKER = r"@ApiProperty\s*\("

CHARS_PER_TOKEN = 4

# Generated output is assumed to be 4/5 of the input
OUTPUT_RATIO_NUMERATOR = 4
OUTPUT_RATIO_DENOMINATOR = 5

# USD per 1M tokens
MODEL_PRICING = {
    "gemini-2.5-flash": {"input_per_million": 0.3, "output_per_million": 2.5},
    "gemini-2.5-pro": {"input_per_million": 1.25, "output_per_million": 5.0},
}

DEFAULT_MODEL = "gemini-2.5-flash"

DEFAULT_RECIPE = "security"

API_KEY_ENV = "GOOGLE_GENERATIVE_AI_API_KEY"

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
