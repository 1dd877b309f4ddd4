# src/dtoshield/prompts.py
from typing import Optional

from dtoshield.config import DEFAULT_MODEL, DEFAULT_RECIPE, MODEL_PRICING
from dtoshield.recipes import RECIPES


def _choose(title: str, options, default: str) -> str:
    names = list(options)
    print(f"\n{title}:")
    for i, name in enumerate(names, start=1):
        print(f"{i}. {name}")
    answer = input(f"Select (1-{len(names)}, or press Enter for default '{default}'): ").strip()
    try:
        choice = int(answer)
    except ValueError:
        return default
    if choice < 1 or choice > len(names):
        return default
    return names[choice - 1]


def ask_custom_pattern() -> Optional[str]:
    print("\nCurrent pattern: files containing 'request.ts' OR 'dto.ts' in the filename")
    answer = input("> Enter custom filename pattern (or press Enter for default): ").strip()
    return answer or None


def select_model() -> str:
    return _choose("Available models", MODEL_PRICING, DEFAULT_MODEL)


def select_recipe() -> str:
    return _choose("Available recipes", RECIPES, DEFAULT_RECIPE)


def ask_to_continue() -> bool:
    answer = input("\n> Do you want to continue? (yes/no): ").strip().lower()
    return answer in ("y", "yes")
