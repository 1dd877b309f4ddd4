# src/dtoshield/recipes/__init__.py
from dataclasses import dataclass
from typing import Callable, Dict

from dtoshield.errors import UnknownRecipeError
from dtoshield.models import Instruction
from dtoshield.recipes.classic import build_classic_prompt
from dtoshield.recipes.custom_decorators import build_custom_decorators_prompt
from dtoshield.recipes.security import build_security_prompt


@dataclass(frozen=True)
class Recipe:
    """A named instruction builder: (file_name, file_content) -> Instruction."""
    name: str
    description: str
    build: Callable[[str, str], Instruction]


RECIPES: Dict[str, Recipe] = {
    r.name: r
    for r in (
        Recipe("security", "Rule-based security validation (structured reply)", build_security_prompt),
        Recipe("custom-decorators", "Prefer the shared validation decorators", build_custom_decorators_prompt),
        Recipe("classic", "Single prompt, validators with security comments", build_classic_prompt),
    )
}


def get_recipe(name: str) -> Recipe:
    try:
        return RECIPES[name]
    except KeyError:
        raise UnknownRecipeError(name, RECIPES.keys()) from None
