"""CategoryRule class and the fixed category/owner table."""

from typing import List


class CategoryRule:
    """A work category, its owner, and the keywords that select it."""

    def __init__(self, category: str, owner: str, keywords: List[str]):
        self.category = category
        self.owner = owner
        self.keywords = keywords

    @property
    def display_name(self) -> str:
        return f"{self.category} ({self.owner})"


OTHER_CATEGORY = "Autres"
UNASSIGNED_OWNER = "À assigner"

# Evaluated in order: first rule with a matching keyword wins
CATEGORY_RULES = [
    CategoryRule(
        "Visibilité/Électrique",
        "Jessy",
        ["visibilite", "visibilité", "electrique", "électrique"],
    ),
    CategoryRule(
        "Freins/Pneumatique/Camion",
        "Sebastien",
        ["freins", "frein", "pneumatique", "camion"],
    ),
    CategoryRule(
        "Agricole/Hydraulique agricole",
        "Simon",
        ["agricole", "hydraulique agricole"],
    ),
    CategoryRule(
        "Conformité/VAD/Loi 430",
        "Jean-Philippe",
        ["conformite", "conformité", "vad", "loi 430"],
    ),
    CategoryRule(
        "Soudure/Structure",
        "Maxime",
        ["soudure", "structure"],
    ),
]
