from __future__ import annotations

from dataclasses import dataclass

DEMO_USERNAME = "demo_chef"
DEMO_PASSWORD = "password123"


@dataclass(frozen=True)
class SampleIngredient:
    name: str
    unit: str


@dataclass(frozen=True)
class SampleRecipeLine:
    name: str
    unit: str
    quantity: str


@dataclass(frozen=True)
class SampleRecipe:
    name: str
    servings: int
    time_needed_minutes: int
    ingredients: tuple[SampleRecipeLine, ...]
    instructions: tuple[str, ...]


SAMPLE_INGREDIENTS: tuple[SampleIngredient, ...] = (
    SampleIngredient("Flour", "cup"),
    SampleIngredient("Sugar", "cup"),
    SampleIngredient("Milk", "cup"),
    SampleIngredient("Egg", "piece"),
    SampleIngredient("Butter", "tbsp"),
    SampleIngredient("Spaghetti", "g"),
    SampleIngredient("Canned Tomatoes", "can"),
    SampleIngredient("Garlic", "clove"),
    SampleIngredient("Olive Oil", "tbsp"),
)

SAMPLE_RECIPES: tuple[SampleRecipe, ...] = (
    SampleRecipe(
        name="Pancakes",
        servings=4,
        time_needed_minutes=20,
        ingredients=(
            SampleRecipeLine("Flour", "cup", "2"),
            SampleRecipeLine("Sugar", "cup", "1/4"),
            SampleRecipeLine("Milk", "cup", "1 1/2"),
            SampleRecipeLine("Egg", "piece", "2"),
            SampleRecipeLine("Butter", "tbsp", "3"),
        ),
        instructions=(
            "Whisk the flour and sugar together.",
            "Beat in the milk, eggs and melted butter until smooth.",
            "Cook ladlefuls on a hot buttered pan until golden on both sides.",
        ),
    ),
    SampleRecipe(
        name="Tomato Spaghetti",
        servings=2,
        time_needed_minutes=25,
        ingredients=(
            SampleRecipeLine("Spaghetti", "g", "200"),
            SampleRecipeLine("Canned Tomatoes", "can", "1"),
            SampleRecipeLine("Garlic", "clove", "2"),
            SampleRecipeLine("Olive Oil", "tbsp", "2"),
        ),
        instructions=(
            "Boil the spaghetti in salted water until al dente.",
            "Fry the sliced garlic in olive oil, then add the tomatoes and simmer for 10 minutes.",
            "Toss the drained pasta through the sauce.",
        ),
    ),
    SampleRecipe(
        name="Scrambled Eggs",
        servings=1,
        time_needed_minutes=10,
        ingredients=(
            SampleRecipeLine("Egg", "piece", "3"),
            SampleRecipeLine("Milk", "cup", "1/4"),
            SampleRecipeLine("Butter", "tbsp", "1"),
        ),
        instructions=(
            "Beat the eggs with the milk.",
            "Cook gently in butter, stirring, until just set.",
        ),
    ),
)
