"""
Static content pools.

Read-only catalogs the generator draws from. Exercises carry their own
candidate sets/reps/rest; meals are plain strings grouped by slot.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from .constants import ExerciseCategory, MealSlot


@dataclass(frozen=True)
class ExerciseDefinition:
    """A pool entry. Prescription is drawn from the candidate tuples."""
    name: str
    category: ExerciseCategory
    sets: Tuple[int, ...]
    reps: Tuple[int, ...]
    rest: Tuple[str, ...]


EXERCISE_POOL: Tuple[ExerciseDefinition, ...] = (
    # Upper body
    ExerciseDefinition("Push-ups", ExerciseCategory.UPPER_BODY,
                       (3, 4), (8, 10, 12, 15), ("45 seconds", "60 seconds")),
    ExerciseDefinition("Dumbbell Rows", ExerciseCategory.UPPER_BODY,
                       (3, 4), (8, 10, 12), ("45 seconds", "60 seconds")),
    ExerciseDefinition("Tricep Dips", ExerciseCategory.UPPER_BODY,
                       (3, 4), (10, 12, 15), ("45 seconds", "60 seconds")),
    ExerciseDefinition("Lateral Raises", ExerciseCategory.UPPER_BODY,
                       (3, 4), (10, 12, 15), ("45 seconds", "60 seconds")),

    # Lower body
    ExerciseDefinition("Squats", ExerciseCategory.LOWER_BODY,
                       (3, 4, 5), (10, 12, 15, 20), ("45 seconds", "60 seconds", "90 seconds")),
    ExerciseDefinition("Lunges", ExerciseCategory.LOWER_BODY,
                       (3, 4), (10, 12, 15), ("45 seconds", "60 seconds")),
    ExerciseDefinition("Glute Bridges", ExerciseCategory.LOWER_BODY,
                       (3, 4), (12, 15, 20), ("30 seconds", "45 seconds")),
    ExerciseDefinition("Calf Raises", ExerciseCategory.LOWER_BODY,
                       (3, 4), (15, 20, 25), ("30 seconds", "45 seconds")),

    # Core
    ExerciseDefinition("Plank", ExerciseCategory.CORE,
                       (3, 4), (1,), ("30 seconds", "45 seconds", "60 seconds")),
    ExerciseDefinition("Bicycle Crunches", ExerciseCategory.CORE,
                       (3, 4), (15, 20, 25), ("30 seconds", "45 seconds")),
    ExerciseDefinition("Russian Twists", ExerciseCategory.CORE,
                       (3, 4), (15, 20, 25), ("30 seconds", "45 seconds")),
    ExerciseDefinition("Superman", ExerciseCategory.CORE,
                       (3, 4), (10, 12, 15), ("30 seconds", "45 seconds")),

    # Cardio
    ExerciseDefinition("Mountain Climbers", ExerciseCategory.CARDIO,
                       (3, 4), (20, 25, 30), ("30 seconds", "45 seconds")),
    ExerciseDefinition("Burpees", ExerciseCategory.CARDIO,
                       (3, 4), (8, 10, 12, 15), ("45 seconds", "60 seconds", "90 seconds")),
    ExerciseDefinition("Jumping Jacks", ExerciseCategory.CARDIO,
                       (3, 4), (20, 25, 30), ("30 seconds", "45 seconds")),
)


BREAKFAST_OPTIONS = (
    "Oatmeal with fruits and nuts",
    "Greek yogurt with berries and honey",
    "Avocado toast with poached eggs",
    "Protein smoothie with spinach and banana",
    "Whole grain pancakes with maple syrup",
    "Egg white omelet with vegetables",
    "Chia seed pudding with almond milk",
    "Quinoa breakfast bowl with fresh fruits",
    "Whole grain toast with peanut butter and banana",
    "Breakfast burrito with beans and vegetables",
    "Cottage cheese with peaches and walnuts",
    "Overnight oats with cinnamon and apple",
    "Scrambled eggs with tomatoes and spinach",
    "Pap with moi moi",
    "Akara (bean cakes) with pap",
    "Unripe plantain porridge with vegetables",
)

MID_MORNING_SNACK_OPTIONS = (
    "A handful of cashew nuts",
    "Sliced cucumber with a dash of lemon juice",
    "Apple slices with peanut butter",
    "Garden eggs",
    "Mixed fruit salad",
    "Tigernuts",
    "Orange slices",
    "Hard-boiled egg",
    "Mixed berries",
    "Banana with nut butter",
)

LUNCH_OPTIONS = (
    "Grilled chicken salad with olive oil dressing",
    "Tuna salad sandwich on whole grain bread",
    "Quinoa bowl with roasted vegetables",
    "Turkey and avocado wrap",
    "Lentil soup with whole grain crackers",
    "Chicken and vegetable stir-fry with brown rice",
    "Mediterranean salad with feta cheese",
    "Black bean and sweet potato bowl",
    "Grilled salmon with asparagus",
    "Tofu and vegetable curry with brown rice",
    "Brown rice with grilled chicken and steamed vegetables",
    "Amala with ewedu soup and grilled fish",
    "Ofada rice with vegetable sauce and lean beef",
    "Jollof rice with grilled fish and a side salad",
    "Yam porridge with spinach and smoked fish",
)

AFTERNOON_SNACK_OPTIONS = (
    "Carrot sticks with hummus",
    "Greek yogurt with honey",
    "Boiled groundnuts",
    "Pawpaw slices",
    "Roasted plantain chips",
    "Boiled corn with coconut",
    "Handful of almonds",
    "Cottage cheese with pineapple",
    "Roasted chickpeas",
    "Rice cakes with avocado",
)

DINNER_OPTIONS = (
    "Baked salmon with steamed vegetables",
    "Grilled chicken breast with quinoa and broccoli",
    "Turkey meatballs with zucchini noodles",
    "Baked cod with sweet potato and asparagus",
    "Vegetable stir-fry with tofu and brown rice",
    "Lentil curry with cauliflower rice",
    "Grilled steak with roasted vegetables",
    "Chicken fajitas with bell peppers and onions",
    "Vegetable lasagna with side salad",
    "Turkey chili with mixed beans",
    "Stuffed bell peppers with ground turkey and rice",
    "Vegetable soup with a side of boiled plantains",
    "Okra soup with a small portion of fufu",
    "Egusi soup with a small portion of pounded yam",
    "Steamed vegetables with grilled chicken",
)

MEAL_POOLS: Mapping[MealSlot, Tuple[str, ...]] = MappingProxyType({
    MealSlot.BREAKFAST: BREAKFAST_OPTIONS,
    MealSlot.MID_MORNING_SNACK: MID_MORNING_SNACK_OPTIONS,
    MealSlot.LUNCH: LUNCH_OPTIONS,
    MealSlot.AFTERNOON_SNACK: AFTERNOON_SNACK_OPTIONS,
    MealSlot.DINNER: DINNER_OPTIONS,
})
