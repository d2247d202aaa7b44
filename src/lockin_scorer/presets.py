"""Reference assessment presets for quick comparison.

Each preset rates a real or hypothetical technology on the nine
entrenchment dimensions of the equal-weight-9 strategy.
"""

from .exceptions import PresetNotFoundError
from .schema import Preset, ScoringStrategy


def _preset(name: str, description: str, values: list[int]) -> Preset:
    keys = (
        "regulatoryCapture",
        "infrastructureHardening",
        "supplyChainStandardization",
        "corporateConsolidation",
        "pathDependency",
        "aiAutomationEmbedding",
        "internationalExpansion",
        "slaughterInertia",
        "breedingLockIn",
    )
    return Preset(
        name=name,
        description=description,
        strategy=ScoringStrategy.EQUAL_WEIGHT_9,
        values=dict(zip(keys, values)),
    )


PRESETS: tuple[Preset, ...] = (
    _preset("Insect Farming 2024", "Industrial insect production for feed and food",
            [65, 70, 60, 75, 65, 45, 70, 60, 65]),
    _preset("AI Shrimp 2020", "Early AI-driven shrimp aquaculture platforms",
            [15, 20, 10, 25, 15, 30, 15, 10, 12]),
    _preset("Wildlife AI 2018", "First drone and computer-vision wildlife management pilots",
            [5, 8, 3, 10, 5, 15, 8, 3, 4]),
    _preset("Lab-Grown Meat 2024", "Cultivated meat before large-scale production",
            [25, 15, 10, 30, 20, 10, 25, 5, 5]),
    _preset("Precision Fermentation 2025", "Animal-free proteins from engineered microbes",
            [30, 25, 20, 40, 30, 25, 40, 10, 0]),
    _preset("Cultured Leather 2024", "Lab-grown leather and hide alternatives",
            [20, 10, 15, 35, 25, 20, 20, 10, 0]),
    _preset("Automated Dairy 2023", "Robotic milking and automated dairy operations",
            [70, 65, 75, 70, 80, 35, 60, 65, 70]),
    _preset("Vertical Aquaculture 2024", "Indoor recirculating fish farms",
            [40, 45, 35, 50, 40, 45, 30, 20, 15]),
    _preset("Chicken Industry (Baseline)", "Present-day industrial chicken production",
            [90, 95, 90, 85, 95, 60, 85, 90, 95]),
    _preset("Early Research Tech", "A technology still in the laboratory",
            [5, 5, 5, 10, 5, 5, 5, 2, 2]),
    _preset("Reset to Middle", "Every dimension at the midpoint",
            [50, 50, 50, 50, 50, 50, 50, 50, 50]),
)


def list_presets() -> tuple[Preset, ...]:
    return PRESETS


def get_preset(name: str) -> Preset:
    """Look up a preset by name, ignoring case and surrounding whitespace.

    Raises:
        PresetNotFoundError: If no preset has that name.
    """
    wanted = name.strip().lower()
    for preset in PRESETS:
        if preset.name.lower() == wanted:
            return preset
    raise PresetNotFoundError(name)
