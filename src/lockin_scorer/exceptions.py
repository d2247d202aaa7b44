"""
Custom exceptions for the lock-in scorer.
"""
class LockInScorerError(Exception):
    """Base exception for the lock-in scorer."""
    pass

class DimensionValidationError(LockInScorerError):
    """Exception raised when a dimension rating set cannot be accepted."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class DimensionValueError(DimensionValidationError):
    """Exception raised for a dimension value that is not a finite number."""
    def __init__(self, dimension: str, value):
        self.dimension = dimension
        self.value = value
        super().__init__(f"Dimension '{dimension}' must be a number, got {value!r}")

class DimensionSchemaError(DimensionValidationError):
    """Exception raised for mixed dimension schemas or an unknown strategy."""
    pass

class TrajectoryLookupError(LockInScorerError):
    """Exception raised when a requested trajectory does not exist."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class SpeciesNotFoundError(TrajectoryLookupError):
    """Exception raised for a species missing from the trajectory store."""
    def __init__(self, species: str):
        self.species = species
        super().__init__(f"Species data not found for {species}")

class TechnologyNotFoundError(TrajectoryLookupError):
    """Exception raised for a technology missing for a known species."""
    def __init__(self, technology: str, species: str):
        self.technology = technology
        self.species = species
        super().__init__(f"Trajectory data not found for {technology} in {species}")

class TrajectoryLoadError(LockInScorerError):
    """Exception raised when the trajectory dataset cannot be loaded."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class PresetNotFoundError(LockInScorerError):
    """Exception raised for an unknown assessment preset name."""
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Preset not found: {name}")
