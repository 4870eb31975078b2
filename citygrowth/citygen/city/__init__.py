"""City generation orchestration."""
from citygrowth.citygen.city.city_generator import (CityGenerator,
                                                    CitySnapshot,
                                                    GenerationState)

__all__ = ['CityGenerator', 'CitySnapshot', 'GenerationState']
