"""City generation: road growth, building placement and routing."""
