"""Character rules: aggregation, progression, allocation, inventory, learning and money."""
