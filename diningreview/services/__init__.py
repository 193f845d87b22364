"""Domain services: review lifecycle, score aggregation, ranking, registries."""
