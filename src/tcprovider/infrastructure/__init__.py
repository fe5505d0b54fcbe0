"""Infrastructure layer: connectivity, resilience and admission control."""
