"""Domain layer: schemas, resource records and asynchronous tasks."""
