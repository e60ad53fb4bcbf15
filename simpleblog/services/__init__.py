"""Services Layer — entity/DTO mapping, update pipeline, collection fetch."""
