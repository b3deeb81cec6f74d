"""Output layer — Rich rendering, quiet lines, and JSON for ServiceResult."""
