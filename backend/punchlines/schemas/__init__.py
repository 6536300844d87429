"""API Schemas - pydantic request/response models."""
