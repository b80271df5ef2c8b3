"""HTTP surface: the FastAPI app and its request/response models."""
