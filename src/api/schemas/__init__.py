"""
API schemas - Pydantic request/response models
"""
