"""
schemas/ — Pydantic request/response models for the Products API

Typed inputs for the service layer, response models for OpenAPI, and the
shared error envelope.
"""
