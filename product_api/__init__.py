"""
product_api — Products REST API

A FastAPI service that exposes product records (id, name, price,
availability) over JSON, backed by a relational database through
SQLAlchemy.
"""

__version__ = "1.0.0"
