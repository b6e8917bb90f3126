"""
Models

- models.domain: dataclasses for rows of the relational store (API server)
- models.api: pydantic request/response models
- models.records: pydantic models for local keyed-store records
"""
